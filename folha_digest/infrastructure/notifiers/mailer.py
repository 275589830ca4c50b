import asyncio
import smtplib
from email.mime.text import MIMEText
from typing import Iterable, Optional

from loguru import logger

from ...config_loader import EmailSettings, load_email_settings
from ...domain.models import ArticleRecord


def build_email_body(articles: Iterable[ArticleRecord]) -> str:
    """One ``"<title> - <link>"`` line per article, in the given order."""
    return "\n".join(article.as_line() for article in articles)


def build_message(body: str, settings: EmailSettings) -> MIMEText:
    msg = MIMEText(body, "plain", "utf-8")
    msg["Subject"] = settings.subject
    msg["From"] = settings.user
    msg["To"] = settings.recipient
    return msg


def _deliver(msg: MIMEText, settings: EmailSettings) -> None:
    if settings.use_ssl:
        server = smtplib.SMTP_SSL(settings.host, settings.port, timeout=settings.timeout)
    else:
        server = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout)

    with server:
        if not settings.use_ssl:
            server.ehlo()
            server.starttls()
            server.ehlo()
        if settings.password:
            server.login(settings.user, settings.password)
        server.sendmail(settings.user, [settings.recipient], msg.as_string())


async def send_news_email(
    articles: Iterable[ArticleRecord],
    settings: Optional[EmailSettings] = None,
) -> bool:
    """
    Email the article list to the configured recipient.

    Opens a fresh SMTP session per call. Failures are logged and reported
    through the return value, never raised.
    """
    settings = settings or load_email_settings()
    if not settings.configured:
        logger.warning("[Email] EMAIL_USER/EMAIL_TO or SMTP host not set, skip sending email.")
        return False

    articles = list(articles)
    msg = build_message(build_email_body(articles), settings)

    logger.info(
        f"[Email] Sending {len(articles)} articles to {settings.recipient} "
        f"via {settings.host}:{settings.port}"
    )
    try:
        await asyncio.to_thread(_deliver, msg, settings)
    except smtplib.SMTPAuthenticationError:
        logger.error("[Email] SMTP authentication failed. Verify EMAIL_USER and EMAIL_PASS.")
        return False
    except (smtplib.SMTPException, OSError) as exc:
        logger.error(f"[Email] Failed to send email: {exc}")
        return False

    logger.info("[Email] Email sent successfully.")
    return True
