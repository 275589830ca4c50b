"""Email notifier tests"""
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from conftest import make_articles
from folha_digest.config_loader import EmailSettings
from folha_digest.infrastructure.notifiers.mailer import build_email_body, build_message, send_news_email

SMTP_PATH = "folha_digest.infrastructure.notifiers.mailer.smtplib.SMTP"


@pytest.fixture
def email_settings():
    return EmailSettings(
        host="smtp.example.com",
        port=587,
        user="bot@example.com",
        password="secret",
        recipient="reader@example.com",
    )


class TestBuildEmailBody:
    def test_one_line_per_article_in_order(self):
        body = build_email_body(make_articles(5))

        lines = body.split("\n")
        assert len(lines) == 5
        assert lines[0] == "Title 1 - https://www.folha.uol.com.br/noticia-1.shtml"
        assert lines[4] == "Title 5 - https://www.folha.uol.com.br/noticia-5.shtml"

    def test_empty_list_gives_empty_body(self, email_settings):
        assert build_email_body([]) == ""
        msg = build_message("", email_settings)
        assert msg["To"] == "reader@example.com"

    def test_message_headers(self, email_settings):
        msg = build_message("x", email_settings)

        assert msg["Subject"] == "Últimas notícias da Folha de S.Paulo"
        assert msg["From"] == "bot@example.com"


class TestSendNewsEmail:
    @pytest.mark.asyncio
    async def test_sends_with_starttls_and_login(self, email_settings):
        with patch(SMTP_PATH) as smtp_cls:
            server = smtp_cls.return_value
            sent = await send_news_email(make_articles(2), settings=email_settings)

        assert sent is True
        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot@example.com", "secret")
        from_addr, to_addrs, _ = server.sendmail.call_args.args
        assert from_addr == "bot@example.com"
        assert to_addrs == ["reader@example.com"]

    @pytest.mark.asyncio
    async def test_ssl_transport(self, email_settings):
        email_settings.use_ssl = True
        email_settings.port = 465
        with patch("folha_digest.infrastructure.notifiers.mailer.smtplib.SMTP_SSL") as ssl_cls:
            sent = await send_news_email(make_articles(1), settings=email_settings)

        assert sent is True
        ssl_cls.return_value.starttls.assert_not_called()
        ssl_cls.return_value.sendmail.assert_called_once()

    @pytest.mark.asyncio
    async def test_transport_failure_returns_false(self, email_settings):
        with patch(SMTP_PATH) as smtp_cls:
            smtp_cls.return_value.sendmail.side_effect = smtplib.SMTPException("rejected")
            sent = await send_news_email(make_articles(2), settings=email_settings)

        assert sent is False

    @pytest.mark.asyncio
    async def test_auth_failure_returns_false(self, email_settings):
        with patch(SMTP_PATH) as smtp_cls:
            smtp_cls.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad")
            sent = await send_news_email(make_articles(2), settings=email_settings)

        assert sent is False

    @pytest.mark.asyncio
    async def test_connection_error_returns_false(self, email_settings):
        with patch(SMTP_PATH, side_effect=OSError("unreachable")):
            assert await send_news_email(make_articles(2), settings=email_settings) is False

    @pytest.mark.asyncio
    async def test_unconfigured_skips_send(self):
        with patch(SMTP_PATH) as smtp_cls:
            sent = await send_news_email(make_articles(2), settings=EmailSettings())

        assert sent is False
        smtp_cls.assert_not_called()
