import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from loguru import logger

from .domain.models import DEFAULT_HOUR, DEFAULT_NUMBER_OF_ARTICLES, UserConfig
from .domain.config_store import is_valid_article_count, is_valid_hour

DEFAULT_SOURCE_URL = "https://www.folha.uol.com.br/"
DEFAULT_HEADLINE_SELECTOR = "a.c-headline__url"
DEFAULT_SMTP_PORT = 587

# EMAIL_SERVICE shortcuts -> (host, port)
WELL_KNOWN_SMTP: Dict[str, Tuple[str, int]] = {
    "gmail": ("smtp.gmail.com", 587),
    "outlook": ("smtp-mail.outlook.com", 587),
    "hotmail": ("smtp-mail.outlook.com", 587),
    "yahoo": ("smtp.mail.yahoo.com", 587),
    "zoho": ("smtp.zoho.com", 587),
}


def _project_root() -> Path:
    # folha_digest/config_loader.py -> project_root
    return Path(__file__).resolve().parents[1]


@dataclass
class EmailSettings:
    host: Optional[str] = None
    port: int = DEFAULT_SMTP_PORT
    use_ssl: bool = False
    user: str = ""
    password: str = ""
    recipient: str = ""
    subject: str = "Últimas notícias da Folha de S.Paulo"
    timeout: float = 30.0

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.recipient)


@dataclass
class Settings:
    """
    Runtime settings read from the environment (and ``.env``).

    The mutable part of the configuration (send hour, article count) lives in
    :class:`~folha_digest.domain.ConfigStore`; ``default_config`` only seeds it.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    source_url: str = DEFAULT_SOURCE_URL
    headline_selector: str = DEFAULT_HEADLINE_SELECTOR
    timezone: Optional[str] = None
    default_config: UserConfig = field(default_factory=UserConfig)
    email: EmailSettings = field(default_factory=EmailSettings)
    rate_limit_max: int = 5
    rate_limit_window_seconds: int = 60
    log_dir: Path = _project_root() / "logs"


def _get_str(name: str, fallback: Optional[str] = None) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return fallback
    return raw.strip()


def _get_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {name}={raw!r}, fallback to {fallback}.")
        return fallback


def _get_bool(name: str, fallback: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return fallback
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _load_default_config() -> UserConfig:
    hour = _get_int("DEFAULT_HOUR", DEFAULT_HOUR)
    if not is_valid_hour(hour):
        logger.warning(f"DEFAULT_HOUR={hour} out of range, fallback to {DEFAULT_HOUR}.")
        hour = DEFAULT_HOUR

    count = _get_int("DEFAULT_NUMBER_OF_ARTICLES", DEFAULT_NUMBER_OF_ARTICLES)
    if not is_valid_article_count(count):
        logger.warning(
            f"DEFAULT_NUMBER_OF_ARTICLES={count} must be positive, "
            f"fallback to {DEFAULT_NUMBER_OF_ARTICLES}."
        )
        count = DEFAULT_NUMBER_OF_ARTICLES

    return UserConfig(hour=hour, number_of_articles=count)


def load_email_settings() -> EmailSettings:
    """
    Resolve the SMTP endpoint.

    ``EMAIL_SMTP_HOST``/``EMAIL_SMTP_PORT`` win; otherwise ``EMAIL_SERVICE``
    is looked up in :data:`WELL_KNOWN_SMTP`.
    """
    host = _get_str("EMAIL_SMTP_HOST")
    port = DEFAULT_SMTP_PORT

    service = (_get_str("EMAIL_SERVICE") or "").lower()
    if service:
        known = WELL_KNOWN_SMTP.get(service)
        if known is None:
            logger.warning(f"Unknown EMAIL_SERVICE {service!r}, set EMAIL_SMTP_HOST explicitly.")
        elif host is None:
            host, port = known

    return EmailSettings(
        host=host,
        port=_get_int("EMAIL_SMTP_PORT", port),
        use_ssl=_get_bool("EMAIL_USE_SSL"),
        user=_get_str("EMAIL_USER", ""),
        password=_get_str("EMAIL_PASS", ""),
        recipient=_get_str("EMAIL_TO", ""),
    )


def load_settings() -> Settings:
    default = Settings()
    log_dir = _get_str("LOG_DIR")

    return Settings(
        host=_get_str("HOST", default.host),
        port=_get_int("PORT", default.port),
        source_url=_get_str("SOURCE_URL", default.source_url),
        headline_selector=_get_str("HEADLINE_SELECTOR", default.headline_selector),
        timezone=_get_str("APP_TIMEZONE"),
        default_config=_load_default_config(),
        email=load_email_settings(),
        rate_limit_max=max(1, _get_int("RATE_LIMIT_MAX", default.rate_limit_max)),
        rate_limit_window_seconds=max(
            1, _get_int("RATE_LIMIT_WINDOW_SECONDS", default.rate_limit_window_seconds)
        ),
        log_dir=Path(log_dir) if log_dir else default.log_dir,
    )
