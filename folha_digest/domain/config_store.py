"""Process-wide user configuration guarded by a lock"""

import threading
from dataclasses import replace
from typing import Any, Optional

from loguru import logger

from .models import UserConfig


def _is_int(value: Any) -> bool:
    # bool is an int subclass; true/false in JSON is not a valid hour
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_hour(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= 23


def is_valid_article_count(value: Any) -> bool:
    return _is_int(value) and value > 0


class ConfigStore:
    """Holds the current :class:`UserConfig`; last write wins."""

    def __init__(self, initial: Optional[UserConfig] = None):
        self._config = initial or UserConfig()
        self._lock = threading.Lock()

    def current(self) -> UserConfig:
        with self._lock:
            return self._config

    def update(self, hour: Any = None, number_of_articles: Any = None) -> UserConfig:
        """
        Apply a partial update.

        Each field is checked on its own. Missing or invalid values keep the
        previous setting; the update as a whole is never rejected.
        """
        with self._lock:
            config = self._config

            if hour is not None:
                if is_valid_hour(hour):
                    config = replace(config, hour=hour)
                else:
                    logger.warning(f"[Config] Ignoring invalid hour: {hour!r}")

            if number_of_articles is not None:
                if is_valid_article_count(number_of_articles):
                    config = replace(config, number_of_articles=number_of_articles)
                else:
                    logger.warning(f"[Config] Ignoring invalid numberOfArticles: {number_of_articles!r}")

            self._config = config

        logger.info(f"[Config] Configuration updated: {config.to_dict()}")
        return config
