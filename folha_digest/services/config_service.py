"""Config updates and schedule re-binding"""

from typing import Any, Optional

from loguru import logger

from ..domain.config_store import ConfigStore
from ..domain.models import UserConfig
from ..infrastructure.scheduler import SchedulerManager

DAILY_JOB_ID = "daily_news_email"


class ConfigService:
    def __init__(self, store: ConfigStore, scheduler_manager: Optional[SchedulerManager] = None):
        self.store = store
        self.scheduler_manager = scheduler_manager

    def current(self) -> UserConfig:
        return self.store.current()

    def update(self, hour: Any = None, number_of_articles: Any = None) -> UserConfig:
        """Apply a partial update; a changed hour moves the daily job."""
        before = self.store.current()
        after = self.store.update(hour=hour, number_of_articles=number_of_articles)

        if after.hour != before.hour and self.scheduler_manager is not None:
            logger.info(f"[Scheduler] Send hour changed {before.hour} -> {after.hour}")
            self.scheduler_manager.reschedule_cron_job(DAILY_JOB_ID, hour=after.hour, minute=0)
        return after
