"""Scrape-cache-notify pipeline"""

import asyncio
import enum
from datetime import date, datetime
from typing import Awaitable, Callable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from loguru import logger

from ..domain.config_store import ConfigStore
from ..domain.models import ArticleRecord
from ..infrastructure.cache import DailyCache

Scraper = Callable[[int], Awaitable[List[ArticleRecord]]]
Notifier = Callable[[Sequence[ArticleRecord]], Awaitable[bool]]


class PipelineOutcome(str, enum.Enum):
    DELIVERED = "delivered"
    NO_DATA = "no-data"


def make_today(timezone: Optional[str] = None) -> Callable[[], date]:
    """Date key factory: local date, or the date in ``timezone``."""
    if not timezone:
        return date.today
    tz = ZoneInfo(timezone)
    return lambda: datetime.now(tz).date()


class PipelineService:
    """
    Cache lookup, scrape on miss, notify.

    Runs are serialized: a caller that finds a run in progress waits for it
    and then sees the freshly cached result.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        cache: DailyCache,
        scraper: Scraper,
        notifier: Notifier,
        today: Callable[[], date] = date.today,
    ):
        self._config_store = config_store
        self._cache = cache
        self._scraper = scraper
        self._notifier = notifier
        self._today = today
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def _refresh(self) -> List[ArticleRecord]:
        count = self._config_store.current().number_of_articles
        return await self._scraper(count)

    async def run(self) -> PipelineOutcome:
        async with self._lock:
            today = self._today()
            articles = await self._cache.get_or_refresh(today, self._refresh)

            if not articles:
                logger.error("[Pipeline] No articles available, skipping email")
                return PipelineOutcome.NO_DATA

            sent = await self._notifier(articles)
            if sent:
                logger.info(f"[Pipeline] Delivered {len(articles)} articles")
            else:
                logger.warning(f"[Pipeline] Email with {len(articles)} articles was attempted but not confirmed")
            return PipelineOutcome.DELIVERED

    async def run_scheduled(self) -> None:
        """Scheduler job; always returns so the job stays registered."""
        hour = self._config_store.current().hour
        logger.info(f"[Scheduled] Running scheduled scrape and email ({hour:02d}:00)")
        try:
            outcome = await self.run()
        except Exception as e:  # noqa: BLE001
            logger.exception(f"[Scheduled] Scheduled run failed: {e}")
            return

        if outcome is PipelineOutcome.NO_DATA:
            logger.error("[Scheduled] Scrape returned no data during scheduled run")
        else:
            logger.info("[Scheduled] Scheduled run finished")
