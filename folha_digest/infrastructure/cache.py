"""Day-scoped cache of the last scrape result"""

from datetime import date
from typing import Awaitable, Callable, List, Optional, Sequence

from loguru import logger

from ..domain.models import ArticleRecord, CacheEntry

RefreshFn = Callable[[], Awaitable[Sequence[ArticleRecord]]]


class DailyCache:
    """
    Holds at most one :class:`CacheEntry`.

    Not synchronized; callers serialize access (see ``PipelineService``).
    """

    def __init__(self):
        self._entry: Optional[CacheEntry] = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    async def get_or_refresh(self, today: date, refresh: RefreshFn) -> List[ArticleRecord]:
        if self._entry is not None and self._entry.date == today:
            logger.info(f"[Cache] Using cached news for {today.isoformat()}")
            return list(self._entry.articles)

        articles = tuple(await refresh())
        # stored even when empty: no further scrape until the date changes
        self._entry = CacheEntry(date=today, articles=articles)
        logger.info(f"[Cache] Cached {len(articles)} articles for {today.isoformat()}")
        return list(articles)

    def clear(self) -> None:
        self._entry = None
