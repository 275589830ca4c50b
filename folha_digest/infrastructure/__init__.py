"""Infrastructure: logging, scheduler, cache, rate limiting"""

from .logging import setup_logging
from .cache import DailyCache
from .rate_limit import RateLimiter
from .scheduler import SchedulerManager

__all__ = ["setup_logging", "DailyCache", "RateLimiter", "SchedulerManager"]
