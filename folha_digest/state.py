"""Application state shared by routes, scheduler and pipeline"""

from dataclasses import dataclass
from functools import partial
from typing import Optional

from .config_loader import Settings, load_settings
from .domain.config_store import ConfigStore
from .infrastructure.cache import DailyCache
from .infrastructure.crawlers.folha import scrape
from .infrastructure.notifiers.mailer import send_news_email
from .infrastructure.rate_limit import RateLimiter
from .infrastructure.scheduler import SchedulerManager
from .services.config_service import ConfigService
from .services.pipeline_service import PipelineService, make_today


@dataclass
class AppState:
    settings: Settings
    config_service: ConfigService
    cache: DailyCache
    pipeline: PipelineService
    scheduler_manager: SchedulerManager
    rate_limiter: RateLimiter

    @classmethod
    def build(cls, settings: Optional[Settings] = None) -> "AppState":
        """Wire the production collaborators from ``settings``."""
        settings = settings or load_settings()

        store = ConfigStore(settings.default_config)
        cache = DailyCache()
        scheduler_manager = SchedulerManager(timezone=settings.timezone)
        pipeline = PipelineService(
            config_store=store,
            cache=cache,
            scraper=partial(scrape, url=settings.source_url, selector=settings.headline_selector),
            notifier=partial(send_news_email, settings=settings.email),
            today=make_today(settings.timezone),
        )

        return cls(
            settings=settings,
            config_service=ConfigService(store, scheduler_manager),
            cache=cache,
            pipeline=pipeline,
            scheduler_manager=scheduler_manager,
            rate_limiter=RateLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds),
        )
