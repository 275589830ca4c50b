"""Shared fixtures"""
from datetime import date
from typing import List, Sequence
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from folha_digest.config_loader import Settings
from folha_digest.domain.config_store import ConfigStore
from folha_digest.domain.models import ArticleRecord
from folha_digest.infrastructure.cache import DailyCache
from folha_digest.infrastructure.rate_limit import RateLimiter
from folha_digest.infrastructure.scheduler import SchedulerManager
from folha_digest.main import create_app
from folha_digest.services.config_service import ConfigService
from folha_digest.services.pipeline_service import PipelineService
from folha_digest.state import AppState


def make_articles(n: int) -> List[ArticleRecord]:
    return [
        ArticleRecord(title=f"Title {i}", link=f"https://www.folha.uol.com.br/noticia-{i}.shtml")
        for i in range(1, n + 1)
    ]


class FakeClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


class FakeScraper:
    """Returns the first ``limit`` of a fixed result list and counts calls."""

    def __init__(self, articles: Sequence[ArticleRecord]):
        self.articles = list(articles)
        self.calls: List[int] = []

    async def __call__(self, limit: int) -> List[ArticleRecord]:
        self.calls.append(limit)
        return self.articles[:limit]


@pytest.fixture
def clock():
    return FakeClock(date(2024, 5, 10))


@pytest.fixture
def scraper():
    return FakeScraper(make_articles(8))


@pytest.fixture
def notifier():
    return AsyncMock(return_value=True)


@pytest.fixture
def config_store():
    return ConfigStore()


@pytest.fixture
def cache():
    return DailyCache()


@pytest.fixture
def pipeline(config_store, cache, scraper, notifier, clock):
    return PipelineService(
        config_store=config_store,
        cache=cache,
        scraper=scraper,
        notifier=notifier,
        today=clock,
    )


@pytest.fixture
def app_state(config_store, cache, pipeline):
    scheduler_manager = SchedulerManager()
    return AppState(
        settings=Settings(),
        config_service=ConfigService(config_store, scheduler_manager),
        cache=cache,
        pipeline=pipeline,
        scheduler_manager=scheduler_manager,
        rate_limiter=RateLimiter(max_requests=5, window_seconds=60),
    )


@pytest.fixture
def client(app_state):
    """Test client without lifespan, so no scheduler is started"""
    return TestClient(create_app(app_state))
