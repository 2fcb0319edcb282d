"""Pytest configuration and fixtures for practice-search.

No database or Redis is needed: entity adapters, the history store and the
cache backend are replaced by in-memory fakes. HTTP tests use app.main:app
with get_search_service overridden.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_search_service
from app.application.services.result_aggregator import ResultAggregator
from app.application.services.search_analytics_service import AnalyticsRecorder
from app.application.services.suggestion_service import SuggestionService
from app.application.use_cases.search import SearchService
from app.core.config import Settings
from app.infrastructure.cache.search_cache import SearchCache
from app.infrastructure.persistence.repositories.search_adapters.registry import (
    AdapterRegistry,
)
from app.main import app
from tests.fakes import FakeAdapter, FakeHistoryRepository, InMemoryCache, sample_adapters


@pytest.fixture
def settings() -> Settings:
    return Settings(redis_enabled=False, telemetry_enabled=False)


@pytest.fixture
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def history_repo() -> FakeHistoryRepository:
    return FakeHistoryRepository()


@pytest.fixture
def adapters() -> list[FakeAdapter]:
    return sample_adapters()


@pytest.fixture
def registry(adapters: list[FakeAdapter]) -> AdapterRegistry:
    return AdapterRegistry(adapters)


@pytest.fixture
def search_cache(memory_cache: InMemoryCache, settings: Settings) -> SearchCache:
    return SearchCache(memory_cache, settings)


@pytest.fixture
async def recorder(history_repo: FakeHistoryRepository) -> AnalyticsRecorder:
    recorder = AnalyticsRecorder(history_repo)
    yield recorder
    await recorder.drain()


@pytest.fixture
def search_service(
    registry: AdapterRegistry,
    search_cache: SearchCache,
    history_repo: FakeHistoryRepository,
    recorder: AnalyticsRecorder,
    settings: Settings,
) -> SearchService:
    return SearchService(
        aggregator=ResultAggregator(registry),
        cache=search_cache,
        suggestions=SuggestionService(history_repo, search_cache, settings),
        recorder=recorder,
        settings=settings,
    )


@pytest.fixture
async def client(search_service: SearchService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the search service overridden."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
