"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the search use case. All collaborators
(adapter registry, history repository, cache, analytics recorder) are built
here from infrastructure implementations; routes depend only on
get_search_service. Tests override get_search_service with fakes.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.services.result_aggregator import ResultAggregator
from app.application.services.search_analytics_service import AnalyticsRecorder
from app.application.services.suggestion_service import SuggestionService
from app.application.use_cases.search import SearchService
from app.core.config import Settings, get_settings
from app.infrastructure.cache.search_cache import SearchCache
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import (
    AdapterRegistry,
    SearchHistoryRepository,
    build_default_registry,
)


def get_app_settings() -> Settings:
    return get_settings()


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for adapters and the history store (503 when DATABASE_URL is unset)."""
    return get_session_factory()


def get_search_cache(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SearchCache:
    """Typed search cache over app.state.cache (None when Redis is disabled)."""
    return SearchCache(getattr(request.app.state, "cache", None), settings)


def get_adapter_registry(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AdapterRegistry:
    """All nine entity adapters, each opening its own session per call."""
    return build_default_registry(session_factory, settings)


def get_history_repo(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)],
) -> SearchHistoryRepository:
    return SearchHistoryRepository(session_factory)


def get_analytics_recorder(
    request: Request,
    history_repo: Annotated[SearchHistoryRepository, Depends(get_history_repo)],
) -> AnalyticsRecorder:
    """Process-wide recorder on app.state so shutdown can drain pending writes."""
    recorder = getattr(request.app.state, "analytics_recorder", None)
    if recorder is None:
        recorder = AnalyticsRecorder(history_repo)
        request.app.state.analytics_recorder = recorder
    return recorder


def get_suggestion_service(
    history_repo: Annotated[SearchHistoryRepository, Depends(get_history_repo)],
    cache: Annotated[SearchCache, Depends(get_search_cache)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SuggestionService:
    return SuggestionService(history_repo, cache, settings)


def get_search_service(
    registry: Annotated[AdapterRegistry, Depends(get_adapter_registry)],
    cache: Annotated[SearchCache, Depends(get_search_cache)],
    suggestions: Annotated[SuggestionService, Depends(get_suggestion_service)],
    recorder: Annotated[AnalyticsRecorder, Depends(get_analytics_recorder)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SearchService:
    """Search use case wired to PostgreSQL adapters, the history store and Redis."""
    return SearchService(
        aggregator=ResultAggregator(registry),
        cache=cache,
        suggestions=suggestions,
        recorder=recorder,
        settings=settings,
    )
