"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (adapters, history store, cache).
"""

from app.application.interfaces import (
    IAdapterRegistry,
    IAnalyticsRecorder,
    IEntitySearchAdapter,
    ISearchCache,
    ISearchHistoryRepository,
)
from app.application.services import AnalyticsRecorder, ResultAggregator, SuggestionService
from app.application.use_cases import SearchService

__all__ = [
    "AnalyticsRecorder",
    "IAdapterRegistry",
    "IAnalyticsRecorder",
    "IEntitySearchAdapter",
    "ISearchCache",
    "ISearchHistoryRepository",
    "ResultAggregator",
    "SearchService",
    "SuggestionService",
]
