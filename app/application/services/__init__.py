"""Application services: query normalization, aggregation, suggestions, analytics."""

from app.application.services.query_normalizer import (
    extract_terms,
    normalize_query,
    normalize_text,
)
from app.application.services.result_aggregator import ResultAggregator, sort_results
from app.application.services.search_analytics_service import AnalyticsRecorder
from app.application.services.suggestion_service import SuggestionService, merge_unique

__all__ = [
    "AnalyticsRecorder",
    "ResultAggregator",
    "SuggestionService",
    "extract_terms",
    "merge_unique",
    "normalize_query",
    "normalize_text",
    "sort_results",
]
