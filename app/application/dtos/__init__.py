"""Application DTOs: transient search request/response shapes."""

from app.application.dtos.search import (
    AdapterOutcome,
    AggregatedResults,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchStats,
    SearchSummary,
)

__all__ = [
    "AdapterOutcome",
    "AggregatedResults",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "SearchSummary",
]
