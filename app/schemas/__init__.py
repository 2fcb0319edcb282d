"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.search import (
    LogQueryRequest,
    LogQueryResponse,
    PopularTermsResponse,
    SearchRequest,
    SearchResponse,
    SearchResultResponse,
    SearchStatsResponse,
    SearchSummaryResponse,
    SuggestionsResponse,
)

__all__ = [
    "HealthResponse",
    "LogQueryRequest",
    "LogQueryResponse",
    "PopularTermsResponse",
    "SearchRequest",
    "SearchResponse",
    "SearchResultResponse",
    "SearchStatsResponse",
    "SearchSummaryResponse",
    "SuggestionsResponse",
]
