"""Search API schemas. Wire names are camelCase (totalResults, sortBy, userId, ...)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.search import SearchOptions
from app.core.constants import MAX_POPULAR_TERMS
from app.domain.enums import EntityType, SortBy, SortOrder


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input; serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(CamelModel):
    """Request body for POST /search. Bounds on page and limit are enforced by the service (400)."""

    query: str = Field(..., max_length=500)
    entities: list[EntityType] = Field(default_factory=list)
    filters: dict[str, Any] = Field(default_factory=dict)
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int | None = Field(default=None, description="Defaults to SEARCH_DEFAULT_LIMIT")
    user_id: str | None = None
    include_archived: bool = False

    def to_options(self, default_limit: int) -> SearchOptions:
        return SearchOptions(
            query=self.query,
            entities=frozenset(self.entities),
            filters=dict(self.filters),
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            page=self.page,
            limit=self.limit if self.limit is not None else default_limit,
            user_id=self.user_id,
            include_archived=self.include_archived,
        )


class SearchResultResponse(CamelModel):
    """Single hit. relevance is on its entity's own scale."""

    id: str
    type: EntityType
    title: str
    description: str | None = None
    relevance: float
    metadata: dict[str, Any] = Field(default_factory=dict)
    url: str
    timestamp: datetime | None = None


class SearchStatsResponse(CamelModel):
    """Totals, per-entity counts, timing and autocomplete for one search."""

    total_results: int
    results_by_entity: dict[EntityType, int]
    query_time: int = Field(..., description="Milliseconds spent fanning out and merging")
    suggestions: list[str] = Field(default_factory=list)
    popular_terms: list[str] = Field(default_factory=list)
    degraded_entities: list[EntityType] = Field(
        default_factory=list,
        description="Entity types whose store failed or timed out (counted as 0)",
    )


class SearchResponse(CamelModel):
    """Page of merged results plus stats."""

    results: list[SearchResultResponse]
    stats: SearchStatsResponse


class SuggestionsResponse(CamelModel):
    suggestions: list[str]


class PopularTermsResponse(CamelModel):
    popular_terms: list[str] = Field(..., max_length=MAX_POPULAR_TERMS)


class SearchSummaryResponse(CamelModel):
    """Search usage over the trailing window (GET /search/statistics)."""

    total_searches: int
    unique_users: int
    avg_results: float | None = None
    last_search: datetime | None = None


class LogQueryRequest(CamelModel):
    """Request body for POST /search/log."""

    query: str = Field(..., min_length=1, max_length=500)
    user_id: str | None = None
    results_count: int = Field(default=0, ge=0)


class LogQueryResponse(CamelModel):
    status: str = "accepted"
