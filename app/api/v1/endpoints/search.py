"""Search API: unified search across cases, clients, documents and six more stores."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_app_settings, get_search_service
from app.application.dtos.search import SearchOptions
from app.application.use_cases.search import SearchService
from app.core.config import Settings
from app.core.constants import MAX_POPULAR_TERMS
from app.core.limiter import limit_search
from app.domain.enums import EntityType, SortBy, SortOrder
from app.domain.exceptions import ValidationException
from app.schemas.search import (
    LogQueryRequest,
    LogQueryResponse,
    PopularTermsResponse,
    SearchRequest,
    SearchResponse,
    SearchSummaryResponse,
    SuggestionsResponse,
)

router = APIRouter()


def _parse_entities(raw: str | None) -> frozenset[EntityType]:
    try:
        return frozenset(EntityType.parse_many(raw))
    except ValueError as e:
        raise ValidationException(
            f"Unknown entity type in {raw!r}; allowed: {', '.join(EntityType.values())}",
            field="entities",
        ) from e


def _parse_filters(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        filters = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationException("filters must be a JSON object", field="filters") from e
    if not isinstance(filters, dict):
        raise ValidationException("filters must be a JSON object", field="filters")
    return filters


@router.get("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: str = Query(..., max_length=500, description="Search text (at least 2 characters)"),
    entities: str | None = Query(None, description="Comma-separated entity types; empty = all"),
    sort_by: SortBy = Query(SortBy.RELEVANCE, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    page: int = Query(1),
    limit: int | None = Query(None),
    user_id: str | None = Query(None, alias="userId"),
    include_archived: bool = Query(False, alias="includeArchived"),
    filters: str | None = Query(None, description="Entity-specific filters as a JSON object"),
) -> SearchResponse:
    """Search every selected entity store and return one merged, paginated page."""
    options = SearchOptions(
        query=q,
        entities=_parse_entities(entities),
        filters=_parse_filters(filters),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit if limit is not None else settings.search_default_limit,
        user_id=user_id,
        include_archived=include_archived,
    )
    response = await search_svc.search(options)
    return SearchResponse.model_validate(response.to_dict())


@router.post("", response_model=SearchResponse)
@limit_search
async def search_with_body(
    request: Request,
    body: SearchRequest,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SearchResponse:
    """Same as GET /search with options in a JSON body (filters as a real object)."""
    response = await search_svc.search(body.to_options(settings.search_default_limit))
    return SearchResponse.model_validate(response.to_dict())


@router.get("/suggestions", response_model=SuggestionsResponse)
@limit_search
async def suggestions(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=500),
) -> SuggestionsResponse:
    """Autocomplete from past queries and popular terms (at most 10)."""
    return SuggestionsResponse(suggestions=await search_svc.suggest(q))


@router.get("/popular", response_model=PopularTermsResponse)
async def popular_terms(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    limit: int = Query(MAX_POPULAR_TERMS, ge=1, le=MAX_POPULAR_TERMS),
) -> PopularTermsResponse:
    """Most frequent search terms over the last 30 days."""
    return PopularTermsResponse(popular_terms=await search_svc.popular_terms(limit))


@router.get("/statistics", response_model=SearchSummaryResponse)
async def statistics(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> SearchSummaryResponse:
    """Search usage over the last 30 days (totals, unique users, average hits)."""
    summary = await search_svc.search_summary()
    return SearchSummaryResponse.model_validate(summary.to_dict())


@router.post("/log", response_model=LogQueryResponse, status_code=202)
@limit_search
async def log_query(
    request: Request,
    body: LogQueryRequest,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> LogQueryResponse:
    """Record a query that was executed outside GET/POST /search."""
    await search_svc.log_query(body.query, body.user_id, body.results_count)
    return LogQueryResponse()
