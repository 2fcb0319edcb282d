"""Unified search use case: the operations exposed to the HTTP layer.

search() is the only operation that can fail (ValidationException); every
other collaborator failure degrades to empty output.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from app.application.dtos.search import SearchOptions, SearchResponse, SearchStats, SearchSummary
from app.application.services.query_normalizer import normalize_query
from app.core.config import Settings, get_settings
from app.core.constants import MAX_POPULAR_TERMS
from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.services import IAnalyticsRecorder, ISearchCache
    from app.application.services.result_aggregator import ResultAggregator
    from app.application.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)


class SearchService:
    """Search facade: validate, cache, aggregate, autocomplete, record."""

    def __init__(
        self,
        aggregator: ResultAggregator,
        cache: ISearchCache,
        suggestions: SuggestionService,
        recorder: IAnalyticsRecorder,
        settings: Settings | None = None,
    ) -> None:
        self.aggregator = aggregator
        self.cache = cache
        self.suggestions = suggestions
        self.recorder = recorder
        self.settings = settings or get_settings()

    def _validate(self, options: SearchOptions) -> SearchOptions:
        if options.page < 1:
            raise ValidationException("page must be at least 1", field="page")
        if not 1 <= options.limit <= self.settings.search_max_limit:
            raise ValidationException(
                f"limit must be between 1 and {self.settings.search_max_limit}",
                field="limit",
            )
        return replace(options, query=options.query.strip())

    @traced("search.execute")
    async def search(self, options: SearchOptions) -> SearchResponse:
        """Run one search.

        Cached responses are returned as stored; analytics are recorded on
        hits and misses alike, in the background.

        Raises:
            ValidationException: Query shorter than 2 characters, page < 1,
                or limit outside 1..SEARCH_MAX_LIMIT.
        """
        query = normalize_query(options.query)
        options = self._validate(options)
        add_span_attributes(**{"search.page": options.page, "search.limit": options.limit})

        cached = await self.cache.get_results(options)
        if cached is not None:
            logger.debug("Search cache hit for %r", options.query)
            self.recorder.record_in_background(
                options.query, options.user_id, cached.stats.total_results
            )
            return cached

        aggregated = await self.aggregator.aggregate(options, query)
        suggestions = await self.suggestions.suggest(options.query)
        popular_terms = await self.suggestions.popular_terms()

        response = SearchResponse(
            results=aggregated.page,
            stats=SearchStats(
                total_results=aggregated.total_results,
                results_by_entity=aggregated.results_by_entity,
                query_time=aggregated.query_time,
                suggestions=suggestions,
                popular_terms=popular_terms,
                degraded_entities=aggregated.degraded_entities,
            ),
        )
        # Responses with degraded entities are never cached.
        if not aggregated.degraded_entities:
            await self.cache.set_results(options, response)

        self.recorder.record_in_background(
            options.query, options.user_id, aggregated.total_results
        )
        return response

    async def suggest(self, query: str | None) -> list[str]:
        return await self.suggestions.suggest(query)

    async def popular_terms(self, limit: int = MAX_POPULAR_TERMS) -> list[str]:
        return await self.suggestions.popular_terms(limit)

    async def log_query(self, query: str, user_id: str | None, results_count: int) -> None:
        """Record a query explicitly (awaited); never raises."""
        await self.recorder.record(query, user_id, results_count)

    async def search_summary(self) -> SearchSummary:
        return await self.suggestions.summary()
