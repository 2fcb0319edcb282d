"""Fan-out/fan-in over the entity adapters: merge, globally sort, paginate.

Relevance scores are entity-local (each store ranks on its own scale) and
are merged without cross-entity normalization, so the global relevance
order is a best-effort interleaving rather than a true total order.
"""

from __future__ import annotations

import asyncio
import logging
import time
import unicodedata
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.application.dtos.search import (
    AdapterOutcome,
    AggregatedResults,
    SearchOptions,
    SearchResult,
)
from app.domain.enums import EntityType, SortBy, SortOrder
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IAdapterRegistry

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=UTC)


def _title_key(result: SearchResult) -> tuple[str, str]:
    return (unicodedata.normalize("NFKC", result.title).casefold(), result.title)


def _date_key(result: SearchResult) -> datetime:
    return result.timestamp or _OLDEST


def _relevance_key(result: SearchResult) -> float:
    return result.relevance


_SORT_KEYS: dict[SortBy, Callable[[SearchResult], Any]] = {
    SortBy.RELEVANCE: _relevance_key,
    SortBy.DATE: _date_key,
    SortBy.TITLE: _title_key,
}


def sort_results(
    results: list[SearchResult], sort_by: SortBy, sort_order: SortOrder
) -> list[SearchResult]:
    """Stable sort; ties keep adapter invocation order in both directions."""
    return sorted(
        results,
        key=_SORT_KEYS[sort_by],
        reverse=sort_order == SortOrder.DESC,
    )


class ResultAggregator:
    """Dispatches one query to every selected adapter concurrently and merges the output."""

    def __init__(self, registry: IAdapterRegistry) -> None:
        self.registry = registry

    async def _run_adapter(
        self, entity_type: EntityType, query: str, options: SearchOptions
    ) -> AdapterOutcome:
        adapter = self.registry.get(entity_type)
        if adapter is None:
            logger.warning("No search adapter registered for %s", entity_type.value)
            return AdapterOutcome(entity_type, [], degraded=True, error="not registered")
        return await adapter.search_outcome(
            query,
            options.filters,
            user_id=options.user_id,
            include_archived=options.include_archived,
        )

    @traced("search.aggregate")
    async def aggregate(self, options: SearchOptions, query: str) -> AggregatedResults:
        """Fan out, merge in invocation order, sort, and cut the requested page.

        Args:
            options: Validated search options (page, limit, sort, filters).
            query: Normalized query text passed to every adapter.
        """
        started = time.perf_counter()
        entity_types = self.registry.resolve(options.entities)

        outcomes = await asyncio.gather(
            *(self._run_adapter(entity, query, options) for entity in entity_types),
            return_exceptions=True,
        )

        merged: list[SearchResult] = []
        results_by_entity: dict[EntityType, int] = {}
        degraded: list[EntityType] = []
        for entity_type, outcome in zip(entity_types, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Search adapter %s raised outside its isolation boundary",
                    entity_type.value,
                    exc_info=outcome,
                )
                outcome = AdapterOutcome(entity_type, [], degraded=True, error=str(outcome))
            if outcome.degraded:
                degraded.append(entity_type)
            results_by_entity[entity_type] = len(outcome.results)
            merged.extend(outcome.results)

        ordered = sort_results(merged, options.sort_by, options.sort_order)
        page = ordered[options.offset : options.offset + options.limit]
        query_time = int((time.perf_counter() - started) * 1000)

        add_span_attributes(
            **{
                "search.entity_count": len(entity_types),
                "search.total_results": len(merged),
                "search.degraded_count": len(degraded),
            }
        )
        return AggregatedResults(
            page=page,
            results_by_entity=results_by_entity,
            degraded_entities=degraded,
            query_time=query_time,
        )
