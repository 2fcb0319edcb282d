"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.search import (
        AdapterOutcome,
        SearchResult,
        SearchSummary,
    )
    from app.domain.enums import EntityType


# Entity search adapter interface (one implementation per entity store)
class IEntitySearchAdapter(Protocol):
    """Protocol for a per-entity full-text search adapter.

    Implementations never raise: failures become an empty list
    (search) or a degraded outcome (search_outcome).
    """

    entity_type: EntityType

    async def search(
        self,
        query: str,
        filters: dict[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> list[SearchResult]:
        """Return matches sorted by local relevance descending; [] on failure."""

    async def search_outcome(
        self,
        query: str,
        filters: dict[str, Any],
        user_id: str | None = None,
        include_archived: bool = False,
    ) -> AdapterOutcome:
        """Return matches plus whether the adapter degraded (error or timeout)."""


# Search history / term popularity interface (append-only)
class ISearchHistoryRepository(Protocol):
    """Protocol for the search history and term popularity store."""

    async def add_query(
        self,
        query: str,
        user_id: str | None,
        results_count: int,
        terms: list[str],
    ) -> None:
        """Append one history row and one popularity row per term."""

    async def top_history_queries(self, pattern: str, limit: int) -> list[str]:
        """Return past queries matching the substring, most frequent first."""

    async def top_terms_matching(self, pattern: str, limit: int) -> list[str]:
        """Return popular terms matching the substring, most frequent first."""

    async def top_terms_since(self, days: int, limit: int) -> list[str]:
        """Return the most frequent terms over the trailing window."""

    async def summary_since(self, days: int) -> SearchSummary:
        """Return usage summary (totals, unique users) over the trailing window."""


# Adapter lookup used by the aggregator (EntityType -> adapter)
class IAdapterRegistry(Protocol):
    """Protocol for resolving requested entity types to their adapters."""

    def resolve(self, entities: Iterable[EntityType]) -> list[EntityType]:
        """Return the effective entity types in canonical order (empty = all)."""

    def get(self, entity_type: EntityType) -> IEntitySearchAdapter | None:
        """Return the adapter registered for entity_type, or None."""
