"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.search import (
        SearchOptions,
        SearchResponse,
        SearchSummary,
    )


# Search cache interface (typed wrapper over the key-value cache)
class ISearchCache(Protocol):
    """Protocol for search caching. Every failure is reported as a miss."""

    async def get_results(self, options: SearchOptions) -> SearchResponse | None:
        """Return cached search response for the canonical options, or None."""

    async def set_results(self, options: SearchOptions, response: SearchResponse) -> None:
        """Store search response under the canonical options key."""

    async def get_suggestions(self, query: str) -> list[str] | None:
        """Return cached suggestions for the raw query, or None."""

    async def set_suggestions(self, query: str, suggestions: list[str]) -> None:
        """Store suggestions for the raw query."""

    async def get_popular_terms(self) -> list[str] | None:
        """Return cached popular terms, or None."""

    async def set_popular_terms(self, terms: list[str]) -> None:
        """Store popular terms."""

    async def get_summary(self) -> SearchSummary | None:
        """Return cached search usage summary, or None."""

    async def set_summary(self, summary: SearchSummary) -> None:
        """Store search usage summary."""


# Analytics recorder interface (fire-and-forget)
class IAnalyticsRecorder(Protocol):
    """Protocol for best-effort search analytics."""

    async def record(
        self, query: str, user_id: str | None, results_count: int
    ) -> None:
        """Persist one query and its terms; never raises."""

    def record_in_background(
        self, query: str, user_id: str | None, results_count: int
    ) -> None:
        """Schedule record() without awaiting it."""
