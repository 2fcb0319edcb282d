"""Autocomplete suggestions, popular terms and usage summary backed by search history."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import SearchSummary
from app.core.config import Settings, get_settings
from app.core.constants import MAX_POPULAR_TERMS, MAX_SUGGESTIONS, SUGGESTIONS_PER_SOURCE
from app.domain.exceptions import PersistenceException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ISearchHistoryRepository
    from app.application.interfaces.services import ISearchCache

logger = logging.getLogger(__name__)


def merge_unique(*sources: list[str], limit: int) -> list[str]:
    """Concatenate sources, drop repeats (first occurrence wins), cap at limit."""
    seen: set[str] = set()
    merged: list[str] = []
    for source in sources:
        for item in source:
            if item in seen:
                continue
            seen.add(item)
            merged.append(item)
            if len(merged) >= limit:
                return merged
    return merged


class SuggestionService:
    """Reads the history store; every read is cached and store failures degrade to empty."""

    def __init__(
        self,
        history_repo: ISearchHistoryRepository,
        cache: ISearchCache,
        settings: Settings | None = None,
    ) -> None:
        self.history_repo = history_repo
        self.cache = cache
        self.settings = settings or get_settings()

    async def suggest(self, raw_query: str | None) -> list[str]:
        """Past queries then popular terms containing the query, deduplicated, at most 10."""
        query = (raw_query or "").strip()
        if not query:
            return []

        cached = await self.cache.get_suggestions(query)
        if cached is not None:
            return cached

        try:
            history = await self.history_repo.top_history_queries(query, SUGGESTIONS_PER_SOURCE)
            terms = await self.history_repo.top_terms_matching(query, SUGGESTIONS_PER_SOURCE)
        except PersistenceException:
            logger.exception("Failed to load suggestions for %r", query)
            return []

        suggestions = merge_unique(history, terms, limit=MAX_SUGGESTIONS)
        await self.cache.set_suggestions(query, suggestions)
        return suggestions

    async def popular_terms(self, limit: int = MAX_POPULAR_TERMS) -> list[str]:
        """Most frequent terms over the trailing window (at most 20)."""
        limit = max(0, min(limit, MAX_POPULAR_TERMS))
        cached = await self.cache.get_popular_terms()
        if cached is not None:
            return cached[:limit]

        try:
            terms = await self.history_repo.top_terms_since(
                self.settings.popular_terms_window_days, MAX_POPULAR_TERMS
            )
        except PersistenceException:
            logger.exception("Failed to load popular search terms")
            return []

        await self.cache.set_popular_terms(terms)
        return terms[:limit]

    async def summary(self) -> SearchSummary:
        """Search usage over the trailing window; empty summary if the store fails."""
        cached = await self.cache.get_summary()
        if cached is not None:
            return cached

        try:
            summary = await self.history_repo.summary_since(
                self.settings.popular_terms_window_days
            )
        except PersistenceException:
            logger.exception("Failed to load search usage summary")
            return SearchSummary()

        await self.cache.set_summary(summary)
        return summary
