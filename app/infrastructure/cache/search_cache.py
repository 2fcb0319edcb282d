"""Typed search cache over a key-value CacheProtocol backend.

Results live under search:results:* (short TTL); suggestions, popular
terms and the usage summary live in their own namespaces with a longer TTL.
Entries are only ever replaced whole or left to expire. Any backend error,
or a payload that no longer matches the DTO shape, is treated as a miss.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.search import SearchOptions, SearchResponse, SearchSummary
from app.core.config import Settings, get_settings
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import (
    popular_terms_key,
    search_results_key,
    search_stats_key,
    suggestions_key,
)

logger = logging.getLogger(__name__)


class SearchCache:
    """ISearchCache implementation. A None backend means caching is disabled."""

    def __init__(
        self,
        cache: CacheProtocol | None,
        settings: Settings | None = None,
    ) -> None:
        self.cache = cache
        self.settings = settings or get_settings()

    async def _get(self, key: str) -> Any | None:
        if self.cache is None:
            return None
        try:
            return await self.cache.get(key)
        except Exception:
            logger.warning("Search cache read failed for %s; treating as miss", key, exc_info=True)
            return None

    async def _set(self, key: str, value: Any, ttl: int) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(key, value, ttl=ttl)
        except Exception:
            logger.warning("Search cache write failed for %s", key, exc_info=True)

    async def get_results(self, options: SearchOptions) -> SearchResponse | None:
        payload = await self._get(search_results_key(options))
        if payload is None:
            return None
        try:
            return SearchResponse.from_dict(payload)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed cached search response")
            return None

    async def set_results(self, options: SearchOptions, response: SearchResponse) -> None:
        await self._set(
            search_results_key(options),
            response.to_dict(),
            self.settings.search_results_cache_ttl,
        )

    async def get_suggestions(self, query: str) -> list[str] | None:
        payload = await self._get(suggestions_key(query))
        return list(payload) if isinstance(payload, list) else None

    async def set_suggestions(self, query: str, suggestions: list[str]) -> None:
        await self._set(
            suggestions_key(query),
            suggestions,
            self.settings.search_suggestions_cache_ttl,
        )

    async def get_popular_terms(self) -> list[str] | None:
        payload = await self._get(popular_terms_key())
        return list(payload) if isinstance(payload, list) else None

    async def set_popular_terms(self, terms: list[str]) -> None:
        await self._set(
            popular_terms_key(), terms, self.settings.search_popular_terms_cache_ttl
        )

    async def get_summary(self) -> SearchSummary | None:
        payload = await self._get(search_stats_key())
        if not isinstance(payload, dict):
            return None
        try:
            return SearchSummary.from_dict(payload)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed cached search summary")
            return None

    async def set_summary(self, summary: SearchSummary) -> None:
        await self._set(
            search_stats_key(), summary.to_dict(), self.settings.search_stats_cache_ttl
        )
