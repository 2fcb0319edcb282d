"""Cache key builders. Single place for key format (DRY).

Search keys hash a canonical JSON form of the options: map keys sorted,
compact separators, entity set sorted and expanded (empty means all), so
two equivalent requests always share one entry regardless of the order in
which their fields or filters were supplied.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_NAMESPACE_POPULAR_TERMS,
    CACHE_NAMESPACE_RESULTS,
    CACHE_NAMESPACE_STATS,
    CACHE_NAMESPACE_SUGGESTIONS,
    CACHE_PREFIX_SEARCH,
)
from app.domain.enums import EntityType

if TYPE_CHECKING:
    from app.application.dtos.search import SearchOptions


def canonical_json(data: dict[str, Any]) -> str:
    """Deterministic JSON: sorted keys, no whitespace, non-JSON values via str()."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)


def _digest(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()


def canonical_search_options(options: SearchOptions) -> dict[str, Any]:
    """Return the options as a plain dict with every order-sensitive part normalized."""
    entities = options.entities or frozenset(EntityType)
    return {
        "query": options.query.strip(),
        "entities": sorted(entity.value for entity in entities),
        "filters": options.filters,
        "sortBy": options.sort_by.value,
        "sortOrder": options.sort_order.value,
        "page": options.page,
        "limit": options.limit,
        "userId": options.user_id,
        "includeArchived": options.include_archived,
    }


def search_results_key(options: SearchOptions) -> str:
    """Cache key for an aggregated search response."""
    digest = _digest(canonical_json(canonical_search_options(options)))
    return CACHE_KEY_SEP.join((CACHE_PREFIX_SEARCH, CACHE_NAMESPACE_RESULTS, digest))


def suggestions_key(query: str) -> str:
    """Cache key for autocomplete suggestions of a raw query."""
    digest = _digest(query.strip())
    return CACHE_KEY_SEP.join((CACHE_PREFIX_SEARCH, CACHE_NAMESPACE_SUGGESTIONS, digest))


def popular_terms_key() -> str:
    """Cache key for the global popular terms list."""
    return CACHE_KEY_SEP.join((CACHE_PREFIX_SEARCH, CACHE_NAMESPACE_POPULAR_TERMS))


def search_stats_key() -> str:
    """Cache key for the search usage summary."""
    return CACHE_KEY_SEP.join((CACHE_PREFIX_SEARCH, CACHE_NAMESPACE_STATS))
