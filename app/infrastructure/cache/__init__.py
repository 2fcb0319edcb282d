"""Cache: Redis service, typed search cache, and cache key utilities.

CacheService uses app.core.config; key format is in keys.py (DRY).
SearchCache wraps any CacheProtocol and degrades every failure to a miss.
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import (
    canonical_json,
    canonical_search_options,
    popular_terms_key,
    search_results_key,
    search_stats_key,
    suggestions_key,
)
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.search_cache import SearchCache

__all__ = [
    "CacheProtocol",
    "CacheService",
    "SearchCache",
    "canonical_json",
    "canonical_search_options",
    "popular_terms_key",
    "search_results_key",
    "search_stats_key",
    "suggestions_key",
]
