"""Core constants: cache key prefixes and shared search limits.

Single source of truth for cache key structure (DRY). Used by
app.infrastructure.cache.keys and the search services.
"""

# Cache key prefixes
CACHE_PREFIX_SEARCH = "search"
CACHE_NAMESPACE_RESULTS = "results"
CACHE_NAMESPACE_SUGGESTIONS = "suggestions"
CACHE_NAMESPACE_POPULAR_TERMS = "popular_terms"
CACHE_NAMESPACE_STATS = "stats"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Query and suggestion limits
MIN_QUERY_LENGTH = 2
MIN_TERM_LENGTH = 3
SUGGESTIONS_PER_SOURCE = 5
MAX_SUGGESTIONS = 10
MAX_POPULAR_TERMS = 20
