"""Cache Module - Caching services."""
from core.cache.match_cache import (
    MatchCacheService,
    CACHE_TTL_SECONDS
)

__all__ = [
    'MatchCacheService',
    'CACHE_TTL_SECONDS'
]
