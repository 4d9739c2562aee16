from synthrec.services.cache.cache_store import (
    CacheConfig,
    CacheEntry,
    CacheStore,
    derive_cache_key,
    generate_cache_key,
)

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheStore",
    "derive_cache_key",
    "generate_cache_key",
]
