"""Cache backend factory.

Provides get_cache() / set_cache() to swap implementations:
- MemoryCache for development and testing
- RedisCache when CACHE_BACKEND=redis
"""

from orderflow.cache.memory import MemoryCache
from orderflow.cache.port import CacheBackend
from orderflow.utils.settings import get_settings

_current_cache: CacheBackend | None = None


def _build_cache() -> CacheBackend:
    settings = get_settings()
    if settings.cache_backend == "redis":
        from orderflow.cache.redis_cache import RedisCache

        return RedisCache.from_url(settings.redis_url)
    if settings.cache_backend == "memory":
        return MemoryCache()
    raise ValueError(f"Unknown cache backend: {settings.cache_backend}")


def get_cache() -> CacheBackend:
    """Return the current cache backend. Built from settings on first use."""
    global _current_cache
    if _current_cache is None:
        _current_cache = _build_cache()
    return _current_cache


def set_cache(cache: CacheBackend) -> None:
    """Override the active cache backend (useful for tests)."""
    global _current_cache
    _current_cache = cache


def reset_cache() -> None:
    """Reset to the default backend."""
    global _current_cache
    _current_cache = None


__all__ = ["CacheBackend", "MemoryCache", "get_cache", "set_cache", "reset_cache"]
