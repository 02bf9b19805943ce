# src/cache/cache_factory.py — v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from codexindex.cache.base_cache_store import BaseCacheStore
from codexindex.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to JSON backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "json" if settings is None else settings.cache_backend
    cache_root = ".cache" if settings is None else str(settings.cache_root)

    if backend == "json":
        from codexindex.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=cache_root)

    if backend == "sqlite":
        from codexindex.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=f"{cache_root}/codex.db")

    if backend == "memory":
        from codexindex.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    raise ValueError(f"Unsupported cache backend: {backend!r}")
