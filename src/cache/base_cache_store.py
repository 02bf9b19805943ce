# src/cache/base_cache_store.py — v3
"""Abstract cache store interface.

Backends are keyed by document path and hold one CacheEntry per path,
plus one LoomStats record per directory in a separate namespace.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from codexindex.cache.models import CacheEntry, LoomStats


class CacheStoreError(Exception):
    """Raised when a single cache entry cannot be read or written."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, path: str) -> CacheEntry | None:
        """Retrieve the entry for a path, None if absent.

        Raises:
            CacheStoreError: If an entry exists but cannot be decoded.
        """

    @abstractmethod
    async def put(self, entry: CacheEntry) -> None:
        """Upsert an entry under ``entry.path``."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Remove the entry for a path (no-op if absent)."""

    @abstractmethod
    async def list_paths(self) -> list[str]:
        """Every path with a stored entry, readable or not."""

    @abstractmethod
    async def list_entries(self) -> list[CacheEntry]:
        """All readable entries; corrupt ones are skipped."""

    @abstractmethod
    async def get_loom_stats(self, loom_path: str) -> LoomStats | None:
        """Stored aggregate for a directory, None if absent.

        Raises:
            CacheStoreError: If a record exists but cannot be decoded.
        """

    @abstractmethod
    async def put_loom_stats(self, loom_path: str, stats: LoomStats) -> None:
        """Upsert the aggregate for a directory."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry and every loom record."""

    @abstractmethod
    async def size_bytes(self) -> int:
        """Approximate storage footprint of the cache."""

    def close(self) -> None:
        """Release backend resources."""
