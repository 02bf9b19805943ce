# src/cache/memory_store.py — v2
"""In-memory cache store (CACHE_BACKEND=memory).

Nothing survives the process; useful for one-shot runs and tests.
Entries are kept serialized so reads behave like the persistent backends.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from codexindex.cache.base_cache_store import BaseCacheStore, CacheStoreError
from codexindex.cache.models import CacheEntry, LoomStats

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._looms: dict[str, str] = {}

    async def get(self, path: str) -> CacheEntry | None:
        raw = self._data.get(path)
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            raise CacheStoreError(path, f"unreadable cache entry: {e}") from e

    async def put(self, entry: CacheEntry) -> None:
        self._data[entry.path] = entry.model_dump_json()

    async def delete(self, path: str) -> None:
        self._data.pop(path, None)

    async def list_paths(self) -> list[str]:
        return sorted(self._data)

    async def list_entries(self) -> list[CacheEntry]:
        entries: list[CacheEntry] = []
        for path in sorted(self._data):
            try:
                entries.append(CacheEntry.model_validate_json(self._data[path]))
            except ValidationError as e:
                logger.warning("Skipping unreadable cache entry %s: %s", path, e)
        return entries

    async def get_loom_stats(self, loom_path: str) -> LoomStats | None:
        raw = self._looms.get(loom_path)
        if raw is None:
            return None
        try:
            return LoomStats.model_validate_json(raw)
        except ValidationError as e:
            raise CacheStoreError(loom_path, f"unreadable loom stats: {e}") from e

    async def put_loom_stats(self, loom_path: str, stats: LoomStats) -> None:
        self._looms[loom_path] = stats.model_dump_json()

    async def clear(self) -> None:
        self._data.clear()
        self._looms.clear()

    async def size_bytes(self) -> int:
        return sum(len(raw.encode("utf-8")) for raw in self._data.values())
