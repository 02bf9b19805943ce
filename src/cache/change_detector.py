# src/cache/change_detector.py — v2
"""Incremental change detection on top of a cache store.

Freshness law: ``save(path, content, a)`` followed by
``check_changed(path, content)`` is always False; any other content for
the same path is always True.

A path whose entry is missing, unreadable or holds another fingerprint is
"changed". The cache never serves an analysis once the fingerprint no
longer matches, and unreadable entries fail open toward recomputation.

``diff`` does not re-hash content. A stored path counts as unchanged unless
``check_changed`` reported it changed during this detector's lifetime (and
it has not been saved since) or its entry cannot be read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from codexindex.cache.base_cache_store import BaseCacheStore, CacheStoreError
from codexindex.cache.fingerprint import compute_fingerprint
from codexindex.cache.models import CacheDiff, CacheEntry, CacheStats, LoomStats

logger = logging.getLogger(__name__)


class ChangeDetectionCache:
    """Fingerprint-based freshness checks and cached analyses per path."""

    def __init__(self, store: BaseCacheStore) -> None:
        self._store = store
        self._invalidated: set[str] = set()

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    async def check_changed(self, path: str, content: str | bytes) -> bool:
        """True if ``path`` needs (re)analysis for ``content``."""
        try:
            entry = await self._store.get(path)
        except CacheStoreError as e:
            logger.warning("Treating %s as changed: %s", path, e)
            self._invalidated.add(path)
            return True

        if entry is None:
            return True
        if entry.content_fingerprint != compute_fingerprint(content):
            self._invalidated.add(path)
            return True
        return False

    async def save(
        self,
        path: str,
        content: str | bytes,
        analysis: BaseModel | dict[str, Any],
    ) -> CacheEntry:
        """Upsert the entry for ``path`` with a fresh fingerprint and timestamp."""
        if isinstance(analysis, BaseModel):
            analysis = analysis.model_dump(mode="json")
        entry = CacheEntry(
            path=path,
            content_fingerprint=compute_fingerprint(content),
            analysis=analysis,
            timestamp=datetime.now(timezone.utc),
        )
        await self._store.put(entry)
        self._invalidated.discard(path)
        return entry

    async def get_cached(self, path: str) -> dict[str, Any] | None:
        """Stored analysis for ``path``; None if absent or unreadable."""
        try:
            entry = await self._store.get(path)
        except CacheStoreError as e:
            logger.warning("Ignoring cached analysis for %s: %s", path, e)
            return None
        return entry.analysis if entry is not None else None

    async def update_loom_stats(
        self, loom_path: str, stats: LoomStats | dict[str, Any]
    ) -> LoomStats:
        """Upsert the aggregate for a directory, stamped with the current time."""
        if not isinstance(stats, LoomStats):
            stats = LoomStats.model_validate(stats)
        stats = stats.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        await self._store.put_loom_stats(loom_path, stats)
        return stats

    async def get_loom_stats(self, loom_path: str) -> LoomStats | None:
        """Stored aggregate for a directory; None if absent or unreadable."""
        try:
            return await self._store.get_loom_stats(loom_path)
        except CacheStoreError as e:
            logger.warning("Ignoring loom stats for %s: %s", loom_path, e)
            return None

    async def diff(self, current_paths: Iterable[str]) -> CacheDiff:
        """Classify the current run's paths against the cache."""
        current = list(dict.fromkeys(current_paths))
        stored = set(await self._store.list_paths())
        readable = {entry.path for entry in await self._store.list_entries()}

        result = CacheDiff()
        for path in current:
            if path not in stored:
                result.added.append(path)
            elif path in self._invalidated or path not in readable:
                result.modified.append(path)
            else:
                result.unchanged.append(path)

        current_set = set(current)
        result.deleted = sorted(p for p in stored if p not in current_set)
        logger.info(
            "Cache diff: %d added, %d modified, %d unchanged, %d deleted",
            len(result.added), len(result.modified),
            len(result.unchanged), len(result.deleted),
        )
        return result

    async def stats(self) -> CacheStats:
        """Entry count, storage size and entry age range."""
        entries = await self._store.list_entries()
        timestamps = [e.timestamp for e in entries]
        return CacheStats(
            total_files=len(entries),
            cache_size=await self._store.size_bytes(),
            oldest_entry=min(timestamps) if timestamps else None,
            newest_entry=max(timestamps) if timestamps else None,
        )

    async def prune(self, paths: Iterable[str]) -> int:
        """Explicitly delete entries, typically ``diff().deleted``."""
        removed = 0
        for path in paths:
            await self._store.delete(path)
            self._invalidated.discard(path)
            removed += 1
        if removed:
            logger.info("Pruned %d cache entries", removed)
        return removed

    async def clear(self) -> None:
        """Remove all entries."""
        await self._store.clear()
        self._invalidated.clear()
        logger.info("Cache cleared")
