# src/cache/json_store.py — v3
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores one JSON file per document path under CACHE_ROOT. File names are
the SHA-1 of the path, the path itself is kept inside the entry. Loom
stats live under CACHE_ROOT/looms/ with the same naming scheme.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from codexindex.cache.base_cache_store import BaseCacheStore, CacheStoreError
from codexindex.cache.models import CacheEntry, LoomStats

logger = logging.getLogger(__name__)

_LOOM_DIR = "looms"


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._loom_root = self._root / _LOOM_DIR

    async def get(self, path: str) -> CacheEntry | None:
        """Retrieve cache entry by document path."""
        entry_path = self._entry_path(path)
        if not entry_path.exists():
            return None
        try:
            return CacheEntry.model_validate_json(entry_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise CacheStoreError(path, f"unreadable cache entry: {e}") from e

    async def put(self, entry: CacheEntry) -> None:
        """Store a cache entry."""
        entry_path = self._entry_path(entry.path)
        tmp_path = entry_path.with_suffix(".tmp")
        try:
            tmp_path.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(entry_path)
        except OSError as e:
            raise CacheStoreError(entry.path, f"cannot write cache entry: {e}") from e

    async def delete(self, path: str) -> None:
        """Remove a cache entry."""
        entry_path = self._entry_path(path)
        if entry_path.exists():
            entry_path.unlink()

    async def list_paths(self) -> list[str]:
        """List document paths of all entry files."""
        paths: list[str] = []
        for entry_file in sorted(self._root.glob("*.json")):
            try:
                data = json.loads(entry_file.read_text(encoding="utf-8"))
                paths.append(str(data["path"]))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning("Skipping unreadable cache file %s: %s", entry_file.name, e)
        return paths

    async def list_entries(self) -> list[CacheEntry]:
        """List all readable cached entries."""
        entries: list[CacheEntry] = []
        for entry_file in sorted(self._root.glob("*.json")):
            try:
                entries.append(
                    CacheEntry.model_validate_json(entry_file.read_text(encoding="utf-8"))
                )
            except (OSError, UnicodeDecodeError, ValidationError) as e:
                logger.warning("Skipping unreadable cache file %s: %s", entry_file.name, e)
        return entries

    async def get_loom_stats(self, loom_path: str) -> LoomStats | None:
        """Retrieve the aggregate for a directory."""
        stats_path = self._loom_root / _digest_name(loom_path)
        if not stats_path.exists():
            return None
        try:
            return LoomStats.model_validate_json(stats_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise CacheStoreError(loom_path, f"unreadable loom stats: {e}") from e

    async def put_loom_stats(self, loom_path: str, stats: LoomStats) -> None:
        """Store the aggregate for a directory."""
        stats_path = self._loom_root / _digest_name(loom_path)
        try:
            self._loom_root.mkdir(exist_ok=True)
            stats_path.write_text(stats.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheStoreError(loom_path, f"cannot write loom stats: {e}") from e

    async def clear(self) -> None:
        """Delete every entry and loom file."""
        for entry_file in self._root.glob("*.json"):
            entry_file.unlink()
        for stats_file in self._loom_root.glob("*.json"):
            stats_file.unlink()

    async def size_bytes(self) -> int:
        """Total size of the entry files."""
        return sum(f.stat().st_size for f in self._root.glob("*.json"))

    def _entry_path(self, path: str) -> Path:
        """Return the entry file for a document path."""
        return self._root / _digest_name(path)


def _digest_name(key: str) -> str:
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()  # noqa: S324
    return f"{digest}.json"
