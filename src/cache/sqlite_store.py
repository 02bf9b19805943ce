# src/cache/sqlite_store.py — v3
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

One row per document path in a stdlib sqlite3 database, loom stats in a
second table keyed by directory.
Better performance than JSON for large numbers of documents.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from codexindex.cache.base_cache_store import BaseCacheStore, CacheStoreError
from codexindex.cache.models import CacheEntry, LoomStats

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    path TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    content_fingerprint TEXT,
    timestamp TEXT
);
CREATE INDEX IF NOT EXISTS idx_timestamp ON cache_entries(timestamp);
CREATE TABLE IF NOT EXISTS loom_stats (
    loom_path TEXT PRIMARY KEY,
    data TEXT NOT NULL
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store for better performance at scale."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, path: str) -> CacheEntry | None:
        """Retrieve cache entry by document path."""
        cursor = self._conn.execute(
            "SELECT data FROM cache_entries WHERE path = ?", (path,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return CacheEntry.model_validate_json(row[0])
        except ValidationError as e:
            raise CacheStoreError(path, f"unreadable cache entry: {e}") from e

    async def put(self, entry: CacheEntry) -> None:
        """Store a cache entry (upsert)."""
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO cache_entries
                   (path, data, content_fingerprint, timestamp)
                   VALUES (?, ?, ?, ?)""",
                (
                    entry.path,
                    entry.model_dump_json(),
                    entry.content_fingerprint,
                    entry.timestamp.isoformat(),
                ),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise CacheStoreError(entry.path, f"cannot write cache entry: {e}") from e

    async def delete(self, path: str) -> None:
        """Remove a cache entry."""
        self._conn.execute("DELETE FROM cache_entries WHERE path = ?", (path,))
        self._conn.commit()

    async def list_paths(self) -> list[str]:
        """All stored document paths."""
        cursor = self._conn.execute("SELECT path FROM cache_entries ORDER BY path")
        return [row[0] for row in cursor.fetchall()]

    async def list_entries(self) -> list[CacheEntry]:
        """List all readable cached entries."""
        cursor = self._conn.execute("SELECT path, data FROM cache_entries ORDER BY path")
        entries: list[CacheEntry] = []
        for path, data in cursor.fetchall():
            try:
                entries.append(CacheEntry.model_validate_json(data))
            except ValidationError as e:
                logger.warning("Skipping unreadable cache entry %s: %s", path, e)
        return entries

    async def get_loom_stats(self, loom_path: str) -> LoomStats | None:
        """Retrieve the aggregate for a directory."""
        cursor = self._conn.execute(
            "SELECT data FROM loom_stats WHERE loom_path = ?", (loom_path,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return LoomStats.model_validate_json(row[0])
        except ValidationError as e:
            raise CacheStoreError(loom_path, f"unreadable loom stats: {e}") from e

    async def put_loom_stats(self, loom_path: str, stats: LoomStats) -> None:
        """Store the aggregate for a directory (upsert)."""
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO loom_stats (loom_path, data) VALUES (?, ?)",
                (loom_path, stats.model_dump_json()),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise CacheStoreError(loom_path, f"cannot write loom stats: {e}") from e

    async def clear(self) -> None:
        """Delete every row."""
        self._conn.execute("DELETE FROM cache_entries")
        self._conn.execute("DELETE FROM loom_stats")
        self._conn.commit()

    async def size_bytes(self) -> int:
        """Total size of the serialized entries."""
        cursor = self._conn.execute(
            "SELECT COALESCE(SUM(LENGTH(data)), 0) FROM cache_entries"
        )
        return int(cursor.fetchone()[0])

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
