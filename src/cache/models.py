# src/cache/models.py — v3
"""Cache domain models: CacheEntry, CacheDiff, CacheStats, LoomStats."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """Last analysis computed for one document path.

    ``analysis`` is only valid for the content whose fingerprint is stored
    alongside it.
    """

    path: str
    content_fingerprint: str
    analysis: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime


class CacheDiff(BaseModel):
    """Current run's paths classified against the cache.

    ``modified`` holds paths the cache knows but can no longer vouch for:
    their content was seen to differ this run, or their entry is unreadable.
    """

    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)


class CacheStats(BaseModel):
    """Summary of the cache contents."""

    total_files: int = 0
    cache_size: int = 0
    oldest_entry: datetime | None = None
    newest_entry: datetime | None = None


class LoomStats(BaseModel):
    """Aggregate figures for one directory (loom) of indexed documents.

    Accepts the camelCase keys used by the published index.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_files: int = Field(default=0, alias="totalFiles")
    total_keywords: int = Field(default=0, alias="totalKeywords")
    avg_difficulty: str | None = Field(default=None, alias="avgDifficulty")
    subjects: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
