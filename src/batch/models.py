# src/batch/models.py — v2
"""Batch scan models: SourceDocument, ScanError, ScanResult."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SourceDocument(BaseModel):
    """One document handed to the indexer.

    ``raw`` is the full file text and drives change detection; ``content``
    is the body left after front matter is split off.
    """

    path: str
    name: str
    format: str
    raw: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class ScanError(BaseModel):
    """A file that could not be read or parsed."""

    file: str
    error: str


class ScanResult(BaseModel):
    """Documents discovered under a base directory."""

    base_dir: str
    documents: list[SourceDocument] = Field(default_factory=list)
    skipped: int = 0
    errors: list[ScanError] = Field(default_factory=list)
