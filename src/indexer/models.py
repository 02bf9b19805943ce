# src/indexer/models.py — v2
"""Index artifact models: IndexEntry, IndexReport, IndexResult."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from codexindex.analysis.validation import ValidationResult
from codexindex.cache.models import CacheDiff, LoomStats
from codexindex.vocab.models import VocabularySuggestion


class AutoGenerated(BaseModel):
    """Machine-derived metadata attached to each index entry."""

    keywords: list[str] = Field(default_factory=list)
    phrases: list[str] = Field(default_factory=list)
    subjects: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    difficulty: str = "intermediate"
    confidence: dict[str, float] = Field(default_factory=dict)
    last_indexed: datetime
    from_cache: bool = False


class IndexEntry(BaseModel):
    """One searchable document in the published index."""

    path: str
    name: str
    type: str = "file"
    metadata: dict[str, Any] = Field(default_factory=dict)
    auto_generated: AutoGenerated
    validation: ValidationResult = Field(default_factory=ValidationResult)
    enhancement: dict[str, Any] | None = None
    content: str = ""
    search_text: str = ""


class IndexingError(BaseModel):
    """A document that could not be indexed."""

    file: str
    error: str


class ReportSummary(BaseModel):
    total_files: int = 0
    indexed_files: int = 0
    skipped_files: int = 0
    cached_files: int = 0
    valid_files: int = 0
    files_with_errors: int = 0
    files_with_warnings: int = 0
    files_with_suggestions: int = 0


class ConfidenceScore(BaseModel):
    file: str
    category: str
    score: float


class CategorizationReport(BaseModel):
    by_subject: dict[str, int] = Field(default_factory=dict)
    by_topic: dict[str, int] = Field(default_factory=dict)
    by_difficulty: dict[str, int] = Field(default_factory=dict)
    confidence_scores: list[ConfidenceScore] = Field(default_factory=list)


class FileIssues(BaseModel):
    path: str
    issues: list[str]


class ValidationReport(BaseModel):
    common_errors: dict[str, int] = Field(default_factory=dict)
    common_warnings: dict[str, int] = Field(default_factory=dict)
    file_errors: list[FileIssues] = Field(default_factory=list)
    file_warnings: list[FileIssues] = Field(default_factory=list)


class VocabularyReport(BaseModel):
    total_unique_terms: int = 0
    suggested_additions: list[VocabularySuggestion] = Field(default_factory=list)


class IndexReport(BaseModel):
    """Statistics and validation findings for one indexing run."""

    run_id: str
    generated_at: datetime
    summary: ReportSummary = Field(default_factory=ReportSummary)
    categorization: CategorizationReport = Field(default_factory=CategorizationReport)
    validation: ValidationReport = Field(default_factory=ValidationReport)
    vocabulary: VocabularyReport = Field(default_factory=VocabularyReport)
    looms: dict[str, LoomStats] = Field(default_factory=dict)
    cache: CacheDiff | None = None
    errors: list[IndexingError] = Field(default_factory=list)


class IndexResult(BaseModel):
    """Index entries and the accompanying report."""

    entries: list[IndexEntry] = Field(default_factory=list)
    report: IndexReport
