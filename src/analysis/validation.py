# src/analysis/validation.py — v1
"""Content quality checks and metadata improvement hints."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from codexindex.analysis.models import DocumentAnalysis

REQUIRED_FIELDS = ("title", "summary")

FORBIDDEN_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"lorem ipsum", re.IGNORECASE), "Contains placeholder text (lorem ipsum)"),
    (re.compile(r"TODO:", re.IGNORECASE), "Contains TODO comments"),
    (re.compile(r"FIXME:", re.IGNORECASE), "Contains FIXME comments"),
    (re.compile(r"test test test", re.IGNORECASE), "Contains test placeholder"),
)


class ValidationResult(BaseModel):
    """Outcome of validate_content plus improvement suggestions."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


def validate_content(metadata: dict, content: str) -> ValidationResult:
    """Check required metadata, field lengths and placeholder text."""
    errors: list[str] = []
    warnings: list[str] = []

    for field in REQUIRED_FIELDS:
        if not metadata.get(field):
            errors.append(f"Missing required field: {field}")

    title = str(metadata.get("title") or "")
    if title:
        if len(title) < 3:
            errors.append("Title too short (< 3 chars)")
        if len(title) > 100:
            errors.append("Title too long (> 100 chars)")

    summary = str(metadata.get("summary") or "")
    if summary:
        if len(summary) < 20:
            warnings.append("Summary too short (< 20 chars)")
        if len(summary) > 300:
            warnings.append("Summary too long (> 300 chars)")

    if len(content) < 100:
        warnings.append("Content very short (< 100 chars)")

    for pattern, message in FORBIDDEN_PATTERNS:
        if pattern.search(content):
            errors.append(message)

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def suggest_improvements(metadata: dict, analysis: DocumentAnalysis) -> list[str]:
    """Hints for metadata an author could add, based on the analysis."""
    suggestions: list[str] = []
    categories = analysis.categories
    taxonomy = metadata.get("taxonomy") or {}
    if not isinstance(taxonomy, dict):
        taxonomy = {}

    if not metadata.get("id"):
        suggestions.append("Add unique ID (UUID recommended)")
    if not metadata.get("version"):
        suggestions.append("Add version number (semver format)")
    if not metadata.get("tags"):
        suggestions.append(
            f"Consider adding tags: {', '.join(analysis.keywords[:5])}"
        )
    if not metadata.get("relationships"):
        suggestions.append(
            "Consider adding relationships (requires, references, seeAlso)"
        )
    if not taxonomy.get("subjects"):
        suggestions.append(f"Auto-detected subjects: {', '.join(categories.subjects)}")
    if not taxonomy.get("topics"):
        suggestions.append(f"Auto-detected topics: {', '.join(categories.topics)}")
    if not metadata.get("difficulty"):
        suggestions.append(f"Suggested difficulty: {categories.difficulty}")
    if analysis.phrases:
        suggestions.append(f"Key phrases found: {', '.join(analysis.phrases[:3])}")

    return suggestions
