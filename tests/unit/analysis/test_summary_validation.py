# tests/unit/analysis/test_summary_validation.py — v1
"""Tests for analysis/summary.py and analysis/validation.py."""

from __future__ import annotations

from codexindex.analysis.models import ClassificationResult, DocumentAnalysis
from codexindex.analysis.summary import generate_summary, strip_markup
from codexindex.analysis.validation import (
    ValidationResult,
    suggest_improvements,
    validate_content,
)


class TestStripMarkup:
    def test_removes_code_and_headings(self):
        text = "# Title\n```py\nx = 1\n```\nUse `foo` here"
        cleaned = strip_markup(text)
        assert "```" not in cleaned
        assert "foo" not in cleaned
        assert "#" not in cleaned
        assert cleaned.startswith("Title")


class TestGenerateSummary:
    def test_short_content_falls_back(self, store):
        assert generate_summary("Tiny note", store) == "Tiny note..."

    def test_picks_keyword_rich_sentence(self, store):
        content = (
            "Deploy the server and deploy again with care. "
            "Unrelated filler sentence goes right here. "
            "The server deploy pipeline uses server deploy hooks for every server."
        )
        summary = generate_summary(content, store)
        assert summary.startswith("The server deploy pipeline")

    def test_truncates_long_sentence(self, store):
        content = "word " * 100 + "end. Another sentence that is long enough."
        summary = generate_summary(content, store)
        assert len(summary) == 300
        assert summary.endswith("...")


class TestValidateContent:
    def test_missing_required_fields(self):
        result = validate_content({}, "x" * 150)
        assert not result.valid
        assert "Missing required field: title" in result.errors
        assert "Missing required field: summary" in result.errors

    def test_valid_document(self):
        meta = {"title": "API Guide", "summary": "How to call the API from your code."}
        result = validate_content(meta, "x" * 150)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_length_checks(self):
        meta = {"title": "AB", "summary": "short"}
        result = validate_content(meta, "tiny")
        assert "Title too short (< 3 chars)" in result.errors
        assert "Summary too short (< 20 chars)" in result.warnings
        assert "Content very short (< 100 chars)" in result.warnings

    def test_long_title_and_summary(self):
        meta = {"title": "T" * 101, "summary": "S" * 301}
        result = validate_content(meta, "x" * 150)
        assert "Title too long (> 100 chars)" in result.errors
        assert "Summary too long (> 300 chars)" in result.warnings

    def test_placeholder_text(self):
        meta = {"title": "Draft", "summary": "A draft page that is not finished."}
        result = validate_content(meta, "Lorem ipsum dolor. TODO: write. " + "x" * 100)
        assert not result.valid
        assert "Contains placeholder text (lorem ipsum)" in result.errors
        assert "Contains TODO comments" in result.errors


class TestSuggestImprovements:
    def _analysis(self) -> DocumentAnalysis:
        return DocumentAnalysis(
            keywords=["api", "code", "server"],
            phrases=["clean code"],
            categories=ClassificationResult(
                subjects=["technology"], topics=["testing"], difficulty="beginner"
            ),
        )

    def test_empty_metadata(self):
        suggestions = suggest_improvements({}, self._analysis())
        assert "Add unique ID (UUID recommended)" in suggestions
        assert "Consider adding tags: api, code, server" in suggestions
        assert "Auto-detected subjects: technology" in suggestions
        assert "Suggested difficulty: beginner" in suggestions
        assert "Key phrases found: clean code" in suggestions

    def test_complete_metadata(self):
        meta = {
            "id": "1",
            "version": "1.0.0",
            "tags": ["api"],
            "relationships": {"requires": []},
            "taxonomy": {"subjects": ["technology"], "topics": ["testing"]},
            "difficulty": "beginner",
        }
        analysis = self._analysis().model_copy(update={"phrases": []})
        assert suggest_improvements(meta, analysis) == []

    def test_result_defaults(self):
        assert ValidationResult().valid is True
