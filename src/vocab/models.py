# src/vocab/models.py — v1
"""Vocabulary models: category names and loader statistics."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

CategoryName = Literal["subjects", "topics", "difficulty"]

CATEGORIES: tuple[CategoryName, ...] = ("subjects", "topics", "difficulty")


class VocabularyStats(BaseModel):
    """Snapshot of what a VocabularyStore currently holds."""

    stop_words: int = 0
    subjects: dict[str, int] = Field(default_factory=dict)
    topics: dict[str, int] = Field(default_factory=dict)
    difficulty: dict[str, int] = Field(default_factory=dict)
    total_terms: int = 0
    stemmed_index: int = 0


class VocabularySuggestion(BaseModel):
    """A recurring keyword that no vocabulary term covers yet."""

    term: str
    frequency: int
