# src/analysis/models.py — v1
"""Analysis domain models: classification, keywords, document analysis."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TaxonomyMetadata(BaseModel):
    """Explicit, human-authored taxonomy from document front matter."""

    model_config = ConfigDict(extra="ignore")

    subjects: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    difficulty: str | None = None

    @classmethod
    def from_metadata(cls, metadata: dict | None) -> TaxonomyMetadata:
        """Read ``taxonomy.subjects``, ``taxonomy.topics`` and ``difficulty``.

        Scalars are accepted where lists are expected.
        """
        if not metadata:
            return cls()
        taxonomy = metadata.get("taxonomy") or {}
        if not isinstance(taxonomy, dict):
            taxonomy = {}
        difficulty = metadata.get("difficulty")
        return cls(
            subjects=_as_list(taxonomy.get("subjects")),
            topics=_as_list(taxonomy.get("topics")),
            difficulty=str(difficulty) if difficulty else None,
        )


class ClassificationResult(BaseModel):
    """Labels per taxonomy category with per-label confidence.

    Confidence is normalized within a category only; a subject score and a
    topic score are not comparable.
    """

    subjects: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    difficulty: str = "intermediate"
    confidence: dict[str, float] = Field(default_factory=dict)


class Keyword(BaseModel):
    """Heuristic-mode keyword: stem, readable form and score."""

    word: str
    original: str
    score: float


class DocumentAnalysis(BaseModel):
    """Per-document analysis record stored in the cache and the index."""

    keywords: list[str] = Field(default_factory=list)
    phrases: list[str] = Field(default_factory=list)
    categories: ClassificationResult = Field(default_factory=ClassificationResult)


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value]
    return [str(value)]
