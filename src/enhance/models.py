# src/enhance/models.py — v1
"""Enhancement result returned by an optional AI collaborator."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EnhancementSuggestion(BaseModel):
    """One improvement proposed by an enhancer."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "quality"
    severity: str = "info"
    message: str
    suggested_fix: str | None = Field(default=None, alias="suggestedFix")


class EnhancementResult(BaseModel):
    """Superset of the analysis shape produced by an enhancer.

    Accepts the camelCase keys of the remote JSON payload and keeps any
    extra fields verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    suggestions: list[EnhancementSuggestion] = Field(default_factory=list)
    auto_tags: list[str] = Field(default_factory=list, alias="autoTags")
    suggested_difficulty: str | None = Field(default=None, alias="suggestedDifficulty")

    def is_empty(self) -> bool:
        return not (self.suggestions or self.auto_tags or self.suggested_difficulty)

    def to_payload(self) -> dict[str, Any]:
        """JSON payload using the remote camelCase field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
