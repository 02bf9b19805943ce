# src/enhance/base_enhancer.py — v1
"""Abstract AI-enhancement interface and the default no-op enhancer.

Indexing never depends on an enhancer being available: the index builder
produces a complete result with NullEnhancer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from codexindex.analysis.models import DocumentAnalysis
from codexindex.enhance.models import EnhancementResult


class BaseEnhancer(ABC):
    """Consumes an analysis plus raw metadata and proposes improvements."""

    @abstractmethod
    async def enhance(
        self, analysis: DocumentAnalysis, metadata: dict[str, Any]
    ) -> EnhancementResult:
        """Return suggestions, auto tags and a suggested difficulty."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""


class NullEnhancer(BaseEnhancer):
    """Enhancer used when AI enhancement is disabled."""

    async def enhance(
        self, analysis: DocumentAnalysis, metadata: dict[str, Any]
    ) -> EnhancementResult:
        return EnhancementResult()

    @property
    def provider_name(self) -> str:
        return "disabled"
