# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEX_",
        extra="ignore",
    )

    # === Vocabulary ===
    vocab_dir: Path | None = None  # None = bundled vocabulary

    # === Classification ===
    subject_confidence_divisor: float = 5.0
    topic_confidence_divisor: float = 3.0
    default_difficulty: str = "intermediate"

    # === Keywords ===
    tfidf_top_k: int = 15
    heuristic_keyword_limit: int = 20
    phrase_ngram_size: int = 2
    phrase_limit: int = 10
    vocab_suggestion_min_docs: int = 3
    vocab_suggestion_limit: int = 20

    # === Index ===
    index_dirs: str = "weaves,schema,docs,wiki"
    index_formats: str = "md,mdx,yaml,yml"
    index_content_max_chars: int = 5000
    index_output_dir: Path = Path(".")

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["json", "sqlite", "memory"] = "json"
    cache_root: Path = Path(".cache")

    # === AI enhancement (optional collaborator) ===
    ai_provider: str = "disabled"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("tfidf_top_k", "heuristic_keyword_limit", "phrase_limit")
    @classmethod
    def validate_limits(cls, v: int) -> int:  # noqa: N805
        """Keyword and phrase limits must be non-negative."""
        if v < 0:
            raise ValueError("limit must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.subject_confidence_divisor <= 0 or self.topic_confidence_divisor <= 0:
            errors.append("Confidence divisors must be > 0")

        if self.phrase_ngram_size < 1:
            errors.append("PHRASE_NGRAM_SIZE must be >= 1")

        if self.vocab_suggestion_min_docs < 1:
            errors.append("VOCAB_SUGGESTION_MIN_DOCS must be >= 1")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def index_dirs_list(self) -> list[str]:
        """Parse comma-separated index directories."""
        return [d.strip() for d in self.index_dirs.split(",") if d.strip()]

    @property
    def index_formats_list(self) -> list[str]:
        """Parse comma-separated index formats."""
        return [f.strip().lstrip(".") for f in self.index_formats.split(",") if f.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
