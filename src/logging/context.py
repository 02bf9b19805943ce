# src/logging/context.py — v2
"""Contextual logging support: attach run_id, document path and step to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per indexing run and per document.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_document_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document_path", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    document_path: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        document_path=_document_path.get(),
        step=_step.get(),
    )


def set_run_context(run_id: str) -> None:
    """Set run-level context (once per indexing run)."""
    _run_id.set(run_id)


def set_document_context(document_path: str | None, step: str | None = None) -> None:
    """Set document-level context (per document analysed)."""
    _document_path.set(document_path)
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _document_path.set(None)
    _step.set(None)
