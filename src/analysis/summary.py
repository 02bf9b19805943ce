# src/analysis/summary.py — v1
"""Extractive one-sentence summaries for documents without one."""

from __future__ import annotations

import re

from codexindex.vocab.store import VocabularyStore

_FENCED_CODE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]+`")
_HEADING_MARKS = re.compile(r"#{1,6}\s")
_SENTENCE_SPLIT = re.compile(r"[.!?]+\s+")

MIN_SENTENCE_CHARS = 20
FALLBACK_CHARS = 200
MAX_SUMMARY_CHARS = 300
SUMMARY_KEYWORDS = 20


def strip_markup(content: str) -> str:
    """Remove code blocks, inline code and heading markers."""
    content = _FENCED_CODE.sub("", content)
    content = _INLINE_CODE.sub("", content)
    content = _HEADING_MARKS.sub("", content)
    return content.strip()


def generate_summary(content: str, store: VocabularyStore) -> str:
    """Pick the sentence that best overlaps the document's leading keywords.

    Falls back to the first 200 characters when no sentence is long enough,
    and truncates the chosen sentence to 300 characters.
    """
    clean = strip_markup(content)
    sentences = [
        s for s in _SENTENCE_SPLIT.split(clean) if len(s) > MIN_SENTENCE_CHARS
    ]
    if not sentences:
        return clean[:FALLBACK_CHARS] + "..."

    keyword_set = set(store.tokenize(clean)[:SUMMARY_KEYWORDS])
    best = max(
        sentences,
        key=lambda s: sum(1 for w in store.tokenize(s) if w in keyword_set),
    )
    if len(best) > MAX_SUMMARY_CHARS:
        return best[: MAX_SUMMARY_CHARS - 3] + "..."
    return best
