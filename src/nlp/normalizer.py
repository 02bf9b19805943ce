# src/nlp/normalizer.py — v1
"""Term normalization and tokenization."""

from __future__ import annotations

import re
from collections.abc import Collection

_NON_TERM_CHARS = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")
_EDGE_HYPHENS = re.compile(r"^-|-$")
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 2


def normalize(term: str) -> str:
    """Lowercase a term and keep only ``[a-z0-9-]`` with tidy hyphens.

    >>> normalize("  Hands--On! ")
    'hands-on'
    """
    term = term.lower().strip()
    term = _NON_TERM_CHARS.sub("", term)
    term = _HYPHEN_RUNS.sub("-", term)
    return _EDGE_HYPHENS.sub("", term)


def is_stop_word(word: str, stop_words: Collection[str]) -> bool:
    """True if the literal or stemmed form of ``word`` is a stop word."""
    from codexindex.nlp.stemmer import stem_term

    if not stop_words:
        return False
    return normalize(word) in stop_words or stem_term(word) in stop_words


def split_words(text: str) -> list[str]:
    """Lowercase and split ``text`` without any stop-word filtering."""
    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return [w for w in _WHITESPACE.split(cleaned) if len(w) >= MIN_TOKEN_LENGTH]


def tokenize(text: str, stop_words: Collection[str] = ()) -> list[str]:
    """Split text into lowercase tokens, dropping 1-char tokens and stop words."""
    return [w for w in split_words(text) if not is_stop_word(w, stop_words)]
