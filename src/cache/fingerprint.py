# src/cache/fingerprint.py — v3
"""Content fingerprinting for change detection."""

from __future__ import annotations

import hashlib


def compute_fingerprint(content: str | bytes) -> str:
    """SHA-256 hex digest of the raw document content.

    Strings are hashed as UTF-8, so the same text always yields the same
    fingerprint regardless of how it was read.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def fingerprints_match(content: str | bytes, fingerprint: str) -> bool:
    """True if ``content`` hashes to ``fingerprint``."""
    return bool(fingerprint) and compute_fingerprint(content) == fingerprint
