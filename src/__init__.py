# src/__init__.py — v1
"""codexindex — vocabulary-driven classification and search indexing for documentation trees."""

from codexindex.version import __version__

__all__ = ["__version__"]
