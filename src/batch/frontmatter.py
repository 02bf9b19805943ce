# src/batch/frontmatter.py — v1
"""Split markdown front matter and load YAML documents."""

from __future__ import annotations

import re
from typing import Any

import yaml

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


class FrontMatterError(ValueError):
    """Raised when front matter or a YAML document is not a mapping."""


def _load_mapping(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"expected a mapping, got {type(data).__name__}")
    return data


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)`` for a markdown document.

    Documents without a leading ``---`` block get empty metadata and the
    whole text as body.
    """
    match = _FRONT_MATTER.match(text)
    if match is None:
        return {}, text
    return _load_mapping(match.group(1)), text[match.end():]


def parse_document(text: str, fmt: str) -> tuple[dict[str, Any], str]:
    """Metadata and indexable content for a markdown or YAML file.

    YAML files are both: their mapping is the metadata and their text is
    the content.
    """
    if fmt in ("yaml", "yml"):
        return _load_mapping(text), text
    return split_front_matter(text)
