# src/indexer/writer.py — v1
"""Write the index artifact and report to disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from codexindex.indexer.models import IndexResult

logger = logging.getLogger(__name__)

INDEX_FILE = "codex-index.json"
REPORT_FILE = "codex-report.json"


def write_index(result: IndexResult, out_dir: Path | str) -> tuple[Path, Path]:
    """Write ``codex-index.json`` and ``codex-report.json`` into ``out_dir``.

    Returns:
        Paths of the index and report files.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    index_path = out / INDEX_FILE
    entries = [entry.model_dump(mode="json") for entry in result.entries]
    index_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    report_path = out / REPORT_FILE
    report_path.write_text(result.report.model_dump_json(indent=2), encoding="utf-8")

    logger.info("Wrote %s (%d entries) and %s", index_path, len(entries), report_path)
    return index_path, report_path
