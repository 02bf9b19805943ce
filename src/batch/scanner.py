# src/batch/scanner.py — v2
"""Document scanner: walk the knowledge tree and read documents.

Walks the configured top-level directories (``weaves``, ``docs``, ...) of a
base directory, skipping hidden entries and ``node_modules``, and returns
one SourceDocument per markdown/YAML file with front matter split off.
Unreadable files are reported, never raised.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from codexindex.batch.frontmatter import FrontMatterError, parse_document
from codexindex.batch.models import ScanError, ScanResult, SourceDocument

if TYPE_CHECKING:
    from codexindex.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_DIRS = ("weaves", "schema", "docs", "wiki")
DEFAULT_FORMATS = ("md", "mdx", "yaml", "yml")
IGNORED_NAMES = frozenset({"node_modules"})


class DocumentScanner:
    """Discover and read indexable documents under a base directory."""

    def __init__(self, settings: Settings | None = None) -> None:
        if settings is None:
            self._dirs = list(DEFAULT_DIRS)
            self._formats = set(DEFAULT_FORMATS)
        else:
            self._dirs = settings.index_dirs_list
            self._formats = set(settings.index_formats_list)

    def iter_files(self, root: Path) -> list[Path]:
        """Files under ``root`` in sorted order, hidden entries excluded."""
        files: list[Path] = []
        for path in sorted(root.rglob("*")):
            relative = path.relative_to(root)
            if any(p.startswith(".") or p in IGNORED_NAMES for p in relative.parts):
                continue
            if path.is_file():
                files.append(path)
        return files

    def scan(self, base_dir: Path | str, dirs: list[str] | None = None) -> ScanResult:
        """Read every supported document below ``base_dir``.

        Args:
            base_dir: Repository root; document paths are relative to it.
            dirs: Top-level directories to walk (defaults to configured ones).
                An empty string walks ``base_dir`` itself.

        Returns:
            ScanResult with documents, skip count and read errors.
        """
        base = Path(base_dir)
        if not base.is_dir():
            raise ValueError(f"Scan root is not a directory: {base}")

        result = ScanResult(base_dir=str(base))
        for name in dirs if dirs is not None else self._dirs:
            root = base / name if name else base
            if not root.is_dir():
                logger.debug("Skipping missing directory %s", root)
                continue
            logger.info("Indexing %s/", name or ".")
            for path in self.iter_files(root):
                self._read(path, base, result)

        logger.info(
            "Scanned %s: %d documents, %d skipped, %d errors",
            base, len(result.documents), result.skipped, len(result.errors),
        )
        return result

    def _read(self, path: Path, base: Path, result: ScanResult) -> None:
        relative = path.relative_to(base).as_posix()
        fmt = path.suffix.lower().lstrip(".")
        if fmt not in self._formats:
            result.skipped += 1
            return
        try:
            raw = path.read_text(encoding="utf-8")
            metadata, content = parse_document(raw, fmt)
        except (OSError, UnicodeDecodeError, FrontMatterError) as e:
            logger.warning("Cannot read %s: %s", relative, e)
            result.errors.append(ScanError(file=relative, error=str(e)))
            result.skipped += 1
            return

        result.documents.append(
            SourceDocument(
                path=relative,
                name=path.name,
                format=fmt,
                raw=raw,
                content=content,
                metadata=metadata,
            )
        )
