# src/main.py — v3
"""CLI entry point — index, classify, keywords, vocab-stats and cache commands.

Usage:
    codexindex index <base_dir> [options]
    codexindex classify <file>
    codexindex keywords <file> [--limit N]
    codexindex vocab-stats
    codexindex cache-stats
    codexindex cache-clear
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from codexindex.config.settings import Settings, load_settings
from codexindex.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="codexindex",
        description=f"codexindex v{__version__} — vocabulary-driven document indexer",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- index ---
    p_index = subparsers.add_parser(
        "index", help="Build the search index for a content tree",
    )
    p_index.add_argument("base_dir", type=Path, help="Content root directory")
    p_index.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (default: CODEX_INDEX_OUTPUT_DIR)",
    )
    p_index.add_argument(
        "--dirs", default=None,
        help="Comma-separated subdirectories to scan (default: CODEX_INDEX_DIRS)",
    )
    p_index.add_argument(
        "--no-cache", action="store_true",
        help="Analyze every document, ignoring the change-detection cache",
    )
    p_index.set_defaults(func=_cmd_index)

    # --- classify ---
    p_classify = subparsers.add_parser(
        "classify", help="Classify a single document",
    )
    p_classify.add_argument("file", type=Path, help="Path to document")
    p_classify.set_defaults(func=_cmd_classify)

    # --- keywords ---
    p_keywords = subparsers.add_parser(
        "keywords", help="Extract heuristic keywords from a single document",
    )
    p_keywords.add_argument("file", type=Path, help="Path to document")
    p_keywords.add_argument(
        "--limit", type=int, default=None,
        help="Maximum keywords (default: CODEX_HEURISTIC_KEYWORD_LIMIT)",
    )
    p_keywords.set_defaults(func=_cmd_keywords)

    # --- vocab-stats ---
    p_vocab = subparsers.add_parser(
        "vocab-stats", help="Show vocabulary statistics",
    )
    p_vocab.set_defaults(func=_cmd_vocab_stats)

    # --- cache ---
    p_cache_stats = subparsers.add_parser(
        "cache-stats", help="Show change-detection cache statistics",
    )
    p_cache_stats.set_defaults(func=_cmd_cache_stats)

    p_cache_clear = subparsers.add_parser(
        "cache-clear", help="Remove all cache entries",
    )
    p_cache_clear.set_defaults(func=_cmd_cache_clear)

    return parser


async def _cmd_index(args: argparse.Namespace, settings: Settings) -> int:
    """Scan, analyze and write codex-index.json / codex-report.json."""
    from codexindex.batch.scanner import DocumentScanner
    from codexindex.enhance.enhancer_factory import create_enhancer
    from codexindex.indexer.builder import DocumentIndexer
    from codexindex.indexer.writer import write_index

    base_dir: Path = args.base_dir
    if not base_dir.is_dir():
        logger.error("Not a directory: %s", base_dir)
        return 1

    dirs = [d.strip() for d in args.dirs.split(",") if d.strip()] if args.dirs else None
    scan = DocumentScanner(settings).scan(base_dir, dirs=dirs)

    cache = None
    if settings.cache_enabled and not args.no_cache:
        cache = _open_cache(settings)

    indexer = DocumentIndexer(
        _load_store(settings),
        cache=cache,
        settings=settings,
        enhancer=create_enhancer(settings),
    )
    try:
        result = await indexer.build(
            scan.documents, skipped=scan.skipped, scan_errors=scan.errors,
        )
    finally:
        if cache is not None:
            cache.store.close()

    out_dir = args.output or settings.index_output_dir
    index_path, report_path = write_index(result, out_dir)

    summary = result.report.summary
    print("\nIndex complete:")
    print(f"  Files found:  {summary.total_files}")
    print(f"  Indexed:      {summary.indexed_files}")
    print(f"  From cache:   {summary.cached_files}")
    print(f"  Skipped:      {summary.skipped_files}")
    print(f"  Errors:       {len(result.report.errors)}")
    print(f"  Index:        {index_path}")
    print(f"  Report:       {report_path}")
    return 0


async def _cmd_classify(args: argparse.Namespace, settings: Settings) -> int:
    """Print the classification of one document as JSON.

    Classifies the same title + summary + body text the indexer does.
    """
    from codexindex.analysis.classifier import classify
    from codexindex.analysis.keywords import analysis_text
    from codexindex.indexer.builder import complete_metadata

    loaded = _read_document(args.file)
    if loaded is None:
        return 1
    metadata, content = loaded

    store = _load_store(settings)
    metadata = complete_metadata(args.file.name, content, metadata, store)
    result = classify(
        analysis_text(content, metadata),
        store,
        metadata=metadata,
        subject_divisor=settings.subject_confidence_divisor,
        topic_divisor=settings.topic_confidence_divisor,
        default_difficulty=settings.default_difficulty,
    )
    print(result.model_dump_json(indent=2))
    return 0


async def _cmd_keywords(args: argparse.Namespace, settings: Settings) -> int:
    """Print heuristic keywords of one document as JSON."""
    from codexindex.analysis.keywords import extract_keywords

    loaded = _read_document(args.file)
    if loaded is None:
        return 1
    _, content = loaded

    limit = settings.heuristic_keyword_limit if args.limit is None else args.limit
    keywords = extract_keywords(content, _load_store(settings), limit=limit)
    print(json.dumps([k.model_dump() for k in keywords], indent=2))
    return 0


async def _cmd_vocab_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print vocabulary statistics as JSON."""
    print(_load_store(settings).stats().model_dump_json(indent=2))
    return 0


async def _cmd_cache_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print cache statistics as JSON."""
    cache = _open_cache(settings)
    try:
        stats = await cache.stats()
    finally:
        cache.store.close()
    print(stats.model_dump_json(indent=2))
    return 0


async def _cmd_cache_clear(args: argparse.Namespace, settings: Settings) -> int:
    """Remove every cache entry."""
    cache = _open_cache(settings)
    try:
        await cache.clear()
    finally:
        cache.store.close()
    print(f"Cache cleared ({settings.cache_backend}: {settings.cache_root})")
    return 0


def _load_store(settings: Settings):
    from codexindex.vocab.store import VocabularyStore

    return VocabularyStore(settings.vocab_dir).load_all()


def _open_cache(settings: Settings):
    from codexindex.cache.cache_factory import create_cache_store
    from codexindex.cache.change_detector import ChangeDetectionCache

    return ChangeDetectionCache(create_cache_store(settings))


def _read_document(path: Path) -> tuple[dict, str] | None:
    """Read and split a document into (metadata, body); None on failure."""
    from codexindex.batch.frontmatter import FrontMatterError, parse_document

    if not path.is_file():
        logger.error("File not found: %s", path)
        return None
    try:
        text = path.read_text(encoding="utf-8")
        return parse_document(text, path.suffix.lstrip(".").lower())
    except (OSError, UnicodeDecodeError, FrontMatterError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return None


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from codexindex.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
