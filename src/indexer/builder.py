# src/indexer/builder.py — v2
"""Index builder: run the analysis core over a batch of documents.

Per run:
  1. Build the batch corpus (document frequencies for TF-IDF).
  2. Check every fingerprint against the change-detection cache, then diff
     the batch paths so edited documents are reported as modified.
  3. For each document, reuse the cached analysis when its fingerprint
     still matches, otherwise analyze and save.
  4. Validate, collect suggestions, optionally enhance.
  5. Aggregate the report and vocabulary-expansion suggestions.
  6. Store per-directory (loom) stats in the cache.

A failure on one document (including cache read/write errors) is recorded
in the report and the batch continues. A cache that cannot be listed only
costs the report its diff section.
"""

from __future__ import annotations

import logging
import posixpath
import re
import time
import uuid
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from codexindex.analysis.keywords import Corpus, analyze_document
from codexindex.analysis.models import DocumentAnalysis
from codexindex.analysis.summary import generate_summary
from codexindex.analysis.validation import suggest_improvements, validate_content
from codexindex.batch.models import ScanError, SourceDocument
from codexindex.cache.change_detector import ChangeDetectionCache
from codexindex.cache.models import LoomStats
from codexindex.config.settings import Settings
from codexindex.enhance.base_enhancer import BaseEnhancer, NullEnhancer
from codexindex.indexer.models import (
    AutoGenerated,
    ConfidenceScore,
    FileIssues,
    IndexEntry,
    IndexingError,
    IndexReport,
    IndexResult,
)
from codexindex.logging.context import set_document_context, set_run_context
from codexindex.nlp.stemmer import stem_term
from codexindex.vocab.models import VocabularySuggestion
from codexindex.vocab.store import VocabularyStore

logger = logging.getLogger(__name__)

_README = "README.md"
_CACHE_ERROR_FILE = "<cache>"


class DocumentIndexer:
    """Builds index entries and a report from source documents."""

    def __init__(
        self,
        store: VocabularyStore,
        cache: ChangeDetectionCache | None = None,
        settings: Settings | None = None,
        enhancer: BaseEnhancer | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._settings = settings or Settings(_env_file=None)  # type: ignore[call-arg]
        self._enhancer = enhancer or NullEnhancer()

    async def build(
        self,
        documents: Sequence[SourceDocument],
        skipped: int = 0,
        scan_errors: Iterable[ScanError] = (),
    ) -> IndexResult:
        """Index a batch of documents.

        Args:
            documents: Documents to index, already read and parsed.
            skipped: Files the scanner skipped (counted in the report).
            scan_errors: Files the scanner failed to read.

        Returns:
            IndexResult with one entry per indexed document and the report.
        """
        t0 = time.perf_counter()
        run_id = uuid.uuid4().hex[:12]
        set_run_context(run_id)

        report = IndexReport(run_id=run_id, generated_at=datetime.now(timezone.utc))
        report.summary.total_files = len(documents) + skipped
        report.summary.skipped_files = skipped
        report.errors.extend(IndexingError(file=e.file, error=e.error) for e in scan_errors)

        corpus = Corpus(self._store, (doc.content for doc in documents))
        changed = await self._check_changed(documents)
        if self._cache is not None:
            try:
                report.cache = await self._cache.diff(doc.path for doc in documents)
            except Exception as e:
                logger.exception("Cache diff failed, continuing without it")
                report.errors.append(IndexingError(file=_CACHE_ERROR_FILE, error=str(e)))

        entries: list[IndexEntry] = []
        for doc in documents:
            set_document_context(doc.path, step="index")
            try:
                entry = await self._index_document(doc, corpus, changed.get(doc.path, True))
            except Exception as e:
                logger.exception("Failed to index %s", doc.path)
                report.errors.append(IndexingError(file=doc.path, error=str(e)))
                report.summary.skipped_files += 1
                continue
            entries.append(entry)
            if entry.auto_generated.from_cache:
                report.summary.cached_files += 1
        set_document_context(None)

        report.summary.indexed_files = len(entries)
        _aggregate(entries, report)
        report.vocabulary.total_unique_terms = len(
            {kw for e in entries for kw in e.auto_generated.keywords}
        )
        report.vocabulary.suggested_additions = self.suggest_vocabulary(entries)
        report.looms = loom_stats(entries)
        await self._save_loom_stats(report)

        logger.info(
            "Indexed %d/%d documents (%d from cache, %d errors) in %.2fs",
            report.summary.indexed_files, report.summary.total_files,
            report.summary.cached_files, len(report.errors),
            time.perf_counter() - t0,
        )
        return IndexResult(entries=entries, report=report)

    async def analyze(
        self,
        doc: SourceDocument,
        corpus: Corpus,
        metadata: dict[str, Any],
        changed: bool = True,
    ) -> tuple[DocumentAnalysis, bool]:
        """Cached analysis if still fresh, else a new one (saved to cache).

        ``changed`` is the result of the fingerprint check for ``doc``.

        Returns:
            ``(analysis, from_cache)``.
        """
        if self._cache is not None and not changed:
            cached = await self._cache.get_cached(doc.path)
            if cached is not None:
                try:
                    return DocumentAnalysis.model_validate(cached), True
                except ValidationError as e:
                    logger.warning("Discarding malformed cached analysis for %s: %s", doc.path, e)

        s = self._settings
        analysis = analyze_document(
            doc.content,
            corpus,
            self._store,
            metadata=metadata,
            keyword_limit=s.tfidf_top_k,
            phrase_size=s.phrase_ngram_size,
            phrase_limit=s.phrase_limit,
            subject_divisor=s.subject_confidence_divisor,
            topic_divisor=s.topic_confidence_divisor,
            default_difficulty=s.default_difficulty,
        )
        if self._cache is not None:
            await self._cache.save(doc.path, doc.raw, analysis)
        return analysis, False

    def suggest_vocabulary(self, entries: Sequence[IndexEntry]) -> list[VocabularySuggestion]:
        """Keywords no vocabulary term covers that recur across documents."""
        known = self._store.all_terms()
        frequency: Counter[str] = Counter()
        for entry in entries:
            for keyword in dict.fromkeys(entry.auto_generated.keywords):
                if keyword in known or stem_term(keyword) in known:
                    continue
                frequency[keyword] += 1

        min_docs = self._settings.vocab_suggestion_min_docs
        ranked = [(t, c) for t, c in frequency.items() if c >= min_docs]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return [
            VocabularySuggestion(term=t, frequency=c)
            for t, c in ranked[: self._settings.vocab_suggestion_limit]
        ]

    async def _check_changed(self, documents: Sequence[SourceDocument]) -> dict[str, bool]:
        """Fingerprint check per document; failures count as changed."""
        changed: dict[str, bool] = {}
        if self._cache is None:
            return changed
        for doc in documents:
            try:
                changed[doc.path] = await self._cache.check_changed(doc.path, doc.raw)
            except Exception as e:
                logger.warning("Change check failed for %s, reanalyzing: %s", doc.path, e)
                changed[doc.path] = True
        return changed

    async def _save_loom_stats(self, report: IndexReport) -> None:
        if self._cache is None:
            return
        for loom_path, stats in report.looms.items():
            try:
                report.looms[loom_path] = await self._cache.update_loom_stats(loom_path, stats)
            except Exception as e:
                logger.warning("Cannot store loom stats for %s: %s", loom_path or ".", e)
                report.errors.append(IndexingError(file=loom_path or ".", error=str(e)))

    async def _index_document(
        self, doc: SourceDocument, corpus: Corpus, changed: bool
    ) -> IndexEntry:
        metadata = complete_metadata(doc.name, doc.content, doc.metadata, self._store)

        analysis, from_cache = await self.analyze(doc, corpus, metadata, changed)
        categories = analysis.categories

        validation = validate_content(metadata, doc.content)
        validation.suggestions = suggest_improvements(metadata, analysis)

        enhancement = await self._enhancer.enhance(analysis, metadata)
        enhancement_payload = None if enhancement.is_empty() else enhancement.to_payload()

        search_text = " ".join(
            [
                str(metadata.get("title") or ""),
                str(metadata.get("summary") or ""),
                " ".join(analysis.keywords),
                " ".join(analysis.phrases),
            ]
        ).lower()

        return IndexEntry(
            path=doc.path,
            name=doc.name,
            metadata=metadata,
            auto_generated=AutoGenerated(
                keywords=analysis.keywords,
                phrases=analysis.phrases,
                subjects=categories.subjects,
                topics=categories.topics,
                difficulty=categories.difficulty,
                confidence=categories.confidence,
                last_indexed=datetime.now(timezone.utc),
                from_cache=from_cache,
            ),
            validation=validation,
            enhancement=enhancement_payload,
            content=doc.content[: self._settings.index_content_max_chars],
            search_text=search_text,
        )


def complete_metadata(
    name: str, content: str, metadata: dict[str, Any], store: VocabularyStore
) -> dict[str, Any]:
    """Copy of ``metadata`` with title and summary fallbacks filled in.

    The title comes from the file name (except for READMEs), the summary
    from the first sentences of the body.
    """
    metadata = dict(metadata)
    if not metadata.get("title") and name != _README:
        metadata["title"] = title_from_filename(name)
    if not metadata.get("summary") and content.strip():
        metadata["summary"] = generate_summary(content, store)
    return metadata


def title_from_filename(name: str) -> str:
    """``getting-started_guide.md`` -> ``Getting Started Guide``."""
    base = re.sub(r"\.(md|mdx|yaml|yml)$", "", name)
    base = re.sub(r"[-_]", " ", base)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), base)


def loom_stats(entries: Sequence[IndexEntry]) -> dict[str, LoomStats]:
    """Aggregate entries per parent directory (loom).

    ``avg_difficulty`` is the most common level; subjects and topics are
    ordered by how many documents carry them. Ties keep first occurrence.
    Documents at the root are grouped under ``""``.
    """
    grouped: dict[str, list[AutoGenerated]] = {}
    for entry in entries:
        grouped.setdefault(posixpath.dirname(entry.path), []).append(entry.auto_generated)

    looms: dict[str, LoomStats] = {}
    for loom_path in sorted(grouped):
        autos = grouped[loom_path]
        difficulty = Counter(a.difficulty for a in autos).most_common(1)
        looms[loom_path] = LoomStats(
            total_files=len(autos),
            total_keywords=sum(len(a.keywords) for a in autos),
            avg_difficulty=difficulty[0][0] if difficulty else None,
            subjects=_ranked(label for a in autos for label in a.subjects),
            topics=_ranked(label for a in autos for label in a.topics),
        )
    return looms


def _ranked(labels: Iterable[str]) -> list[str]:
    return [label for label, _ in Counter(labels).most_common()]


def _aggregate(entries: Sequence[IndexEntry], report: IndexReport) -> None:
    """Fill categorisation and validation sections of the report."""
    cat = report.categorization
    val = report.validation
    summary = report.summary

    for entry in entries:
        auto = entry.auto_generated
        for subject in auto.subjects:
            cat.by_subject[subject] = cat.by_subject.get(subject, 0) + 1
        for topic in auto.topics:
            cat.by_topic[topic] = cat.by_topic.get(topic, 0) + 1
        cat.by_difficulty[auto.difficulty] = cat.by_difficulty.get(auto.difficulty, 0) + 1
        cat.confidence_scores.extend(
            ConfidenceScore(file=entry.path, category=label, score=score)
            for label, score in auto.confidence.items()
        )

        checks = entry.validation
        if checks.valid:
            summary.valid_files += 1
        else:
            summary.files_with_errors += 1
            val.file_errors.append(FileIssues(path=entry.path, issues=checks.errors))
            for error in checks.errors:
                val.common_errors[error] = val.common_errors.get(error, 0) + 1
        if checks.warnings:
            summary.files_with_warnings += 1
            val.file_warnings.append(FileIssues(path=entry.path, issues=checks.warnings))
            for warning in checks.warnings:
                val.common_warnings[warning] = val.common_warnings.get(warning, 0) + 1
        if checks.suggestions:
            summary.files_with_suggestions += 1


async def index_directory(
    base_dir: Path | str,
    store: VocabularyStore,
    cache: ChangeDetectionCache | None = None,
    settings: Settings | None = None,
    enhancer: BaseEnhancer | None = None,
) -> IndexResult:
    """Scan ``base_dir`` and index everything found."""
    from codexindex.batch.scanner import DocumentScanner

    scan = DocumentScanner(settings).scan(base_dir)
    indexer = DocumentIndexer(store, cache=cache, settings=settings, enhancer=enhancer)
    return await indexer.build(scan.documents, skipped=scan.skipped, scan_errors=scan.errors)
