# src/vocab/store.py — v2
"""Vocabulary store: term lists, stemmed lookups and the stop-word set.

Directory layout::

    vocab/
    ├── subjects/       one <label>.txt per subject
    ├── topics/         one <label>.txt per topic
    ├── difficulty/     one <label>.txt per level
    └── stopwords.txt

The store is an explicit context object. The host builds one, calls
``load_all()`` (or lets the first lookup load lazily) and passes it to the
classifier and keyword extractor. Loaded data is append-only for the
lifetime of the instance; loads are serialised by a lock so a fully loaded
store can be shared read-only.

A missing directory or file degrades to an empty vocabulary with a warning.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from codexindex.nlp.normalizer import is_stop_word, normalize, tokenize
from codexindex.nlp.stemmer import stem_term
from codexindex.vocab.models import CATEGORIES, CategoryName, VocabularyStats

logger = logging.getLogger(__name__)

DEFAULT_VOCAB_DIR = Path(__file__).parent / "data"
STOP_WORDS_FILE = "stopwords.txt"
TERM_FILE_SUFFIX = ".txt"


class VocabularyStore:
    """Loads vocabulary term lists and answers normalized/stemmed lookups."""

    def __init__(self, vocab_dir: Path | str | None = None) -> None:
        self._vocab_dir = Path(vocab_dir).expanduser() if vocab_dir else DEFAULT_VOCAB_DIR
        self._lock = threading.RLock()
        self._file_cache: dict[Path, frozenset[str]] = {}
        self._stop_words: frozenset[str] | None = None
        self._categories: dict[str, dict[str, frozenset[str]]] = {}
        # stem -> literal terms, insertion ordered (dict used as ordered set)
        self._stemmed_index: dict[str, dict[str, None]] = {}

    @property
    def vocab_dir(self) -> Path:
        return self._vocab_dir

    # --- Loading ---

    def load_file(self, path: Path | str) -> frozenset[str]:
        """Load one term-list file, memoized per path.

        Returns the matchable set: every literal term plus its stem.
        """
        file_path = Path(path)
        with self._lock:
            cached = self._file_cache.get(file_path)
            if cached is not None:
                return cached

            if not file_path.is_file():
                logger.warning("Vocabulary file not found: %s", file_path)
                self._file_cache[file_path] = frozenset()
                return self._file_cache[file_path]

            literals: list[str] = []
            stems: list[str] = []
            for line in file_path.read_text(encoding="utf-8").splitlines():
                stripped = line.strip()
                if not stripped or stripped.startswith("#"):
                    continue
                term = normalize(stripped)
                if not term:
                    continue
                literals.append(term)
                stemmed = stem_term(term)
                if stemmed:
                    stems.append(stemmed)
                    self._stemmed_index.setdefault(stemmed, {})[term] = None

            terms = frozenset(literals) | frozenset(stems)
            self._file_cache[file_path] = terms
            logger.debug(
                "Loaded %d terms (%d literal) from %s",
                len(terms), len(set(literals)), file_path,
            )
            return terms

    def load_stop_words(self) -> frozenset[str]:
        """Load ``stopwords.txt`` at the vocabulary root, with stems."""
        with self._lock:
            if self._stop_words is not None:
                return self._stop_words
            words = self.load_file(self._vocab_dir / STOP_WORDS_FILE)
            stems = {stem_term(w) for w in words}
            stems.discard("")
            self._stop_words = words | frozenset(stems)
            return self._stop_words

    def load_category(self, name: CategoryName | str) -> dict[str, frozenset[str]]:
        """Load every ``<label>.txt`` in a category directory.

        Labels are returned in sorted file-name order; that order is the
        declaration order used to break difficulty ties.
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            category_dir = self._vocab_dir / name
            if not category_dir.is_dir():
                logger.warning("Vocabulary category directory not found: %s", category_dir)
                self._categories[name] = {}
                return {}

            labels: dict[str, frozenset[str]] = {}
            for file_path in sorted(category_dir.glob(f"*{TERM_FILE_SUFFIX}")):
                labels[file_path.stem] = self.load_file(file_path)

            self._categories[name] = labels
            logger.info("Loaded vocabulary category %s: %d labels", name, len(labels))
            return labels

    def load_all(self) -> VocabularyStore:
        """Eagerly load stop words and every category."""
        self.load_stop_words()
        for name in CATEGORIES:
            self.load_category(name)
        return self

    # --- Lookups ---

    def stem(self, term: str) -> str:
        return stem_term(term)

    def is_stop_word(self, word: str) -> bool:
        return is_stop_word(word, self.load_stop_words())

    def tokenize(self, text: str) -> list[str]:
        """Tokenize text against this store's stop words."""
        return tokenize(text, self.load_stop_words())

    def original_term(self, stemmed: str) -> str:
        """Representative literal term for a stem (first one recorded)."""
        with self._lock:
            literals = self._stemmed_index.get(stemmed)
            return next(iter(literals)) if literals else stemmed

    def literal_terms(self, stemmed: str) -> list[str]:
        """All literal terms recorded for a stem."""
        with self._lock:
            return list(self._stemmed_index.get(stemmed, {}))

    def all_terms(self) -> set[str]:
        """Every matchable term across all three categories."""
        terms: set[str] = set()
        for name in CATEGORIES:
            for label_terms in self.load_category(name).values():
                terms.update(label_terms)
        return terms

    # --- Reporting ---

    def stats(self) -> VocabularyStats:
        """Counts for whatever has been loaded so far."""
        per_category = {
            name: {label: len(terms) for label, terms in self._categories.get(name, {}).items()}
            for name in CATEGORIES
        }
        return VocabularyStats(
            stop_words=len(self._stop_words or ()),
            subjects=per_category["subjects"],
            topics=per_category["topics"],
            difficulty=per_category["difficulty"],
            total_terms=sum(sum(counts.values()) for counts in per_category.values()),
            stemmed_index=len(self._stemmed_index),
        )

    def to_legacy_format(self) -> dict[str, dict[str, list[str]]]:
        """Plain ``{category: {label: [terms]}}`` dict for JSON export."""
        return {
            name: {
                label: sorted(terms)
                for label, terms in self._categories.get(name, {}).items()
            }
            for name in CATEGORIES
        }
