# src/analysis/keywords.py — v2
"""Keyword and phrase extraction.

Two ranking modes:

* TF-IDF: ``tf = count / doc_tokens``, ``idf = ln(N / df)`` over the batch
  of documents currently being indexed (``idf = 0`` when no document holds
  the term). Top 15 terms.
* Heuristic: ``count * ln(len(stem) + 1)`` over stemmed tokens, for when no
  corpus is available. Each stem is paired with a readable literal term
  from the vocabulary's stemmed index.

Rankings are stable: equal scores keep first-occurrence order.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Sequence

from codexindex.analysis.classifier import classify
from codexindex.analysis.models import DocumentAnalysis, Keyword, TaxonomyMetadata
from codexindex.nlp.stemmer import stem_term
from codexindex.vocab.store import VocabularyStore

logger = logging.getLogger(__name__)

TFIDF_TOP_K = 15
HEURISTIC_LIMIT = 20
PHRASE_LIMIT = 10


class Corpus:
    """Document-frequency table for the batch being indexed.

    Documents are tokenized once on ``add``; ``idf`` then costs a dict
    lookup instead of re-tokenizing every corpus text per term.
    """

    def __init__(self, store: VocabularyStore, texts: Iterable[str] = ()) -> None:
        self._store = store
        self._size = 0
        self._document_frequency: Counter[str] = Counter()
        for text in texts:
            self.add(text)

    def __len__(self) -> int:
        return self._size

    def add(self, text: str) -> None:
        self._size += 1
        self._document_frequency.update(set(self._store.tokenize(text)))

    def document_frequency(self, term: str) -> int:
        return self._document_frequency.get(term, 0)

    def idf(self, term: str) -> float:
        """``ln(N / df)``; zero when no document contains the term."""
        df = self.document_frequency(term)
        if df == 0 or self._size == 0:
            return 0.0
        return math.log(self._size / df)


def extract_keywords_tfidf(
    text: str,
    corpus: Corpus | Sequence[str],
    store: VocabularyStore,
    limit: int = TFIDF_TOP_K,
) -> list[str]:
    """Top terms of ``text`` by TF-IDF against ``corpus``.

    Args:
        text: Document text.
        corpus: Batch texts, or a prebuilt Corpus.
        store: Vocabulary store providing tokenization.
        limit: Maximum number of keywords returned.

    Returns:
        Terms ordered by descending score, ties in first-occurrence order.
    """
    tokens = store.tokenize(text)
    if not tokens or limit <= 0:
        return []
    if not isinstance(corpus, Corpus):
        corpus = Corpus(store, corpus)

    counts = Counter(tokens)
    doc_length = len(tokens)
    scores = {
        term: (count / doc_length) * corpus.idf(term)
        for term, count in counts.items()
    }
    ranked = sorted(scores, key=lambda term: scores[term], reverse=True)
    return ranked[:limit]


def extract_keywords(
    text: str, store: VocabularyStore, limit: int = HEURISTIC_LIMIT
) -> list[Keyword]:
    """Corpus-free keyword ranking over stemmed tokens."""
    if limit <= 0:
        return []
    frequency = Counter(stem_term(t) for t in store.tokenize(text))
    frequency.pop("", None)

    scored = [
        Keyword(
            word=word,
            original=store.original_term(word),
            score=count * math.log(len(word) + 1),
        )
        for word, count in frequency.items()
    ]
    scored.sort(key=lambda kw: kw.score, reverse=True)
    return scored[:limit]


def extract_phrases(
    text: str, store: VocabularyStore, n: int = 2, limit: int = PHRASE_LIMIT
) -> list[str]:
    """Contiguous n-grams occurring more than once, most frequent first."""
    if n <= 0:
        return []
    tokens = store.tokenize(text)
    ngrams = Counter(
        " ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)
    )
    repeated = [(phrase, count) for phrase, count in ngrams.items() if count > 1]
    repeated.sort(key=lambda item: item[1], reverse=True)
    return [phrase for phrase, _ in repeated[:limit]]


def analysis_text(content: str, metadata: dict | None = None) -> str:
    """Body prefixed with the front-matter title and summary."""
    metadata = metadata or {}
    return f"{metadata.get('title') or ''} {metadata.get('summary') or ''} {content}"


def analyze_document(
    content: str,
    corpus: Corpus | Sequence[str],
    store: VocabularyStore,
    metadata: dict | None = None,
    keyword_limit: int = TFIDF_TOP_K,
    phrase_size: int = 2,
    phrase_limit: int = PHRASE_LIMIT,
    **classify_options: object,
) -> DocumentAnalysis:
    """Keywords, phrases and classification for one document.

    The front-matter title and summary are prepended to the body so that
    they weigh into every score.
    """
    metadata = metadata or {}
    text = analysis_text(content, metadata)

    categories = classify(
        text,
        store,
        metadata=TaxonomyMetadata.from_metadata(metadata),
        **classify_options,  # type: ignore[arg-type]
    )
    return DocumentAnalysis(
        keywords=extract_keywords_tfidf(text, corpus, store, limit=keyword_limit),
        phrases=extract_phrases(text, store, n=phrase_size, limit=phrase_limit),
        categories=categories,
    )
