# src/analysis/classifier.py — v1
"""Vocabulary-based document classifier.

Scores tokenized text against the subjects, topics and difficulty
vocabularies of a VocabularyStore.

Subjects and topics are multi-label: every label with at least one matching
term is kept, with confidence ``min(matches / divisor, 1)``. Topic
vocabularies are smaller and more specific than subject vocabularies, so the
topic divisor is lower (3 vs 5).

Difficulty is single-label: the label with the most matches wins; ties go
to the label declared first (sorted file-name order in the vocabulary
directory); no match at all falls back to the default level.

Explicit taxonomy metadata is merged last: subjects/topics are unioned with
the computed labels, an explicit difficulty always overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from codexindex.analysis.models import ClassificationResult, TaxonomyMetadata
from codexindex.nlp.stemmer import stem_term
from codexindex.vocab.store import VocabularyStore

logger = logging.getLogger(__name__)

SUBJECT_CONFIDENCE_DIVISOR = 5
TOPIC_CONFIDENCE_DIVISOR = 3
DEFAULT_DIFFICULTY = "intermediate"


def build_match_set(text: str, store: VocabularyStore) -> set[str]:
    """Literal tokens of ``text`` together with their stems."""
    tokens = store.tokenize(text)
    return set(tokens) | {stem_term(t) for t in tokens}


def count_matches(terms: Iterable[str], match_set: set[str]) -> int:
    """Number of vocabulary terms present (literally or stemmed) in the match set."""
    return sum(1 for t in terms if t in match_set or stem_term(t) in match_set)


def score_labels(
    labels: dict[str, frozenset[str]],
    match_set: set[str],
    divisor: float,
) -> dict[str, float]:
    """Confidence per matching label, in label declaration order."""
    scores: dict[str, float] = {}
    for label, terms in labels.items():
        matches = count_matches(terms, match_set)
        if matches > 0:
            scores[label] = min(matches / divisor, 1.0)
    return scores


def pick_difficulty(
    levels: dict[str, frozenset[str]],
    match_set: set[str],
    default: str = DEFAULT_DIFFICULTY,
) -> str:
    """Level with the highest match count; first declared wins ties."""
    best_level = default
    best_score = 0
    for level, terms in levels.items():
        matches = count_matches(terms, match_set)
        if matches > best_score:
            best_score = matches
            best_level = level
    return best_level


def merge_metadata(
    result: ClassificationResult, metadata: TaxonomyMetadata
) -> ClassificationResult:
    """Union explicit subjects/topics; explicit difficulty wins."""
    return ClassificationResult(
        subjects=_ordered_union(result.subjects, metadata.subjects),
        topics=_ordered_union(result.topics, metadata.topics),
        difficulty=metadata.difficulty or result.difficulty,
        confidence=dict(result.confidence),
    )


def classify(
    text: str,
    store: VocabularyStore,
    metadata: TaxonomyMetadata | dict | None = None,
    subject_divisor: float = SUBJECT_CONFIDENCE_DIVISOR,
    topic_divisor: float = TOPIC_CONFIDENCE_DIVISOR,
    default_difficulty: str = DEFAULT_DIFFICULTY,
) -> ClassificationResult:
    """Classify text against the store's vocabularies.

    Args:
        text: Raw document text.
        store: Loaded (or lazily loading) vocabulary store.
        metadata: Explicit taxonomy, either a TaxonomyMetadata or a raw
            front-matter dict.
        subject_divisor: Matches needed for full subject confidence.
        topic_divisor: Matches needed for full topic confidence.
        default_difficulty: Level used when no difficulty term matches.

    Returns:
        ClassificationResult with labels and per-label confidence.
    """
    match_set = build_match_set(text, store)

    subject_scores = score_labels(store.load_category("subjects"), match_set, subject_divisor)
    topic_scores = score_labels(store.load_category("topics"), match_set, topic_divisor)
    difficulty = pick_difficulty(
        store.load_category("difficulty"), match_set, default=default_difficulty
    )

    result = ClassificationResult(
        subjects=list(subject_scores),
        topics=list(topic_scores),
        difficulty=difficulty,
        confidence={**subject_scores, **topic_scores},
    )
    logger.debug(
        "Classified %d distinct terms: subjects=%s topics=%s difficulty=%s",
        len(match_set), result.subjects, result.topics, result.difficulty,
    )

    if metadata is None:
        return result
    if not isinstance(metadata, TaxonomyMetadata):
        metadata = TaxonomyMetadata.from_metadata(metadata)
    return merge_metadata(result, metadata)


def _ordered_union(first: list[str], second: list[str]) -> list[str]:
    return list(dict.fromkeys([*first, *second]))
