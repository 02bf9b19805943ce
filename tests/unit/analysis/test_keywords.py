# tests/unit/analysis/test_keywords.py — v1
"""Tests for analysis/keywords.py — TF-IDF, heuristic keywords, phrases."""

from __future__ import annotations

import math

import pytest

from codexindex.analysis.keywords import (
    Corpus,
    analyze_document,
    extract_keywords,
    extract_keywords_tfidf,
    extract_phrases,
)
from codexindex.analysis.models import DocumentAnalysis

MANY_WORDS = " ".join(f"term{i}" for i in range(40))


class TestCorpus:
    def test_document_frequency_counts_documents(self, store):
        corpus = Corpus(store, ["python python code", "code review"])
        assert len(corpus) == 2
        assert corpus.document_frequency("python") == 1
        assert corpus.document_frequency("code") == 2

    def test_idf(self, store):
        corpus = Corpus(store, ["python code", "code review"])
        assert corpus.idf("python") == pytest.approx(math.log(2))
        assert corpus.idf("code") == 0.0

    def test_idf_zero_when_absent(self, store):
        assert Corpus(store, ["alpha beta"]).idf("gamma") == 0.0

    def test_idf_zero_on_empty_corpus(self, store):
        assert Corpus(store).idf("anything") == 0.0

    def test_incremental_add(self, store):
        corpus = Corpus(store)
        corpus.add("alpha beta")
        corpus.add("alpha")
        assert len(corpus) == 2
        assert corpus.document_frequency("alpha") == 2


class TestTfidf:
    def test_ranking(self, store):
        corpus = ["python python code", "code review"]
        assert extract_keywords_tfidf("python python code", corpus, store) == ["python", "code"]

    def test_ties_keep_first_occurrence(self, store):
        corpus = Corpus(store, ["zeta alpha", "other"])
        assert extract_keywords_tfidf("zeta alpha", corpus, store) == ["zeta", "alpha"]

    def test_bounded_by_default_limit(self, store):
        keywords = extract_keywords_tfidf(MANY_WORDS, [MANY_WORDS, "unrelated"], store)
        assert len(keywords) == 15

    def test_custom_limit(self, store):
        assert len(extract_keywords_tfidf(MANY_WORDS, [MANY_WORDS], store, limit=3)) == 3

    def test_empty_text(self, store):
        assert extract_keywords_tfidf("", ["a b"], store) == []

    def test_only_stop_words(self, store):
        assert extract_keywords_tfidf("the and with", ["x"], store) == []


class TestHeuristic:
    def test_scores_and_originals(self, store):
        keywords = extract_keywords("testing tests tested software", store)
        assert [k.word for k in keywords] == ["test", "softwar"]
        assert keywords[0].score == pytest.approx(3 * math.log(5))
        assert keywords[1].original == "software"

    def test_unknown_stem_original_is_stem(self, store):
        keywords = extract_keywords("kubernetes kubernetes", store)
        assert keywords[0].original == keywords[0].word

    def test_bounded(self, store):
        assert len(extract_keywords(MANY_WORDS, store, limit=5)) == 5

    def test_empty(self, store):
        assert extract_keywords("", store) == []


class TestPhrases:
    def test_repeated_bigrams(self, store):
        text = "machine learning models and machine learning pipelines"
        assert extract_phrases(text, store) == ["machine learning"]

    def test_no_repeats(self, store):
        assert extract_phrases("one two three four", store) == []

    def test_trigrams(self, store):
        text = "clean code rules then clean code rules again"
        assert extract_phrases(text, store, n=3) == ["clean code rules"]

    def test_limit(self, store):
        text = "aa bb aa bb cc dd cc dd"
        assert len(extract_phrases(text, store, limit=1)) == 1


class TestAnalyzeDocument:
    def test_combined_record(self, store):
        analysis = analyze_document(
            "Tested software with clean code.",
            ["Tested software with clean code.", "research data"],
            store,
            metadata={"title": "API notes", "difficulty": "advanced"},
        )
        assert isinstance(analysis, DocumentAnalysis)
        assert "technology" in analysis.categories.subjects
        assert analysis.categories.difficulty == "advanced"
        assert "notes" in analysis.keywords

    def test_serialised_shape(self, store):
        data = analyze_document("api code", ["api code"], store).model_dump()
        assert set(data) == {"keywords", "phrases", "categories"}
        assert set(data["categories"]) == {"subjects", "topics", "difficulty", "confidence"}
