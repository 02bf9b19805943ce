# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides a small on-disk vocabulary tree, a loaded VocabularyStore, an
in-memory change-detection cache and a sample knowledge tree. No network.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from codexindex.cache.change_detector import ChangeDetectionCache
from codexindex.cache.memory_store import MemoryCacheStore
from codexindex.config.settings import Settings
from codexindex.logging.context import clear_context
from codexindex.vocab.store import VocabularyStore

VOCABULARY: dict[str, dict[str, list[str]]] = {
    "subjects": {
        "technology": ["api", "code", "software"],
        "science": ["research", "experiment", "data"],
    },
    "topics": {
        "testing": ["test", "coverage"],
        "deployment": ["deploy", "server"],
    },
    "difficulty": {
        "beginner": ["basic", "simple"],
        "advanced": ["complex", "internals"],
    },
}

STOP_WORDS = ["the", "a", "an", "and", "is", "with", "this", "of", "to", "use"]


def write_vocabulary(root: Path) -> Path:
    """Write VOCABULARY and STOP_WORDS under ``root`` as term-list files."""
    for category, labels in VOCABULARY.items():
        category_dir = root / category
        category_dir.mkdir(parents=True, exist_ok=True)
        for label, terms in labels.items():
            (category_dir / f"{label}.txt").write_text(
                "# " + label + "\n\n" + "\n".join(terms) + "\n", encoding="utf-8"
            )
    (root / "stopwords.txt").write_text("\n".join(STOP_WORDS) + "\n", encoding="utf-8")
    return root


# === FIXTURES: Vocabulary ===


@pytest.fixture
def vocab_dir(tmp_path: Path) -> Path:
    """Temporary vocabulary tree."""
    return write_vocabulary(tmp_path / "vocab")


@pytest.fixture
def store(vocab_dir: Path) -> VocabularyStore:
    """Fully loaded store over the temporary vocabulary."""
    return VocabularyStore(vocab_dir).load_all()


# === FIXTURES: Cache & settings ===


@pytest.fixture
def memory_cache() -> ChangeDetectionCache:
    return ChangeDetectionCache(MemoryCacheStore())


@pytest.fixture
def settings(tmp_path: Path, vocab_dir: Path) -> Settings:
    """Settings isolated from any .env file or CODEX_* variables."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        vocab_dir=vocab_dir,
        cache_root=tmp_path / "cache",
        index_output_dir=tmp_path / "out",
    )


# === FIXTURES: Knowledge tree ===


@pytest.fixture
def knowledge_tree(tmp_path: Path) -> Path:
    """A base directory with docs/ and weaves/ content."""
    base = tmp_path / "repo"
    docs = base / "docs"
    weaves = base / "weaves" / "tech"
    docs.mkdir(parents=True)
    weaves.mkdir(parents=True)

    (docs / "api-guide.md").write_text(
        "---\n"
        "title: API Guide\n"
        "summary: How to call the public API from your own code safely.\n"
        "---\n"
        "# API Guide\n\n"
        "This API is built with clean code and tested software. "
        "Every endpoint has test coverage and the server runs the same code in production.\n",
        encoding="utf-8",
    )
    (weaves / "research-notes.md").write_text(
        "---\n"
        "title: Research Notes\n"
        "difficulty: advanced\n"
        "taxonomy:\n"
        "  subjects: [science]\n"
        "---\n"
        "Experiment data from the research group. The data shows complex behaviour "
        "in the experiment and the research continues with more data.\n",
        encoding="utf-8",
    )
    (weaves / "strand.yaml").write_text(
        "title: Deploy Strand\nsummary: Deploying the server with simple steps.\n",
        encoding="utf-8",
    )
    (docs / "diagram.png").write_bytes(b"\x89PNG\r\n")
    hidden = docs / ".drafts"
    hidden.mkdir()
    (hidden / "secret.md").write_text("# hidden\n", encoding="utf-8")
    return base


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
