# tests/integration/test_int_indexing.py — v1
"""End-to-end indexing: scan a knowledge tree, classify, cache, write artifacts."""

from __future__ import annotations

import json

import pytest

from codexindex.cache.cache_factory import create_cache_store
from codexindex.cache.change_detector import ChangeDetectionCache
from codexindex.indexer.builder import index_directory
from codexindex.indexer.writer import write_index


@pytest.fixture(params=["json", "sqlite"])
def persistent_settings(request, settings):
    settings.cache_backend = request.param
    return settings


def _open(settings) -> ChangeDetectionCache:
    return ChangeDetectionCache(create_cache_store(settings))


class TestIndexingPipeline:
    @pytest.mark.asyncio
    async def test_full_run(self, knowledge_tree, store, settings):
        cache = _open(settings)
        result = await index_directory(knowledge_tree, store, cache=cache, settings=settings)
        cache.store.close()

        by_path = {e.path: e for e in result.entries}
        assert set(by_path) == {
            "docs/api-guide.md",
            "weaves/tech/research-notes.md",
            "weaves/tech/strand.yaml",
        }

        api = by_path["docs/api-guide.md"].auto_generated
        assert "technology" in api.subjects
        assert "testing" in api.topics

        notes = by_path["weaves/tech/research-notes.md"].auto_generated
        assert notes.subjects[0] == "science"
        assert notes.difficulty == "advanced"

        strand = by_path["weaves/tech/strand.yaml"]
        assert strand.metadata["title"] == "Deploy Strand"
        assert "deployment" in strand.auto_generated.topics

        report = result.report
        assert report.summary.total_files == 4  # 3 documents + diagram.png
        assert report.summary.skipped_files == 1
        assert report.cache.added == [e.path for e in result.entries]

    @pytest.mark.asyncio
    async def test_rerun_served_from_cache(self, knowledge_tree, store, persistent_settings):
        cache = _open(persistent_settings)
        first = await index_directory(knowledge_tree, store, cache=cache, settings=persistent_settings)
        cache.store.close()

        # New process: fresh store instance over the same cache location.
        cache = _open(persistent_settings)
        second = await index_directory(knowledge_tree, store, cache=cache, settings=persistent_settings)
        assert second.report.summary.cached_files == 3
        assert sorted(second.report.cache.unchanged) == sorted(e.path for e in first.entries)
        assert [e.auto_generated.subjects for e in second.entries] == [
            e.auto_generated.subjects for e in first.entries
        ]

        stats = await cache.stats()
        assert stats.total_files == 3
        cache.store.close()

    @pytest.mark.asyncio
    async def test_edit_and_delete(self, knowledge_tree, store, settings):
        cache = _open(settings)
        await index_directory(knowledge_tree, store, cache=cache, settings=settings)

        guide = knowledge_tree / "docs" / "api-guide.md"
        guide.write_text(guide.read_text(encoding="utf-8") + "\nDeploy it.\n", encoding="utf-8")
        (knowledge_tree / "weaves" / "tech" / "strand.yaml").unlink()

        result = await index_directory(knowledge_tree, store, cache=cache, settings=settings)
        assert result.report.cache.modified == ["docs/api-guide.md"]
        assert result.report.cache.deleted == ["weaves/tech/strand.yaml"]
        assert result.report.summary.cached_files == 1

        assert await cache.prune(result.report.cache.deleted) == 1
        assert (await cache.stats()).total_files == 2
        cache.store.close()

    @pytest.mark.asyncio
    async def test_artifacts_written(self, knowledge_tree, store, settings):
        result = await index_directory(knowledge_tree, store, settings=settings)
        index_path, report_path = write_index(result, settings.index_output_dir)

        entries = json.loads(index_path.read_text(encoding="utf-8"))
        assert len(entries) == 3
        assert all(len(e["content"]) <= 5000 for e in entries)
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report["summary"]["indexed_files"] == 3
        assert report["cache"] is None
