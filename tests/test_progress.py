"""
Tests for ProgressStore.

Tests cover:
- Loading missing, valid and damaged files
- Recording completions once and persisting them
- Default location
"""

import json

import pytest

from zen.challenges import ProgressStore, default_progress_path


@pytest.fixture
def path(tmp_path):
    return tmp_path / "zen" / "progress.json"


class TestLoad:

    def test_missing_file_is_empty(self, path):
        store = ProgressStore(path)
        assert store.load() == []

    def test_reads_ids(self, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps(["stack-001", "struct-002", "stack-001"]))
        store = ProgressStore(path)
        assert store.load() == ["stack-001", "struct-002"]
        assert store.is_completed("struct-002")

    def test_corrupt_file_is_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        assert ProgressStore(path).load() == []

    def test_wrong_shape_is_empty(self, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"completed": ["stack-001"]}))
        assert ProgressStore(path).load() == []


class TestRecording:

    def test_mark_once(self, path):
        store = ProgressStore(path)
        assert store.mark_completed("stack-001")
        assert not store.mark_completed("stack-001")
        assert store.completed == ["stack-001"]

    def test_persists(self, path):
        ProgressStore(path).mark_completed("balance-002")
        reloaded = ProgressStore(path)
        reloaded.load()
        assert reloaded.is_completed("balance-002")

    def test_reset(self, path):
        store = ProgressStore(path)
        store.mark_completed("stack-001")
        store.reset()
        assert store.completed == []
        assert json.loads(path.read_text()) == []


class TestDefaultPath:

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ZEN_PROGRESS_FILE", str(tmp_path / "p.json"))
        assert default_progress_path() == tmp_path / "p.json"

    def test_data_dir(self, monkeypatch):
        monkeypatch.delenv("ZEN_PROGRESS_FILE", raising=False)
        path = default_progress_path()
        assert path.name == "progress.json"
        assert path.parent.name == "zen"
