"""Tests for the per-repository notes store."""
import json
from datetime import datetime
from unittest.mock import Mock

import pytest
from git import Repo
from rich.console import Console

from commitgenius.git import GitRepository
from commitgenius.notes import NOTES_FILENAME, NotesStore


@pytest.fixture
def store(temp_git_repo):
    return NotesStore(GitRepository(temp_git_repo), console=Mock(spec=Console))


def test_notes_file_lives_in_git_dir(store, temp_git_repo):
    repo = GitRepository(temp_git_repo)
    assert store.path == repo.git_dir / NOTES_FILENAME
    assert store.repository == str(repo.root)


def test_load_without_file_is_empty(store):
    assert store.load() == []
    assert store.exists is False


def test_add_then_list_keeps_insertion_order(store):
    store.add("first reason")
    store.add("  second reason  ")
    store.add("third")

    notes = store.list()
    assert [note.message for note in notes] == ["first reason", "second reason", "third"]
    assert all(isinstance(note.timestamp, datetime) for note in notes)
    assert notes[0].timestamp <= notes[1].timestamp <= notes[2].timestamp


def test_add_rejects_blank_message(store):
    with pytest.raises(ValueError):
        store.add("   ")
    assert store.exists is False


def test_add_writes_expected_json(store):
    store.add("explain the retry")

    data = json.loads(store.path.read_text())
    assert data["repository"] == store.repository
    assert data["notes"][0]["message"] == "explain the retry"
    assert "timestamp" in data["notes"][0]


def test_add_leaves_no_temp_files(store):
    store.add("one")
    store.add("two")

    leftovers = [p for p in store.path.parent.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


def test_clear_is_idempotent(store):
    store.add("note")

    assert store.clear() is True
    assert store.clear() is False
    assert store.list() == []


def test_corrupt_file_loads_empty_with_warning(store):
    store.path.write_text("{not json")

    assert store.load() == []
    store.console.print.assert_called_once()
    assert "Warning" in store.console.print.call_args[0][0]
    # The broken file is left alone
    assert store.path.exists()


def test_wrong_schema_loads_empty(store):
    store.path.write_text(json.dumps({"notes": "nope"}))
    assert store.load() == []


def test_add_after_corrupt_file_starts_fresh(store):
    store.path.write_text("garbage")

    store.add("fresh")
    assert [note.message for note in store.list()] == ["fresh"]


def test_notes_from_another_repository_are_ignored(temp_git_repo, tmp_path):
    store_a = NotesStore(GitRepository(temp_git_repo), console=Mock(spec=Console))
    store_a.add("belongs to A")

    other = tmp_path / "other"
    Repo.init(other)
    store_b = NotesStore(GitRepository(str(other)), console=Mock(spec=Console))

    # Simulate the file being copied into repository B
    store_b.path.write_text(store_a.path.read_text())

    assert store_b.load() == []
    # A mismatched file is never removed automatically
    assert store_b.path.exists()
    assert [note.message for note in store_a.load()] == ["belongs to A"]


def test_corrupt_file_warning_keeps_error_details(temp_git_repo):
    console = Console(record=True, width=400)
    store = NotesStore(GitRepository(temp_git_repo), console=console)
    store.path.write_text("{not json")

    assert store.load() == []
    assert "type=json_invalid" in console.export_text()
