"""
Tests for local storage and the analysis history.

Run with: pytest tests/test_history.py -v
"""

import json

import pytest

from conftest import make_book
from litconnect.analysis import analyze
from litconnect.config import HISTORY_KEY
from litconnect.errors import ValidationError
from litconnect.history import AnalysisHistory, preview
from litconnect.storage import LocalStorage


def add_entry(history, text="Some text", books=None):
    books = books or [make_book(1)]
    return history.add(text, books, analyze(text, books))


class TestLocalStorage:
    """Tests for the JSON-file key/value store."""

    def test_round_trip(self, tmp_path):
        """Values written are read back by a new store."""
        path = tmp_path / "storage.json"
        storage = LocalStorage(path)
        storage.set("textDraft", "draft text")
        storage.set("settings", {"fontSize": "large"})

        reopened = LocalStorage(path)
        assert reopened.get("textDraft") == "draft text"
        assert reopened.get("settings") == {"fontSize": "large"}
        assert sorted(reopened.keys()) == ["settings", "textDraft"]

    def test_remove(self, storage):
        """Removed keys fall back to the default."""
        storage.set("key", 1)
        storage.remove("key")
        storage.remove("missing")
        assert storage.get("key") is None
        assert storage.get("key", "default") == "default"

    def test_corrupt_file_starts_empty(self, tmp_path):
        """A corrupt file is treated as empty."""
        path = tmp_path / "storage.json"
        path.write_text("not json", encoding="utf-8")
        assert LocalStorage(path).keys() == []

    def test_creates_parent_directory(self, tmp_path):
        """Missing parent directories are created on write."""
        storage = LocalStorage(tmp_path / "nested" / "dir" / "storage.json")
        storage.set("a", 1)
        assert (tmp_path / "nested" / "dir" / "storage.json").exists()


class TestPreview:
    """Tests for the history text preview."""

    def test_short_text_unchanged(self):
        """Short text is kept as is."""
        assert preview("short") == "short"

    def test_truncated(self):
        """Long text is cut at 200 characters with an ellipsis."""
        text = "x" * 250
        assert preview(text) == "x" * 200 + "..."

    def test_exact_limit(self):
        """Text of exactly the limit is not truncated."""
        assert preview("x" * 200) == "x" * 200


class TestAnalysisHistory:
    """Tests for the bounded analysis history."""

    def test_add_newest_first(self, storage, clock):
        """New entries go to the front."""
        history = AnalysisHistory(storage, clock=clock)
        first = add_entry(history, "first")
        clock.advance(1)
        second = add_entry(history, "second")

        assert [e.id for e in history.entries] == [second.id, first.id]
        assert second.full_text == "second"
        assert second.books == [{"id": 1, "title": "Book 1", "author": "Author 1"}]

    def test_limit_evicts_oldest(self, storage, clock):
        """The oldest entry is dropped past the limit."""
        history = AnalysisHistory(storage, clock=clock)
        entries = []
        for i in range(51):
            entries.append(add_entry(history, f"text {i}"))
            clock.advance(0.5)

        assert len(history) == 50
        assert history.entries[0].full_text == "text 50"
        assert history.get(entries[0].id) is None
        assert history.get(entries[1].id) is not None

    def test_ids_strictly_increase_with_frozen_clock(self, storage, clock):
        """Ids increase even when the clock does not move."""
        history = AnalysisHistory(storage, clock=clock)
        ids = [add_entry(history).id for _ in range(3)]
        assert ids == sorted(set(ids))
        assert ids[0] == int(clock() * 1000)

    def test_preview_stored(self, storage, clock):
        """The preview and the full text are both stored."""
        history = AnalysisHistory(storage, clock=clock)
        entry = add_entry(history, "y" * 300)
        assert entry.user_text == "y" * 200 + "..."
        assert entry.full_text == "y" * 300

    def test_persisted(self, tmp_path, clock):
        """Entries survive a reload from storage."""
        path = tmp_path / "storage.json"
        history = AnalysisHistory(LocalStorage(path), clock=clock)
        entry = add_entry(history, "persist me")

        reloaded = AnalysisHistory(LocalStorage(path), clock=clock)
        assert len(reloaded) == 1
        restored = reloaded.get(entry.id)
        assert restored.full_text == "persist me"
        assert restored.analysis.to_dict() == entry.analysis.to_dict()

    def test_malformed_entries_skipped(self, storage, clock):
        """Malformed stored entries are skipped."""
        storage.set(HISTORY_KEY, [{"no": "id"}, {"id": 5, "timestamp": "2024-01-01T00:00:00"}])
        history = AnalysisHistory(storage, clock=clock)
        assert [e.id for e in history.entries] == [5]

    def test_delete(self, storage, clock):
        """Deleting reports whether an entry was removed."""
        history = AnalysisHistory(storage, clock=clock)
        a = add_entry(history, "a")
        b = add_entry(history, "b")

        assert history.delete(a.id) is True
        assert history.delete(a.id) is False
        assert [e.id for e in history.entries] == [b.id]

    def test_clear_removes_key(self, storage, clock):
        """Clearing removes the storage key."""
        history = AnalysisHistory(storage, clock=clock)
        add_entry(history)
        history.clear()

        assert len(history) == 0
        assert HISTORY_KEY not in storage.keys()

    def test_export(self, storage, clock, tmp_path):
        """Export writes an indented JSON file named by timestamp."""
        history = AnalysisHistory(storage, clock=clock)
        add_entry(history, "exported")
        path = history.export(tmp_path / "exports")

        assert path.name == f"litconnect-history-{int(clock() * 1000)}.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["full_text"] == "exported"
        assert path.read_text(encoding="utf-8").startswith("[\n  {")

    def test_export_empty(self, storage, tmp_path):
        """Exporting an empty history is refused."""
        history = AnalysisHistory(storage)
        with pytest.raises(ValidationError, match="No history to export."):
            history.export(tmp_path)
