"""
Tests for the analysis session: selection, validation, drafts, restore and
debounced automatic analysis.

Run with: pytest tests/test_session.py -v
"""

import asyncio

import pytest

from litconnect.config import DRAFT_KEY
from litconnect.errors import ValidationError
from litconnect.session import AnalysisSession


@pytest.fixture
def session(catalog, storage, clock):
    return AnalysisSession(catalog, storage, clock=clock, auto_delay=0.01)


class TestSelection:
    """Tests for book selection."""

    def test_select_and_deselect(self, session):
        """Selection keeps order and ignores repeats."""
        session.select(8)
        session.select(5)
        session.select(8)

        assert [b.id for b in session.selected_books] == [8, 5]
        session.deselect(8)
        assert [b.id for b in session.selected_books] == [5]

    def test_unknown_book(self, session):
        """Selecting an unknown id is rejected."""
        with pytest.raises(ValidationError):
            session.select(999)

    def test_toggle(self, session):
        """Toggling flips the selection."""
        assert session.toggle(3) is True
        assert session.is_selected(3)
        assert session.toggle(3) is False
        assert not session.is_selected(3)

    def test_clear_selection(self, session):
        """Clearing empties the selection."""
        session.select(1)
        session.clear_selection()
        assert session.selected_books == []


class TestGenerate:
    """Tests for running an analysis."""

    def test_blank_text(self, session):
        """Blank text is rejected."""
        session.select(1)
        with pytest.raises(ValidationError, match="Please enter some text to analyze."):
            session.generate("   ")

    def test_no_books(self, session):
        """An empty selection is rejected."""
        with pytest.raises(ValidationError, match="Please select at least one book for comparison."):
            session.generate("Some text")

    def test_generate_saves_history(self, session):
        """A result is stored and added to history."""
        session.select(8)
        result = session.generate("Living in the borderlands")

        assert session.last_result is result
        assert len(session.history) == 1
        assert session.history.entries[0].book_ids == [8]
        assert result.timestamp.startswith("2023-11-14")

    def test_generate_without_saving(self, session):
        """History is skipped when saving is off."""
        session.select(8)
        session.generate("Living in the borderlands", save=False)
        assert len(session.history) == 0

    def test_restore(self, session, clock):
        """Restoring reloads the text, selection and result."""
        session.select(8)
        session.select(5)
        session.generate("first text")
        entry_id = session.history.entries[0].id
        session.clear_selection()

        entry = session.restore(entry_id)
        assert entry.full_text == "first text"
        assert [b.id for b in session.selected_books] == [8, 5]
        assert session.last_result.user_text == "first text"

    def test_restore_missing(self, session):
        """Restoring an unknown id is rejected."""
        with pytest.raises(ValidationError):
            session.restore(123)


class TestDraft:
    """Tests for the text draft."""

    def test_save_load_clear(self, session, storage):
        """A draft is saved, loaded and cleared."""
        session.save_draft("work in progress")
        assert session.load_draft() == "work in progress"
        assert storage.get(DRAFT_KEY) == "work in progress"

        session.clear_draft()
        assert session.load_draft() is None

    def test_blank_draft(self, session):
        """A blank draft is rejected."""
        with pytest.raises(ValidationError, match="No text to save."):
            session.save_draft("  ")


class TestAutoAnalysis:
    """Tests for debounced automatic analysis."""

    def test_burst_runs_once(self, session):
        """A burst of changes runs one analysis with the last text."""
        async def burst():
            session.select(8)
            session.schedule_auto_analysis("borderlands one")
            session.select(5)
            session.schedule_auto_analysis("borderlands two")
            task = session.schedule_auto_analysis("borderlands three")
            assert session.auto_analysis_pending
            return await task

        result = asyncio.run(burst())

        assert result.user_text == "borderlands three"
        assert len(session.history) == 1
        assert not session.auto_analysis_pending

    def test_nothing_scheduled_without_selection(self, session):
        """Nothing runs without a selected book."""
        async def schedule():
            return session.schedule_auto_analysis("some text")

        assert asyncio.run(schedule()) is None
        assert len(session.history) == 0

    def test_nothing_scheduled_for_blank_text(self, session):
        """Nothing runs for blank text."""
        async def schedule():
            session.select(1)
            return session.schedule_auto_analysis("  ")

        assert asyncio.run(schedule()) is None

    def test_selection_emptied_while_waiting(self, session):
        """A run whose selection was emptied is skipped."""
        async def run():
            session.select(1)
            task = session.schedule_auto_analysis("some text")
            session.clear_selection()
            return await task

        assert asyncio.run(run()) is None
        assert len(session.history) == 0
