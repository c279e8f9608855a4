"""
Analysis session.

An AnalysisSession owns the state the analysis screen works with: the
catalog, the books currently selected for comparison, the saved draft and
the history. It validates input before running the analyzer and saves each
result to history. Automatic re-analysis after selection changes is
debounced so a burst of edits produces a single run.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from litconnect.analysis import analyze
from litconnect.catalog import Catalog
from litconnect.config import AUTO_ANALYSIS_DELAY, DRAFT_KEY
from litconnect.errors import ValidationError
from litconnect.history import AnalysisHistory
from litconnect.models import AnalysisOptions, AnalysisResult, Book, HistoryEntry
from litconnect.storage import LocalStorage
from litconnect.utils import Debouncer

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Selection, draft, history and analysis for one user.

    Usage:
        session = AnalysisSession(load_catalog())
        session.select(8)
        result = session.generate("Living between languages on the border")
    """

    def __init__(
        self,
        catalog: Catalog,
        storage: Optional[LocalStorage] = None,
        history: Optional[AnalysisHistory] = None,
        clock: Callable[[], float] = time.time,
        auto_delay: float = AUTO_ANALYSIS_DELAY,
    ):
        self.catalog = catalog
        self.storage = storage if storage is not None else LocalStorage()
        self.clock = clock
        self.history = history if history is not None else AnalysisHistory(self.storage, clock=clock)
        self.last_result: Optional[AnalysisResult] = None
        self._selected: list[Book] = []
        self._debouncer = Debouncer(auto_delay, self._auto_generate)

    # Selection

    @property
    def selected_books(self) -> list[Book]:
        return list(self._selected)

    def is_selected(self, book_id: int) -> bool:
        return any(b.id == book_id for b in self._selected)

    def select(self, book_id: int) -> Book:
        book = self.catalog.get(book_id)
        if book is None:
            raise ValidationError(f"Unknown book id: {book_id}")
        if not self.is_selected(book_id):
            self._selected.append(book)
        return book

    def deselect(self, book_id: int) -> None:
        self._selected = [b for b in self._selected if b.id != book_id]

    def toggle(self, book_id: int) -> bool:
        """Flip selection of a book; returns True when it is now selected."""
        if self.is_selected(book_id):
            self.deselect(book_id)
            return False
        self.select(book_id)
        return True

    def clear_selection(self) -> None:
        self._selected = []

    # Analysis

    def generate(
        self,
        text: str,
        options: Optional[AnalysisOptions] = None,
        save: bool = True,
    ) -> AnalysisResult:
        """Analyze ``text`` against the selected books.

        Raises:
            ValidationError: text is blank or no book is selected
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Please enter some text to analyze.")
        if not self._selected:
            raise ValidationError("Please select at least one book for comparison.")

        result = analyze(
            text,
            self._selected,
            options or AnalysisOptions(),
            timestamp=datetime.fromtimestamp(self.clock(), timezone.utc),
        )
        self.last_result = result
        if save:
            self.history.add(text, self._selected, result)
        logger.info(
            "Analyzed %d chars against %d books: %d theme, %d theory connections",
            len(text), len(self._selected),
            len(result.connections.themes), len(result.connections.theories),
        )
        return result

    def schedule_auto_analysis(
        self,
        text: str,
        options: Optional[AnalysisOptions] = None,
    ) -> Optional[asyncio.Task]:
        """Debounced ``generate`` after a selection change.

        Any pending automatic run is cancelled first. Nothing is scheduled
        when the text is blank or no book is selected.
        """
        self._debouncer.cancel()
        if not (text or "").strip() or not self._selected:
            return None
        return self._debouncer.trigger(text, options)

    def _auto_generate(self, text: str, options: Optional[AnalysisOptions]) -> Optional[AnalysisResult]:
        try:
            return self.generate(text, options)
        except ValidationError as e:
            # the selection may have been emptied while waiting
            logger.info("Skipped automatic analysis: %s", e)
            return None

    @property
    def auto_analysis_pending(self) -> bool:
        return self._debouncer.pending

    def restore(self, entry_id: int) -> HistoryEntry:
        """Reload text and selection from a history entry.

        Books no longer in the catalog are dropped from the selection.
        """
        entry = self.history.get(entry_id)
        if entry is None:
            raise ValidationError(f"No history entry with id {entry_id}")
        self._selected = [b for b in (self.catalog.get(i) for i in entry.book_ids) if b]
        self.last_result = entry.analysis
        return entry

    # Drafts

    def save_draft(self, text: str) -> None:
        if not (text or "").strip():
            raise ValidationError("No text to save.")
        self.storage.set(DRAFT_KEY, text)

    def load_draft(self) -> Optional[str]:
        return self.storage.get(DRAFT_KEY)

    def clear_draft(self) -> None:
        self.storage.remove(DRAFT_KEY)
