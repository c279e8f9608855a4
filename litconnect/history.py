"""
Analysis history.

Every generated analysis is prepended to a newest-first list capped at
HISTORY_LIMIT entries (the oldest is evicted) and persisted to local
storage. Entries can be viewed, deleted one by one or cleared, and the whole
list can be exported as a pretty-printed JSON document.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from litconnect.config import EXPORT_PREFIX, HISTORY_KEY, HISTORY_LIMIT, HISTORY_PREVIEW_CHARS
from litconnect.errors import ValidationError
from litconnect.models import AnalysisResult, Book, HistoryEntry
from litconnect.storage import LocalStorage

logger = logging.getLogger(__name__)


def preview(text: str, limit: int = HISTORY_PREVIEW_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


class AnalysisHistory:
    """Newest-first, size-capped list of saved analyses."""

    def __init__(
        self,
        storage: LocalStorage,
        limit: int = HISTORY_LIMIT,
        clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.limit = limit
        self.clock = clock
        self._entries: list[HistoryEntry] = []
        for item in storage.get(HISTORY_KEY, []):
            try:
                self._entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed history entry: %s", e)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def _persist(self) -> None:
        if self._entries:
            self.storage.set(HISTORY_KEY, [e.to_dict() for e in self._entries])
        else:
            self.storage.remove(HISTORY_KEY)

    def _next_id(self) -> int:
        entry_id = int(self.clock() * 1000)
        if self._entries:
            entry_id = max(entry_id, max(e.id for e in self._entries) + 1)
        return entry_id

    def add(self, text: str, books: Sequence[Book], analysis: AnalysisResult) -> HistoryEntry:
        """Save an analysis as the newest entry, evicting beyond the limit."""
        entry = HistoryEntry(
            id=self._next_id(),
            timestamp=datetime.fromtimestamp(self.clock(), timezone.utc).isoformat(),
            user_text=preview(text),
            full_text=text,
            books=[b.ref() for b in books],
            analysis=analysis,
        )
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        self._persist()
        return entry

    def get(self, entry_id: int) -> Optional[HistoryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def delete(self, entry_id: int) -> bool:
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        if len(self._entries) == before:
            return False
        self._persist()
        return True

    def clear(self) -> None:
        self._entries = []
        self._persist()

    def to_json(self) -> str:
        return json.dumps([e.to_dict() for e in self._entries], ensure_ascii=False, indent=2)

    def export(self, directory: Path) -> Path:
        """Write the history to ``<directory>/litconnect-history-<millis>.json``."""
        if not self._entries:
            raise ValidationError("No history to export.")
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{EXPORT_PREFIX}-{int(self.clock() * 1000)}.json"
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info("Exported %d history entries to %s", len(self._entries), path)
        return path
