"""
Local key/value storage.

A small JSON file that plays the role browser local storage plays for the
web front-end: it keeps the text draft and the analysis history between
sessions. Values must be JSON-serializable.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from litconnect.config import STORAGE_FILE

logger = logging.getLogger(__name__)


class LocalStorage:
    """JSON-file backed key/value store."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else STORAGE_FILE
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._save()

    def keys(self) -> list[str]:
        return list(self._data)
