"""
Project-wide configuration and directory structure.

This module defines the paths, endpoints and tuning constants used
throughout LitConnect. Values that depend on the user's machine can be
overridden through environment variables.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Package data directory (bundled catalog)
    DEFAULT_CATALOG: Path to the bundled book catalog
    HOME_DIR: Per-user directory holding local storage and exports
    STORAGE_FILE: JSON file used as local key/value storage
    MYMEMORY_ENDPOINT: Translation API endpoint
    CHUNK_SIZE: Maximum characters per translation request
    REQUEST_DELAY: Seconds between consecutive translation requests
    HISTORY_LIMIT: Maximum number of analyses kept in history

Environment overrides:
    LITCONNECT_HOME: replaces HOME_DIR
    LITCONNECT_MYMEMORY_ENDPOINT: replaces MYMEMORY_ENDPOINT

Example:
    >>> from litconnect.config import DEFAULT_CATALOG, CHUNK_SIZE
    >>> print(f"Catalog at: {DEFAULT_CATALOG} ({CHUNK_SIZE} chars/request)")
"""

import os
from pathlib import Path

# Application name for display and identification
APP_NAME = "LitConnect"

# Bundled data directory (book catalog)
DATA_DIR = Path(__file__).resolve().parent / "data"

# Default book catalog
DEFAULT_CATALOG = DATA_DIR / "books.json"

# Per-user directory for local storage and exported history
HOME_DIR = Path(os.getenv("LITCONNECT_HOME", Path.home() / ".litconnect"))

# Local key/value storage file (draft and history)
STORAGE_FILE = HOME_DIR / "storage.json"

# Storage keys
DRAFT_KEY = "textDraft"
HISTORY_KEY = "analysisHistory"

# MyMemory translation API
MYMEMORY_ENDPOINT = os.getenv(
    "LITCONNECT_MYMEMORY_ENDPOINT", "https://api.mymemory.translated.net/get"
)
REQUEST_TIMEOUT = 10  # seconds
CHUNK_SIZE = 500  # characters per request (free tier limit)
REQUEST_DELAY = 0.3  # seconds between requests

# Analysis history
HISTORY_LIMIT = 50
HISTORY_PREVIEW_CHARS = 200
EXPORT_PREFIX = "litconnect-history"

# Debounce before an automatic analysis after a selection change
AUTO_ANALYSIS_DELAY = 1.5  # seconds
