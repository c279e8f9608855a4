"""
Exception hierarchy for LitConnect.

- ValidationError: user input rejected before any work starts
- CatalogError: the book catalog could not be read or parsed
- TranslationError / RateLimitError: remote translation failures. These are
  raised inside the translation service only; its public methods convert
  them into ``TranslationOutcome.error``.
"""

from __future__ import annotations


class LitConnectError(Exception):
    """Base class for all LitConnect errors."""


class ValidationError(LitConnectError, ValueError):
    """Input rejected (empty text, nothing selected, nothing to export)."""


class CatalogError(LitConnectError):
    """Catalog file missing or malformed."""


class TranslationError(LitConnectError):
    """A remote translation request failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class RateLimitError(TranslationError):
    """The translation API refused the request (HTTP 403 class)."""

    def __init__(self, message: str = "Rate limit reached. Please wait a moment."):
        super().__init__(message, status=403)
