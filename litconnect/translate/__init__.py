"""
Translation through the MyMemory API.

This package provides:
- languages: the language catalog
- chunking: request-sized splitting of long text
- mymemory: the HTTP client
- service: TranslationService (cache, pacing, Spanglish, rejoin)
"""

from litconnect.translate.chunking import split_text
from litconnect.translate.languages import (
    AUTO_DETECT,
    LANGUAGES,
    SPANGLISH,
    get_all_languages,
    get_language_name,
)

__all__ = [
    "AUTO_DETECT",
    "LANGUAGES",
    "SPANGLISH",
    "get_all_languages",
    "get_language_name",
    "split_text",
]
