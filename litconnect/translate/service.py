"""
Translation service.

Wraps the MyMemory API with:
- exact-match caching of successful translations for the service lifetime
- chunking of long text and strictly sequential, paced chunk requests
- a word-by-word mode for Spanglish input
- script-aware rejoining of the translated chunks

Public coroutines never raise: failures are reported through
``TranslationOutcome.error`` (translation) or a fallback value (language
detection). Blocking HTTP calls run in the event loop's default executor.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

import requests

from litconnect.config import CHUNK_SIZE, REQUEST_DELAY
from litconnect.errors import RateLimitError, TranslationError, ValidationError
from litconnect.refine.postprocess import rejoin
from litconnect.refine.scoring import QualityReport, analyze_translation
from litconnect.translate.chunking import split_text
from litconnect.translate.languages import AUTO_DETECT, SPANGLISH
from litconnect.translate.mymemory import MyMemoryClient
from litconnect.utils import RequestPacer

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
GENERIC_FAILURE = "Translation failed"


class TranslationClient(Protocol):
    def fetch(self, text: str, langpair: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class TranslationOutcome:
    """Result of ``TranslationService.translate``."""
    translation: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {"translation": self.translation, "error": self.error}


@dataclass
class TranslationReport:
    """Result of the translate-and-review workflow."""
    original: str
    source_lang: str
    target_lang: str
    outcome: TranslationOutcome
    detected: bool = False
    quality: Optional[QualityReport] = None

    @property
    def translation(self) -> str:
        return self.outcome.translation

    @property
    def error(self) -> Optional[str]:
        return self.outcome.error


class TranslationService:
    """Translate text through the MyMemory API.

    Usage:
        service = TranslationService()
        outcome = await service.translate("Hola mundo", "es", "en")
        if outcome.ok:
            print(outcome.translation)

    Args:
        client: Object with ``fetch(text, langpair) -> dict`` (MyMemoryClient
            by default)
        chunk_size: Maximum characters per request
        request_delay: Minimum seconds between consecutive requests
        clock: Monotonic clock used for pacing
        sleep: Awaitable sleep used for pacing
    """

    def __init__(
        self,
        client: Optional[TranslationClient] = None,
        chunk_size: int = CHUNK_SIZE,
        request_delay: float = REQUEST_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client or MyMemoryClient()
        self.chunk_size = chunk_size
        self.pacer = RequestPacer(request_delay, clock=clock, sleep=sleep)
        # Unbounded for the service lifetime
        self.cache: Dict[tuple[str, str, str], TranslationOutcome] = {}
        self._lock = asyncio.Lock()
        self._stats = {"requests": 0, "cache_hits": 0, "failures": 0}

    def get_stats(self) -> Dict[str, int]:
        return self._stats.copy()

    def clear_cache(self) -> None:
        self.cache.clear()

    async def _fetch(self, text: str, langpair: str) -> Dict[str, Any]:
        await self.pacer.wait()
        self._stats["requests"] += 1
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.client.fetch, text, langpair)

    async def detect_language(self, text: str) -> str:
        """Detect the language of ``text``; falls back to English on failure."""
        try:
            data = await self._fetch(text[: self.chunk_size], f"autodetect|{DEFAULT_LANGUAGE}")
            detected = (data.get("responseData") or {}).get("detectedLanguage")
        except Exception:
            logger.exception("Language detection failed")
            return DEFAULT_LANGUAGE
        return detected if isinstance(detected, str) and detected else DEFAULT_LANGUAGE

    async def _translate_chunk(self, chunk: str, langpair: str) -> str:
        try:
            data = await self._fetch(chunk, langpair)
        except requests.RequestException as e:
            raise TranslationError(f"Network error: {e}") from e

        status = data.get("responseStatus")
        if str(status) == "403":
            raise RateLimitError()
        translated = (data.get("responseData") or {}).get("translatedText")
        if translated and str(status) in ("200", "None"):
            return translated
        message = data.get("responseDetails") or data.get("responseMessage") or GENERIC_FAILURE
        raise TranslationError(str(message), status=status if isinstance(status, int) else None)

    async def _translate_chunks(self, text: str, source_lang: str, target_lang: str) -> str:
        langpair = f"{source_lang}|{target_lang}"
        chunks = split_text(text, self.chunk_size)
        translations = []
        # one call's chunks are never interleaved with another call's
        async with self._lock:
            for i, chunk in enumerate(chunks, 1):
                logger.debug("Translating chunk %d/%d (%d chars)", i, len(chunks), len(chunk))
                translations.append(await self._translate_chunk(chunk, langpair))
        return rejoin(translations, target_lang)

    async def translate(self, text: str, source_lang: str, target_lang: str) -> TranslationOutcome:
        """Translate ``text`` from ``source_lang`` to ``target_lang``.

        Returns:
            TranslationOutcome with the translation, or an empty translation
            and an error message. Partial translations are discarded.
        """
        if not text or not text.strip():
            return TranslationOutcome("", None)

        key = (text, source_lang, target_lang)
        cached = self.cache.get(key)
        if cached is not None:
            self._stats["cache_hits"] += 1
            return cached

        if source_lang == SPANGLISH:
            return await self.translate_spanglish(text, target_lang)

        try:
            translation = await self._translate_chunks(text, source_lang, target_lang)
        except TranslationError as e:
            self._stats["failures"] += 1
            logger.warning("Translation %s|%s failed: %s", source_lang, target_lang, e.message)
            return TranslationOutcome("", e.message)
        except Exception as e:
            self._stats["failures"] += 1
            logger.exception("Unexpected translation error")
            return TranslationOutcome("", str(e) or GENERIC_FAILURE)

        outcome = TranslationOutcome(translation, None)
        self.cache[key] = outcome
        return outcome

    async def translate_spanglish(self, text: str, target_lang: str) -> TranslationOutcome:
        """Translate word by word as Spanish; untranslatable words stay as-is."""
        words = []
        for word in text.split():
            result = await self.translate(word, "es", target_lang)
            words.append(result.translation or word)
        return TranslationOutcome(" ".join(words), None)

    def analyze_translation(
        self,
        original: str,
        translation: str,
        source_lang: str,
        target_lang: str,
    ) -> QualityReport:
        return analyze_translation(original, translation, source_lang, target_lang)

    async def translate_and_review(
        self,
        text: str,
        source_lang: str = AUTO_DETECT,
        target_lang: str = DEFAULT_LANGUAGE,
    ) -> TranslationReport:
        """Detect (if asked), translate and score ``text``.

        Raises:
            ValidationError: text is blank
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Please enter some text to translate.")

        detected = source_lang == AUTO_DETECT
        if detected:
            source_lang = await self.detect_language(text)
            logger.info("Detected source language: %s", source_lang)

        outcome = await self.translate(text, source_lang, target_lang)
        report = TranslationReport(
            original=text,
            source_lang=source_lang,
            target_lang=target_lang,
            outcome=outcome,
            detected=detected,
        )
        if outcome.ok:
            report.quality = analyze_translation(text, outcome.translation, source_lang, target_lang)
        return report
