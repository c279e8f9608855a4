"""
Heuristic translation quality scoring.

No model is involved: the score is derived from length and word-count
ratios, untranslated passthrough, unknown-character markers and the script
of the target language. Findings are informational notes grouped under
grammar, structure and meaning; only some of them lower the overall
quality (good > moderate > poor), and nothing ever raises it again.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field

from litconnect.translate.languages import is_cjk, is_rtl

QUALITY_LEVELS = ("good", "moderate", "poor")

LENGTH_RATIO_RANGE = (0.5, 2.0)
WORD_RATIO_RANGE = (0.6, 1.8)
UNTRANSLATED_PREFIX = 50
NON_TRIVIAL_LENGTH = 20
UNKNOWN_MARKERS = ("???", "***")

_SENTENCE_END_RE = re.compile(r"[.!?。？！؟]+")


@dataclass
class QualityReport:
    """Outcome of ``analyze_translation``."""
    grammar: list[str] = field(default_factory=list)
    structure: list[str] = field(default_factory=list)
    meaning: list[str] = field(default_factory=list)
    quality: str = "good"

    @property
    def has_notes(self) -> bool:
        return bool(self.grammar or self.structure or self.meaning)

    def downgrade(self, level: str) -> None:
        if QUALITY_LEVELS.index(level) > QUALITY_LEVELS.index(self.quality):
            self.quality = level

    def to_dict(self) -> dict:
        return {
            "grammar": list(self.grammar),
            "structure": list(self.structure),
            "meaning": list(self.meaning),
            "quality": self.quality,
        }


def has_punctuation(text: str) -> bool:
    return any(unicodedata.category(ch).startswith("P") for ch in text)


def _sentence_count(text: str) -> int:
    return len(_SENTENCE_END_RE.findall(text)) or 1


def analyze_translation(
    original: str,
    translation: str,
    source_lang: str,
    target_lang: str,
) -> QualityReport:
    """Score a translation against its original.

    Args:
        original: Source text
        translation: Translated text
        source_lang: Source language code
        target_lang: Target language code

    Returns:
        QualityReport; when nothing was flagged it carries one affirmative
        note per category and quality "good"
    """
    report = QualityReport()

    if original:
        length_ratio = len(translation) / len(original)
        if not LENGTH_RATIO_RANGE[0] <= length_ratio <= LENGTH_RATIO_RANGE[1]:
            report.structure.append("Translation length differs significantly from original")
            report.downgrade("moderate")

    if len(original.strip()) >= NON_TRIVIAL_LENGTH and not has_punctuation(original):
        report.structure.append("Original text has no punctuation; sentence boundaries may be lost")
        report.downgrade("moderate")

    prefix = original.lower()[:UNTRANSLATED_PREFIX]
    if prefix.strip() and prefix in translation.lower():
        report.meaning.append("Some text may not have been translated")
        report.downgrade("poor")

    if any(marker in translation for marker in UNKNOWN_MARKERS):
        report.grammar.append("Unknown characters detected")
        report.downgrade("poor")

    if abs(_sentence_count(original) - _sentence_count(translation)) > 2:
        report.structure.append("Sentence structure differs from original")

    original_words = len(original.split())
    if original_words:
        word_ratio = len(translation.split()) / original_words
        if not WORD_RATIO_RANGE[0] <= word_ratio <= WORD_RATIO_RANGE[1]:
            report.meaning.append(
                f"Word count ratio: {word_ratio:.2f} (may indicate loss or addition of meaning)"
            )

    if is_rtl(target_lang):
        report.structure.append("Right-to-left language: ensure proper display direction")
    if is_cjk(target_lang):
        report.structure.append("CJK language: character-based translation (no spaces between words)")

    if not report.has_notes:
        report.grammar.append("✓ Grammar appears consistent")
        report.structure.append("✓ Structure maintained well")
        report.meaning.append("✓ Meaning likely preserved")

    return report
