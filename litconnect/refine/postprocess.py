"""
Rejoining translated chunks into well-formed text.

Chunks come back from the API one sentence group at a time. Gluing them
together naively leaves doubled spaces, spaces before punctuation, or
spaces between ideographs. ``rejoin`` runs these ordered passes:

1. join chunks (no separator for CJK targets or before punctuation)
2. collapse whitespace
3. punctuation spacing
4. spacing inside brackets and paired quotes
5. dashes and ellipses
6. target-language typography (fr, es, CJK, RTL, de, ru/uk)
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from litconnect.translate.languages import is_cjk, is_rtl

_LEADING_PUNCT_RE = re.compile(r"^[.,!?;:)\]}»”’、。，！？；：…%]")

_CJK_PUNCT = "。，、；：？！「」『』（）《》〈〉【】…・"
# Han and Kana only: Hangul keeps its word spacing
_CJK_CHARS = r"\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"

# letter, sentence end, letter (any script)
_GLUED_SENTENCE_RE = re.compile(r"([^\W\d_])([.!?])(?=([^\W\d_]))")

_QUOTE_OPEN_AFTER = " \t\n([{"
_QUOTE_CLOSE_BEFORE = " \t\n.,!?;:)]}"


def language_family(code: str) -> str:
    """Map a language code to the typography rules that apply to it."""
    base = code.split("-")[0].lower()
    if is_cjk(code) or base in ("zh", "ja", "ko"):
        return "cjk"
    if is_rtl(code) or is_rtl(base):
        return "rtl"
    if base in ("ru", "uk"):
        return "cyrillic"
    return base


def join_chunks(chunks: Iterable[str], target_lang: str) -> str:
    no_space = language_family(target_lang) == "cjk"
    result = ""
    for chunk in chunks:
        chunk = chunk.strip()
        if not chunk:
            continue
        if not result or no_space or _LEADING_PUNCT_RE.match(chunk):
            result += chunk
        else:
            result += " " + chunk
    return result


def collapse_whitespace(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t\u00a0]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def fix_spacing(text: str) -> str:
    # No space before closing punctuation
    text = re.sub(r"[ \t]+([.!?,:;)])", r"\1", text)
    # One space after a sentence end glued to the next sentence. A capital
    # before the mark is an initialism (U.S.A) and is left alone.
    text = _GLUED_SENTENCE_RE.sub(_space_after_sentence, text)
    return text


def _space_after_sentence(m: re.Match) -> str:
    if m.group(1).islower() and m.group(3).isupper():
        return f"{m.group(1)}{m.group(2)} "
    return m.group(0)


def _trim_straight_quotes(text: str) -> str:
    """Drop spaces just inside matched pairs of straight double quotes.

    A quote opens when it follows the start of the text, whitespace or a
    bracket, and closes when it is followed by whitespace, punctuation or
    the end. Quotes that fit neither (inch marks such as 6") are skipped,
    and an opening quote that never closes is left as it is.
    """
    cuts: list[tuple[int, int]] = []
    opening = None
    for m in re.finditer('"', text):
        i = m.start()
        opens = i == 0 or text[i - 1] in _QUOTE_OPEN_AFTER
        closes = i + 1 == len(text) or text[i + 1] in _QUOTE_CLOSE_BEFORE
        if opens and (not closes or opening is None):
            end = i + 1
            while end < len(text) and text[end] in " \t":
                end += 1
            opening = (i + 1, end)
        elif closes and opening is not None:
            start = i
            while start > opening[1] and text[start - 1] in " \t":
                start -= 1
            cuts += [opening, (start, i)]
            opening = None
    for start, end in reversed(cuts):
        text = text[:start] + text[end:]
    return text


def trim_enclosures(text: str) -> str:
    text = re.sub(r"([(\[{])[ \t]+", r"\1", text)
    text = re.sub(r"[ \t]+([)\]}])", r"\1", text)
    text = _trim_straight_quotes(text)
    text = re.sub(r"“[ \t]*([^”\n]*?)[ \t]*”", r"“\1”", text)
    return text


_SPACED_DASH_RE = re.compile(r"(?<=\S)(?:[ \t]+([—–])[ \t]*|([—–])[ \t]+)(?=\S)")


def normalize_dashes(text: str) -> str:
    text = re.sub(r"(?<=\S)[ \t]*--[ \t]*(?=\S)", " — ", text)
    # A dash with a space on one side becomes a spaced dash; closed dashes
    # (word—word, 1990–2000) are left alone
    text = _SPACED_DASH_RE.sub(lambda m: f" {m.group(1) or m.group(2)} ", text)
    text = re.sub(r"\.(?:[ \t]?\.){2,}", "...", text)
    text = re.sub(r"[ \t]+(\.\.\.|…)", r"\1", text)
    text = re.sub(r"(\.\.\.|…)(?=[^\W\d_])", r"\1 ", text)
    return text


def _french(text: str) -> str:
    text = re.sub(r"(?<=\S)[ \t]*([!?:;]+)(?=[\s»\"”)]|$)", r" \1", text)
    text = re.sub(r"«[ \t]*", "« ", text)
    text = re.sub(r"[ \t]*»", " »", text)
    return text


def _spanish(text: str) -> str:
    text = re.sub(r"([¿¡])[ \t]+", r"\1", text)
    text = re.sub(r"(?<=[^\s¿¡(\[«\"“—–-])([¿¡])", r" \1", text)
    return text


def _cjk(text: str) -> str:
    text = re.sub(rf"[ \t]*([{_CJK_PUNCT}])[ \t]*", r"\1", text)
    text = re.sub(rf"(?<=[{_CJK_CHARS}])[ \t]+(?=[{_CJK_CHARS}])", "", text)
    return text


def _rtl(text: str) -> str:
    text = re.sub(r"[ \t]+([،؛؟])", r"\1", text)
    text = re.sub(r"([،؛؟])(?=[^\s»)\]\"”])", r"\1 ", text)
    text = re.sub(r"«[ \t]+", "«", text)
    text = re.sub(r"[ \t]+»", "»", text)
    return text


def _german(text: str) -> str:
    text = re.sub(r"„[ \t]+", "„", text)
    text = re.sub(r"[ \t]+“", "“", text)
    text = re.sub(r"»[ \t]+", "»", text)
    text = re.sub(r"[ \t]+«", "«", text)
    return text


def _cyrillic(text: str) -> str:
    text = re.sub(r"«[ \t]+", "«", text)
    text = re.sub(r"[ \t]+»", "»", text)
    text = re.sub(r"„[ \t]+", "„", text)
    text = re.sub(r"[ \t]+“", "“", text)
    return text


LANGUAGE_RULES: dict[str, Callable[[str], str]] = {
    "fr": _french,
    "es": _spanish,
    "cjk": _cjk,
    "rtl": _rtl,
    "de": _german,
    "cyrillic": _cyrillic,
}


def apply_language_rules(text: str, target_lang: str) -> str:
    rule = LANGUAGE_RULES.get(language_family(target_lang))
    return rule(text) if rule else text


def normalize(text: str, target_lang: str = "en") -> str:
    """Normalize spacing and punctuation of already joined text."""
    t = collapse_whitespace(text)
    t = fix_spacing(t)
    t = trim_enclosures(t)
    t = normalize_dashes(t)
    t = apply_language_rules(t, target_lang)
    return "\n".join(line.strip() for line in t.split("\n")).strip()


def rejoin(chunks: Iterable[str], target_lang: str = "en") -> str:
    """Join translated chunks and normalize the result for ``target_lang``."""
    return normalize(join_chunks(chunks, target_lang), target_lang)
