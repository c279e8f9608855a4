"""
Splitting text into request-sized chunks.

The translation API accepts at most CHUNK_SIZE characters per request, so
longer text is cut into sentence-like units which are packed greedily into
chunks. Boundaries are multi-script:

- after ``. ! ?`` when followed by whitespace or the end of the text
  (closing quotes and brackets stay with their sentence)
- always after the full-width and Arabic terminators ``。 ？ ！ ؟``
- before the Spanish opening marks ``¿ ¡``

Without any boundary, or for a unit longer than the limit, the text is
packed word by word instead.
"""

from __future__ import annotations

import re

from litconnect.config import CHUNK_SIZE

SENTENCE_TERMINATORS = ".!?¿¡。？！؟"

_CLOSERS = "\"'”’»)\\]"
_BOUNDARY_RE = re.compile(
    rf"(?<=[.!?])(?=\s|$)"
    rf"|(?<=[.!?][{_CLOSERS}])(?=\s|$)"
    rf"|(?<=[。？！؟])(?![{_CLOSERS}。？！؟])"
    rf"|(?<=[。？！؟][{_CLOSERS}])"
    rf"|(?=[¿¡])(?<![¿¡])"
)
_TERMINATOR_RE = re.compile(f"[{re.escape(SENTENCE_TERMINATORS)}]")


def split_sentences(text: str) -> list[str]:
    """Cut text into sentence units; concatenating them gives back ``text``."""
    return [part for part in _BOUNDARY_RE.split(text) if part]


def _pack(units: list[str], max_length: int) -> list[str]:
    chunks: list[str] = []
    current = ""
    for unit in units:
        if len(current + unit) <= max_length:
            current += unit
        else:
            if current.strip():
                chunks.append(current.strip())
            current = unit
    if current.strip():
        chunks.append(current.strip())
    return chunks


def split_words(text: str, max_length: int = CHUNK_SIZE) -> list[str]:
    """Greedily pack whitespace-separated words into chunks.

    A single word longer than ``max_length`` is cut into pieces.
    """
    chunks: list[str] = []
    current = ""
    for word in text.split():
        while len(word) > max_length:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(word[:max_length])
            word = word[max_length:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_length:
            current = candidate
        else:
            chunks.append(current)
            current = word
    if current:
        chunks.append(current)
    return chunks


def split_text(text: str, max_length: int = CHUNK_SIZE) -> list[str]:
    """Split text into trimmed, non-empty chunks of at most ``max_length``.

    Args:
        text: Text to split
        max_length: Maximum characters per chunk

    Returns:
        Chunks in reading order; empty list for blank text
    """
    if not text or not text.strip():
        return []
    if len(text.strip()) <= max_length:
        return [text.strip()]
    if not _TERMINATOR_RE.search(text):
        return split_words(text, max_length)

    units: list[str] = []
    for unit in split_sentences(text):
        if len(unit) > max_length:
            units.extend(" " + piece for piece in split_words(unit, max(1, max_length - 1)))
        else:
            units.append(unit)
    return _pack(units, max_length)
