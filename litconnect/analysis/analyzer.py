"""
Connection analyzer.

Compares free text against a set of catalog books and reports, per enabled
dimension:

- themes: book themes occurring (case-insensitively) in the text
- theories: book theories whose first word occurs in the text
- temporal: publication year statistics and period distribution
- geographic / genres: distinct countries and genres
- linguistic: word counts and most frequent words of the text itself

``analyze`` is a total function: empty text or an empty book list yields
empty aggregates, never an exception.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from litconnect.analysis.commentary import identify_enhancements, identify_limitations
from litconnect.models import (
    AnalysisOptions,
    AnalysisResult,
    Book,
    Connection,
    Connections,
    LinguisticStats,
    TemporalStats,
)

# (label, lower bound inclusive, upper bound exclusive). The first bucket
# also takes years before its lower bound, the last one years after its
# upper bound.
PERIOD_BUCKETS: tuple[tuple[str, int, int], ...] = (
    ("1600-1900", 1600, 1900),
    ("1900-1950", 1900, 1950),
    ("1950-1980", 1950, 1980),
    ("1980-2000", 1980, 2000),
    ("2000-2025", 2000, 2025),
)

WORD_RE = re.compile(r"\w+")
MIN_SIGNIFICANT_LENGTH = 4
TOP_WORDS = 10


def find_theme_connections(text: str, books: Iterable[Book]) -> list[Connection]:
    text_lower = text.lower()
    return [
        Connection(theme, book.title, book.author)
        for book in books
        for theme in book.themes
        if theme.lower() in text_lower
    ]


def find_theory_connections(text: str, books: Iterable[Book]) -> list[Connection]:
    """Match theories on their first space-separated word only.

    "Borderlands Theory" matches any text containing "borderlands";
    hyphenated words are not split, so "Code-Switching" needs
    "code-switching".
    """
    text_lower = text.lower()
    connections = []
    for book in books:
        for theory in book.connecting_theory:
            first_word = theory.lower().split(" ")[0]
            if first_word in text_lower:
                connections.append(Connection(theory, book.title, book.author))
    return connections


def categorize_years(years: Iterable[int]) -> dict[str, int]:
    """Count years per period bucket."""
    periods = {label: 0 for label, _, _ in PERIOD_BUCKETS}
    last_label = PERIOD_BUCKETS[-1][0]
    for year in years:
        for label, _, upper in PERIOD_BUCKETS:
            if year < upper:
                periods[label] += 1
                break
        else:
            periods[last_label] += 1
    return periods


def temporal_stats(years: Sequence[int]) -> Optional[TemporalStats]:
    if not years:
        return None
    min_year, max_year = min(years), max(years)
    return TemporalStats(
        # half-up rounding
        average=math.floor(sum(years) / len(years) + 0.5),
        min_year=min_year,
        max_year=max_year,
        time_span=max_year - min_year,
        distribution=categorize_years(years),
    )


def analyze_linguistic_patterns(text: str) -> LinguisticStats:
    words = WORD_RE.findall(text.lower())
    freq = Counter(w for w in words if len(w) >= MIN_SIGNIFICANT_LENGTH)
    average = sum(len(w) for w in words) / len(words) if words else 0
    return LinguisticStats(
        word_count=len(words),
        unique_words=len(freq),
        top_words=[word for word, _ in freq.most_common(TOP_WORDS)],
        average_word_length=average,
    )


def _distinct(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def analyze(
    text: str,
    books: Sequence[Book],
    options: AnalysisOptions | None = None,
    timestamp: datetime | None = None,
) -> AnalysisResult:
    """Compute the connections between ``text`` and ``books``.

    Args:
        text: Free user text
        books: Selected catalog books
        options: Enabled dimensions (all enabled when omitted)
        timestamp: Time recorded on the result (now, UTC, when omitted)

    Returns:
        AnalysisResult with connections and commentary
    """
    options = options or AnalysisOptions()
    text = text or ""
    books = list(books or [])
    timestamp = timestamp or datetime.now(timezone.utc)

    connections = Connections()
    if options.themes:
        connections.themes = find_theme_connections(text, books)
    if options.theory:
        connections.theories = find_theory_connections(text, books)
    if options.temporal:
        connections.temporal = temporal_stats([book.year for book in books])
    if options.geographic:
        connections.geographic = _distinct(book.country for book in books)
    if options.genre:
        connections.genres = _distinct(book.genre for book in books)
    if options.linguistic:
        connections.linguistic = analyze_linguistic_patterns(text)

    return AnalysisResult(
        timestamp=timestamp.isoformat(),
        user_text=text,
        books=books,
        connections=connections,
        enhancements=identify_enhancements(books, connections),
        limitations=identify_limitations(books, connections),
    )
