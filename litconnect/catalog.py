"""
Book catalog loading, filtering and timeline grouping.

The catalog is a JSON array of book records loaded once. It is read-only:
filtering and grouping return new lists.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

from litconnect.config import DEFAULT_CATALOG
from litconnect.errors import CatalogError
from litconnect.models import GENRES, Book

logger = logging.getLogger(__name__)


# Named timeline periods, half-open year ranges
TIMELINE_PERIODS: tuple[tuple[str, int, int], ...] = (
    ("1600-1900: Early Period", 1600, 1900),
    ("1900-1950: Modern Era", 1900, 1950),
    ("1950-1980: Civil Rights & Beyond", 1950, 1980),
    ("1980-2000: Contemporary Wave", 1980, 2000),
    ("2000-2025: Current Voices", 2000, 2025),
)


@dataclass
class TimelinePeriod:
    name: str
    start: int
    end: int
    books: list[Book] = field(default_factory=list)


@dataclass
class TimelineStats:
    total: int
    year_span: int
    countries: int
    genres: int


class Catalog:
    """Read-only collection of books indexed by id."""

    def __init__(self, books: Iterable[Book]):
        self._books = list(books)
        self._by_id: dict[int, Book] = {}
        for book in self._books:
            if book.id in self._by_id:
                raise CatalogError(f"Duplicate book id: {book.id}")
            if book.genre not in GENRES:
                logger.warning("Book %s has unknown genre %r", book.id, book.genre)
            self._by_id[book.id] = book

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._by_id

    @property
    def books(self) -> list[Book]:
        return list(self._books)

    def get(self, book_id: int) -> Optional[Book]:
        return self._by_id.get(book_id)

    def genres(self) -> list[str]:
        return sorted({b.genre for b in self._books})

    def theories(self) -> list[str]:
        return sorted({t for b in self._books for t in b.connecting_theory})

    def filter(
        self,
        search: str = "",
        genre: str = "",
        theory: str = "",
        year_range: str = "",
    ) -> list[Book]:
        """Filter books the way the catalog browser does.

        Args:
            search: Substring of title, author, a theme or the abstract
            genre: Exact genre (case-insensitive)
            theory: Exact connecting theory (case-insensitive)
            year_range: Inclusive "start-end" range, e.g. "1980-2000"

        Returns:
            Matching books in catalog order
        """
        search = search.lower()
        genre = genre.lower()
        theory = theory.lower()
        bounds = parse_year_range(year_range) if year_range else None

        def matches(book: Book) -> bool:
            if search and not (
                search in book.title.lower()
                or search in book.author.lower()
                or any(search in t.lower() for t in book.themes)
                or search in book.abstract.lower()
            ):
                return False
            if genre and book.genre.lower() != genre:
                return False
            if theory and not any(t.lower() == theory for t in book.connecting_theory):
                return False
            if bounds and not bounds[0] <= book.year <= bounds[1]:
                return False
            return True

        return [b for b in self._books if matches(b)]

    def search(self, query: str) -> list[Book]:
        """Title/author/genre search used when picking books to analyze."""
        query = query.lower()
        return [
            b for b in self._books
            if query in b.title.lower()
            or query in b.author.lower()
            or query in b.genre.lower()
        ]


def parse_year_range(value: str) -> tuple[int, int]:
    try:
        start, end = (int(part) for part in value.split("-", 1))
    except ValueError:
        raise ValueError(f"Invalid year range {value!r}, expected START-END") from None
    return start, end


def load_catalog(path: Path | str | None = None) -> Catalog:
    """Load a catalog from a JSON array of book records.

    Raises:
        CatalogError: when the file is missing, not JSON, or a record is
            missing required fields
    """
    path = Path(path) if path else DEFAULT_CATALOG
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a JSON array")
    try:
        books = [Book.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Malformed book record in {path}: {e}") from e

    logger.debug("Loaded %d books from %s", len(books), path)
    return Catalog(books)


def group_by_period(books: Sequence[Book]) -> list[TimelinePeriod]:
    """Group books into the named timeline periods, dropping empty ones."""
    periods = [TimelinePeriod(name, start, end) for name, start, end in TIMELINE_PERIODS]
    for book in books:
        for period in periods:
            if period.start <= book.year < period.end:
                period.books.append(book)
                break
    return [p for p in periods if p.books]


def timeline_stats(books: Sequence[Book]) -> TimelineStats:
    years = [b.year for b in books]
    return TimelineStats(
        total=len(books),
        year_span=max(years) - min(years) if years else 0,
        countries=len({b.country for b in books}),
        genres=len({b.genre for b in books}),
    )
