"""Shared fixtures for the LitConnect test suite."""

import pytest

from litconnect.catalog import Catalog, load_catalog
from litconnect.models import Book
from litconnect.storage import LocalStorage


def make_book(book_id=1, year=1990, country="United States", genre="diaspora",
              themes=(), theories=(), title=None, author=None):
    return Book(
        id=book_id,
        title=title or f"Book {book_id}",
        author=author or f"Author {book_id}",
        year=year,
        country=country,
        genre=genre,
        themes=tuple(themes),
        connecting_theory=tuple(theories),
        abstract=f"Abstract of book {book_id}",
    )


@pytest.fixture
def catalog() -> Catalog:
    """The bundled catalog."""
    return load_catalog()


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
