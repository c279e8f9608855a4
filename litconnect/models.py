"""
Core data models for LitConnect.

These models describe the catalog records the analyzer reads and the
results it produces. The JSON shape of a Book follows the catalog file
(camelCase keys such as ``connectingTheory``); everything LitConnect
produces itself is serialized with snake_case keys.

Design Philosophy:
- Immutable inputs: Book is a frozen dataclass, the catalog is read-only
- Serializable: results round-trip through to_dict/from_dict for history
- Defined collections: absent results are empty lists, never None, in the
  serialized form
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional
from urllib.parse import quote


GENRES = ("poetry", "history", "biography", "autobiography", "diaspora", "the body")


@dataclass(frozen=True)
class Book:
    """A catalog record.

    Attributes:
        id: Unique, stable identifier
        title: Book title
        author: Author name
        year: Publication year
        country: Country most associated with the work
        genre: One of GENRES
        themes: Ordered theme strings
        connecting_theory: Rhetorical/critical theories linked to the book
        abstract: Short description
        link: Optional external link
        cover_image: Optional cover image URL
    """
    id: int
    title: str
    author: str
    year: int
    country: str
    genre: str
    themes: tuple[str, ...] = ()
    connecting_theory: tuple[str, ...] = ()
    abstract: str = ""
    link: Optional[str] = None
    cover_image: Optional[str] = None

    @property
    def url(self) -> str:
        """The book's link, or a web search for it when it has none."""
        if self.link:
            return self.link
        query = quote(f'"{self.title}" {self.author}')
        return f"https://www.google.com/search?q={query}"

    def ref(self) -> dict:
        """Minimal reference stored in history entries."""
        return {"id": self.id, "title": self.title, "author": self.author}

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "year": self.year,
            "country": self.country,
            "genre": self.genre,
            "themes": list(self.themes),
            "connectingTheory": list(self.connecting_theory),
            "abstract": self.abstract,
        }
        if self.link:
            d["link"] = self.link
        if self.cover_image:
            d["coverImage"] = self.cover_image
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Book:
        return cls(
            id=int(d["id"]),
            title=d["title"],
            author=d["author"],
            year=int(d["year"]),
            country=d.get("country", ""),
            genre=d.get("genre", ""),
            themes=tuple(d.get("themes", ())),
            connecting_theory=tuple(d.get("connectingTheory", d.get("connecting_theory", ()))),
            abstract=d.get("abstract", ""),
            link=d.get("link"),
            cover_image=d.get("coverImage", d.get("cover_image")),
        )


@dataclass
class AnalysisOptions:
    """Which analysis dimensions are enabled. All on by default."""
    themes: bool = True
    theory: bool = True
    temporal: bool = True
    geographic: bool = True
    genre: bool = True
    linguistic: bool = True

    @classmethod
    def none(cls) -> AnalysisOptions:
        return cls(**{f.name: False for f in fields(cls)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Connection:
    """A theme or theory term from ``book`` that occurs in the user text."""
    term: str
    book: str
    author: str

    def to_dict(self, key: str = "term") -> dict:
        return {key: self.term, "book": self.book, "author": self.author}

    @classmethod
    def from_dict(cls, d: dict, key: str = "term") -> Connection:
        return cls(term=d[key], book=d["book"], author=d["author"])


@dataclass
class TemporalStats:
    """Publication-year statistics over the selected books."""
    average: int
    min_year: int
    max_year: int
    time_span: int
    distribution: dict[str, int] = field(default_factory=dict)

    @property
    def range_label(self) -> str:
        return f"{self.min_year} - {self.max_year}"

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "min_year": self.min_year,
            "max_year": self.max_year,
            "time_span": self.time_span,
            "range": self.range_label,
            "distribution": dict(self.distribution),
        }

    @classmethod
    def from_dict(cls, d: dict) -> TemporalStats:
        return cls(
            average=d["average"],
            min_year=d["min_year"],
            max_year=d["max_year"],
            time_span=d["time_span"],
            distribution=dict(d.get("distribution", {})),
        )


@dataclass
class LinguisticStats:
    """Word statistics over the user text."""
    word_count: int = 0
    unique_words: int = 0
    top_words: list[str] = field(default_factory=list)
    average_word_length: float = 0.0

    def to_dict(self) -> dict:
        return {
            "word_count": self.word_count,
            "unique_words": self.unique_words,
            "top_words": list(self.top_words),
            "average_word_length": self.average_word_length,
        }

    @classmethod
    def from_dict(cls, d: dict) -> LinguisticStats:
        return cls(
            word_count=d.get("word_count", 0),
            unique_words=d.get("unique_words", 0),
            top_words=list(d.get("top_words", [])),
            average_word_length=d.get("average_word_length", 0.0),
        )


@dataclass
class Connections:
    """Per-dimension analysis output.

    ``temporal`` and ``linguistic`` are None when the dimension is disabled
    (or, for temporal, when no years were available); every list is always
    present.
    """
    themes: list[Connection] = field(default_factory=list)
    theories: list[Connection] = field(default_factory=list)
    temporal: Optional[TemporalStats] = None
    geographic: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    linguistic: Optional[LinguisticStats] = None

    def to_dict(self) -> dict:
        return {
            "themes": [c.to_dict("theme") for c in self.themes],
            "theories": [c.to_dict("theory") for c in self.theories],
            "temporal": self.temporal.to_dict() if self.temporal else {},
            "geographic": list(self.geographic),
            "genres": list(self.genres),
            "linguistic": self.linguistic.to_dict() if self.linguistic else {},
        }

    @classmethod
    def from_dict(cls, d: dict) -> Connections:
        return cls(
            themes=[Connection.from_dict(c, "theme") for c in d.get("themes", [])],
            theories=[Connection.from_dict(c, "theory") for c in d.get("theories", [])],
            temporal=TemporalStats.from_dict(d["temporal"]) if d.get("temporal") else None,
            geographic=list(d.get("geographic", [])),
            genres=list(d.get("genres", [])),
            linguistic=LinguisticStats.from_dict(d["linguistic"]) if d.get("linguistic") else None,
        )


@dataclass(frozen=True)
class Commentary:
    """A titled enhancement or limitation note."""
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_dict(cls, d: dict) -> Commentary:
        return cls(title=d["title"], description=d["description"])


@dataclass
class AnalysisResult:
    """Everything one analysis run produced."""
    timestamp: str
    user_text: str
    books: list[Book] = field(default_factory=list)
    connections: Connections = field(default_factory=Connections)
    enhancements: list[Commentary] = field(default_factory=list)
    limitations: list[Commentary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "user_text": self.user_text,
            "books": [b.to_dict() for b in self.books],
            "connections": self.connections.to_dict(),
            "enhancements": [e.to_dict() for e in self.enhancements],
            "limitations": [lim.to_dict() for lim in self.limitations],
        }

    @classmethod
    def from_dict(cls, d: dict) -> AnalysisResult:
        return cls(
            timestamp=d["timestamp"],
            user_text=d.get("user_text", ""),
            books=[Book.from_dict(b) for b in d.get("books", [])],
            connections=Connections.from_dict(d.get("connections", {})),
            enhancements=[Commentary.from_dict(e) for e in d.get("enhancements", [])],
            limitations=[Commentary.from_dict(e) for e in d.get("limitations", [])],
        )


@dataclass
class HistoryEntry:
    """A saved analysis.

    Attributes:
        id: Millisecond timestamp, strictly increasing within a history
        timestamp: ISO-8601 creation time
        user_text: Preview of the text (truncated with "...")
        full_text: The complete analyzed text
        books: Minimal book references (id, title, author)
        analysis: The stored result
    """
    id: int
    timestamp: str
    user_text: str
    full_text: str
    books: list[dict] = field(default_factory=list)
    analysis: Optional[AnalysisResult] = None

    @property
    def book_ids(self) -> list[int]:
        return [b["id"] for b in self.books]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "user_text": self.user_text,
            "full_text": self.full_text,
            "books": [dict(b) for b in self.books],
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        return cls(
            id=int(d["id"]),
            timestamp=d["timestamp"],
            user_text=d.get("user_text", ""),
            full_text=d.get("full_text", ""),
            books=[dict(b) for b in d.get("books", [])],
            analysis=AnalysisResult.from_dict(d["analysis"]) if d.get("analysis") else None,
        )
