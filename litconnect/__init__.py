"""
LitConnect: literary connections and translation review

Compares a piece of writing with selected works of Latinx literature along
thematic, theoretical, temporal, geographic, genre and linguistic lines, and
translates text through the MyMemory API with script-aware cleanup and a
heuristic quality review.

License: MIT
"""

__version__ = "0.1.0"

from litconnect.analysis import analyze
from litconnect.catalog import Catalog, load_catalog
from litconnect.models import AnalysisOptions, AnalysisResult, Book
from litconnect.session import AnalysisSession

__all__ = [
    "AnalysisOptions",
    "AnalysisResult",
    "AnalysisSession",
    "Book",
    "Catalog",
    "analyze",
    "load_catalog",
]
