"""
Connection analysis between free text and catalog books.

This module provides:
- analyze: the per-dimension connection analyzer
- identify_enhancements / identify_limitations: rule-driven commentary
"""

from litconnect.analysis.analyzer import (
    PERIOD_BUCKETS,
    analyze,
    analyze_linguistic_patterns,
    categorize_years,
    find_theme_connections,
    find_theory_connections,
)
from litconnect.analysis.commentary import identify_enhancements, identify_limitations

__all__ = [
    "PERIOD_BUCKETS",
    "analyze",
    "analyze_linguistic_patterns",
    "categorize_years",
    "find_theme_connections",
    "find_theory_connections",
    "identify_enhancements",
    "identify_limitations",
]
