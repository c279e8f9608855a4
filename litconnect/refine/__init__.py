"""
Post-translation refinement.

This module provides:
- rejoin / normalize: script-aware joining of translated chunks
- analyze_translation: heuristic quality scoring
"""

from litconnect.refine.postprocess import join_chunks, normalize, rejoin
from litconnect.refine.scoring import QualityReport, analyze_translation

__all__ = [
    "QualityReport",
    "analyze_translation",
    "join_chunks",
    "normalize",
    "rejoin",
]
