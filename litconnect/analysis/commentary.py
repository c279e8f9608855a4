"""
Enhancement and limitation commentary.

The narrative attached to each analysis is pre-authored. Each table row
pairs a predicate over the computed connections with a title and a
description template; a row is emitted when its predicate holds.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Sequence

from litconnect.models import Book, Commentary, Connections


class Rule(NamedTuple):
    title: str
    description: str
    applies: Callable[[Sequence[Book], Connections], bool]


def _always(books: Sequence[Book], connections: Connections) -> bool:
    return True


ENHANCEMENT_RULES: tuple[Rule, ...] = (
    Rule(
        "Thematic Pattern Recognition",
        "LLMs excel at identifying {theme_count} thematic connections across selected texts, "
        "revealing patterns that might not be immediately apparent to human readers.",
        lambda books, c: len(c.themes) > 0,
    ),
    Rule(
        "Theoretical Framework Mapping",
        "Successfully mapped theoretical frameworks across multiple texts, demonstrating "
        "LLMs' ability to recognize scholarly discourse patterns.",
        lambda books, c: len(c.theories) > 0,
    ),
    Rule(
        "Historical Contextualization",
        "LLMs can quickly aggregate temporal data spanning {time_span} years, providing "
        "instant historical context across a century of Latino women's rhetoric.",
        lambda books, c: c.temporal is not None,
    ),
    Rule(
        "Transnational Analysis",
        "Identified connections across {country_count} countries, highlighting LLMs' "
        "capacity for transnational comparative analysis.",
        lambda books, c: len(c.geographic) > 1,
    ),
    Rule(
        "Rapid Synthesis",
        "LLMs can process and synthesize connections across large text corpora in seconds, "
        "enabling exploratory research at unprecedented speeds.",
        _always,
    ),
)


LIMITATION_RULES: tuple[Rule, ...] = (
    Rule(
        "Cultural Nuance and Context",
        "LLMs may miss culturally-specific rhetorical strategies, particularly those rooted "
        "in oral traditions, code-switching, or community-specific language practices "
        "prevalent in Latino women's rhetoric.",
        _always,
    ),
    Rule(
        "Translingual Complexities",
        "While detecting some linguistic patterns, LLMs may struggle with the full complexity "
        "of translingual practices, including Spanglish, indigenous language influences, and "
        "the political dimensions of language choice.",
        _always,
    ),
    Rule(
        "Embodied Knowledge",
        "Texts about the body and embodied experiences may resist computational analysis, as "
        "LLMs lack lived experience and may reduce complex embodied rhetoric to surface-level "
        "patterns.",
        _always,
    ),
    Rule(
        "Rhetorical Listening",
        "True rhetorical listening requires openness to difference and standing under "
        "discourse. LLMs process text but cannot engage in the ethical, relational practice "
        "of listening across cultural and linguistic differences.",
        _always,
    ),
    Rule(
        "Poetic and Aesthetic Dimensions",
        "Poetry's aesthetic elements (sound, rhythm, silences, and visual arrangement) resist "
        "computational analysis, limiting LLM understanding of poetic rhetoric.",
        lambda books, c: any(book.genre == "poetry" for book in books),
    ),
    Rule(
        "Historical Trauma and Memory",
        "LLMs may identify themes of trauma but cannot fully comprehend the intergenerational, "
        "somatic, and communal dimensions of historical trauma in diasporic and colonized "
        "communities.",
        _always,
    ),
    Rule(
        "Multimodal Meaning-Making",
        "Many Latino women's texts employ multimodal strategies (visual, gestural, spatial) "
        "that are lost in text-only computational analysis.",
        _always,
    ),
)


def _render(rules: Sequence[Rule], books: Sequence[Book], connections: Connections) -> list[Commentary]:
    values = {
        "theme_count": len(connections.themes),
        "time_span": connections.temporal.time_span if connections.temporal else 0,
        "country_count": len(connections.geographic),
    }
    return [
        Commentary(rule.title, rule.description.format(**values))
        for rule in rules
        if rule.applies(books, connections)
    ]


def identify_enhancements(books: Sequence[Book], connections: Connections) -> list[Commentary]:
    """Commentary on what the analysis was able to surface."""
    return _render(ENHANCEMENT_RULES, books, connections)


def identify_limitations(books: Sequence[Book], connections: Connections) -> list[Commentary]:
    """Commentary on what computational analysis misses for these books."""
    return _render(LIMITATION_RULES, books, connections)
