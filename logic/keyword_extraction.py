"""Deterministic keyword extraction used when the LLM collaborator is unavailable."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from models.outfit_spec import ExtractionResult, GarmentSpec, MandatorySpecs
from models.taxonomy import (
    COLOR_KEYWORDS,
    LENGTH_KEYWORDS,
    NECKLINE_KEYWORDS,
    OUTERWEAR_KEYWORDS,
    REQUEST_BOTTOM_TYPES,
    REQUEST_ONE_PIECE_TYPES,
    REQUEST_TOP_TYPES,
)

FALLBACK_CONFIDENCE = 70
FALLBACK_REASONING = "Fallback enforcement due to API unavailability"
GENERIC_FORBIDDEN_ITEMS: Tuple[str, ...] = (
    "extra layers",
    "additional items",
    "shorts underneath",
    "leggings underneath",
    "multiple versions",
)

_COLOR_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(COLOR_KEYWORDS, key=len, reverse=True)) + r")\b"
)


def _word_pattern(spellings: Sequence[str]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(spelling) for spelling in spellings) + r")\b")


_NECKLINE_PATTERNS = [(label, _word_pattern(spellings)) for label, spellings in NECKLINE_KEYWORDS]
_LENGTH_PATTERNS = [(label, _word_pattern(spellings)) for label, spellings in LENGTH_KEYWORDS]


def extract_colors(text: str) -> List[str]:
    """Color keywords in ``text`` in order of first appearance, without repeats."""

    found: List[str] = []
    for match in _COLOR_PATTERN.finditer(text.lower()):
        color = match.group(1)
        if color not in found:
            found.append(color)
    return found


def _first_keyword(text: str, keywords: Sequence[str]) -> Optional[str]:
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


def _first_label(text: str, patterns: Sequence[Tuple[str, re.Pattern[str]]]) -> Optional[str]:
    for label, pattern in patterns:
        if pattern.search(text):
            return label
    return None


def detect_neckline(text: str) -> Optional[str]:
    return _first_label(text.lower(), _NECKLINE_PATTERNS)


def detect_length(text: str) -> Optional[str]:
    return _first_label(text.lower(), _LENGTH_PATTERNS)


def fallback_forbidden_items(specs: MandatorySpecs) -> List[str]:
    forbidden: List[str] = []
    if specs.outerwear is None:
        forbidden.extend(OUTERWEAR_KEYWORDS)
    forbidden.extend(GENERIC_FORBIDDEN_ITEMS)
    return forbidden


def extract_with_keywords(user_request: str) -> ExtractionResult:
    """Build mandatory specs from a plain keyword scan of the request.

    A one-piece keyword wins over separates. Otherwise the first top keyword
    takes the first color and the first bottom keyword takes the next color,
    reusing the first one when only a single color was named. Necklines go on
    the top, lengths on the bottom, and both on a dress.
    """

    text = user_request.lower()
    colors = extract_colors(text)
    neckline = detect_neckline(text)
    length = detect_length(text)
    specs = MandatorySpecs(allow_additional_items=False)

    one_piece = _first_keyword(text, REQUEST_ONE_PIECE_TYPES)
    if one_piece:
        specs.dress = GarmentSpec(
            type=one_piece,
            color=colors[0] if colors else None,
            neckline=neckline,
            length=length,
        )
    else:
        next_color = 0
        top_type = _first_keyword(text, REQUEST_TOP_TYPES)
        if top_type:
            specs.top = GarmentSpec(
                type=top_type,
                color=colors[0] if colors else None,
                neckline=neckline,
            )
            next_color = 1

        bottom_type = _first_keyword(text, REQUEST_BOTTOM_TYPES)
        if bottom_type:
            if next_color < len(colors):
                bottom_color: Optional[str] = colors[next_color]
            else:
                bottom_color = colors[0] if colors else None
            specs.bottom = GarmentSpec(type=bottom_type, color=bottom_color, length=length)

    specs.item_count = specs.slot_count()
    return ExtractionResult(
        mandatory_specs=specs,
        forbidden_items=fallback_forbidden_items(specs),
        confidence=FALLBACK_CONFIDENCE,
        reasoning=FALLBACK_REASONING,
        source="fallback",
    )


__all__ = [
    "FALLBACK_CONFIDENCE",
    "FALLBACK_REASONING",
    "detect_length",
    "detect_neckline",
    "extract_colors",
    "extract_with_keywords",
    "fallback_forbidden_items",
]
