"""Color comparison helpers for checking generated garments."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# Base color -> shades the vision collaborator commonly reports for it.
COLOR_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "white": ("off-white", "cream", "ivory"),
        "black": ("dark", "charcoal"),
        "gray": ("grey", "silver"),
        "brown": ("tan", "beige", "khaki", "camel"),
        "blue": ("navy", "denim"),
    }
)


def colors_match(detected: str, expected: str) -> bool:
    """Return True when a detected color satisfies the expected one.

    Matches are case-insensitive and accept containment in either direction
    (``"light brown"`` satisfies ``"brown"``). Aliases are directional: a
    detected ``"ivory"`` satisfies an expected ``"white"``, but a detected
    ``"white"`` does not satisfy an expected ``"ivory"``. An empty detected
    color is contained in every expected color and therefore matches.
    """

    detected_lower = detected.lower()
    expected_lower = expected.lower()

    if detected_lower == expected_lower:
        return True
    if detected_lower in expected_lower or expected_lower in detected_lower:
        return True

    aliases = COLOR_ALIASES.get(expected_lower, ())
    return any(alias in detected_lower for alias in aliases)


__all__ = ["COLOR_ALIASES", "colors_match"]
