"""Canonical garment taxonomy used for categorization and keyword scans.

Every table here is built once at import time and never mutated. Category sets
are tested by substring membership against lowercased piece names, so the
priority order in :data:`CATEGORY_PRIORITY` decides pieces that match keywords
from more than one set (``"shirt dress"`` is a one-piece, not a top).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple


class Category(str, Enum):
    ONE_PIECE = "one-piece"
    TOP = "top"
    BOTTOM = "bottom"
    LAYER = "layer"
    ACCESSORY = "accessory"
    UNKNOWN = "unknown"


ONE_PIECE_GARMENTS: FrozenSet[str] = frozenset(
    {
        "dress",
        "dresses",
        "gown",
        "maxi dress",
        "midi dress",
        "mini dress",
        "jumpsuit",
        "romper",
        "playsuit",
        "overall dress",
        "shirt dress",
    }
)

TOPS: FrozenSet[str] = frozenset(
    {
        "shirt",
        "blouse",
        "top",
        "t-shirt",
        "tee",
        "tank top",
        "camisole",
        "sweater",
        "pullover",
        "hoodie",
        "crop top",
        "tunic",
        "polo",
        "button-up",
        "button-down",
        "henley",
        "sweatshirt",
    }
)

BOTTOMS: FrozenSet[str] = frozenset(
    {
        "pants",
        "jeans",
        "trousers",
        "slacks",
        "chinos",
        "leggings",
        "skirt",
        "shorts",
        "culottes",
        "joggers",
        "sweatpants",
        "capris",
        "palazzo pants",
        "wide-leg pants",
        "skinny jeans",
        "bootcut jeans",
    }
)

LAYERS: FrozenSet[str] = frozenset(
    {
        "jacket",
        "blazer",
        "cardigan",
        "coat",
        "vest",
        "waistcoat",
        "shawl",
        "poncho",
        "cape",
        "bomber jacket",
        "leather jacket",
        "denim jacket",
        "trench coat",
        "pea coat",
        "overcoat",
    }
)

ACCESSORIES: FrozenSet[str] = frozenset(
    {
        "shoes",
        "boots",
        "sneakers",
        "heels",
        "flats",
        "sandals",
        "loafers",
        "bag",
        "purse",
        "handbag",
        "clutch",
        "backpack",
        "tote",
        "belt",
        "scarf",
        "hat",
        "cap",
        "beanie",
        "sunglasses",
        "glasses",
        "jewelry",
        "necklace",
        "bracelet",
        "earrings",
        "ring",
        "watch",
    }
)

CATEGORY_PRIORITY: Tuple[Tuple[Category, FrozenSet[str]], ...] = (
    (Category.ONE_PIECE, ONE_PIECE_GARMENTS),
    (Category.TOP, TOPS),
    (Category.BOTTOM, BOTTOMS),
    (Category.LAYER, LAYERS),
    (Category.ACCESSORY, ACCESSORIES),
)

# Keyword tables for the deterministic request scan. Order matters: the first
# keyword found in the request wins.
COLOR_KEYWORDS: Tuple[str, ...] = (
    "red",
    "blue",
    "green",
    "yellow",
    "black",
    "white",
    "gray",
    "grey",
    "pink",
    "purple",
    "orange",
    "brown",
    "navy",
    "beige",
    "khaki",
    "burgundy",
    "maroon",
    "teal",
    "olive",
    "coral",
    "mint",
)
REQUEST_ONE_PIECE_TYPES: Tuple[str, ...] = ("dress", "gown")
REQUEST_TOP_TYPES: Tuple[str, ...] = ("blouse", "shirt", "top", "sweater", "tank", "t-shirt")
REQUEST_BOTTOM_TYPES: Tuple[str, ...] = ("pants", "jeans", "skirt", "shorts", "trousers")
OUTERWEAR_KEYWORDS: Tuple[str, ...] = ("jacket", "blazer", "coat", "cardigan", "outerwear")

# Canonical label -> spellings accepted in free text.
NECKLINE_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("one-shoulder", ("one-shoulder", "one shoulder")),
    ("off-shoulder", ("off-shoulder", "off shoulder")),
    ("v-neck", ("v-neck", "v neck")),
    ("crew-neck", ("crew-neck", "crew neck")),
    ("halter", ("halter",)),
)
LENGTH_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("capri", ("capri",)),
    ("ankle-length", ("ankle-length", "ankle length", "ankle")),
    ("cropped", ("cropped",)),
    ("full-length", ("full-length", "full length")),
    ("mini", ("mini",)),
    ("midi", ("midi",)),
    ("maxi", ("maxi",)),
)

# Garment types reported by the vision collaborator.
DETECTED_TOP_TYPES: Tuple[str, ...] = (
    "blouse",
    "shirt",
    "top",
    "sweater",
    "tank",
    "t-shirt",
    "tee",
    "polo",
    "tunic",
)
DETECTED_BOTTOM_TYPES: Tuple[str, ...] = ("pants", "jeans", "skirt", "shorts", "trousers", "leggings")


def _normalize_piece(value: str) -> str:
    return value.strip().lower()


def _scan(
    normalized: str, priority: Tuple[Tuple[Category, FrozenSet[str]], ...] = CATEGORY_PRIORITY
) -> Category:
    for category, keywords in priority:
        if any(keyword in normalized for keyword in keywords):
            return category
    return Category.UNKNOWN


def _build_keyword_index() -> Mapping[str, Category]:
    # Each keyword is indexed under the category the full priority scan gives
    # it, so an exact-keyword hit always agrees with the substring scan.
    index: Dict[str, Category] = {}
    for _, keywords in CATEGORY_PRIORITY:
        for keyword in keywords:
            index[keyword] = _scan(keyword)
    return MappingProxyType(index)


@dataclass(frozen=True)
class Taxonomy:
    """Read-only category tables plus a precomputed keyword index."""

    priority: Tuple[Tuple[Category, FrozenSet[str]], ...] = CATEGORY_PRIORITY
    keyword_index: Mapping[str, Category] = field(default_factory=_build_keyword_index)

    def categorize(self, piece: str) -> Category:
        """Return the highest priority category whose keywords occur in ``piece``."""

        normalized = _normalize_piece(piece)
        indexed = self.keyword_index.get(normalized)
        if indexed is not None:
            return indexed
        return _scan(normalized, self.priority)


TAXONOMY = Taxonomy()


def is_top_type(garment_type: str) -> bool:
    lowered = garment_type.lower()
    return any(keyword in lowered for keyword in DETECTED_TOP_TYPES)


def is_bottom_type(garment_type: str) -> bool:
    lowered = garment_type.lower()
    return any(keyword in lowered for keyword in DETECTED_BOTTOM_TYPES)


__all__ = [
    "ACCESSORIES",
    "BOTTOMS",
    "CATEGORY_PRIORITY",
    "COLOR_KEYWORDS",
    "Category",
    "DETECTED_BOTTOM_TYPES",
    "DETECTED_TOP_TYPES",
    "LAYERS",
    "LENGTH_KEYWORDS",
    "NECKLINE_KEYWORDS",
    "ONE_PIECE_GARMENTS",
    "OUTERWEAR_KEYWORDS",
    "REQUEST_BOTTOM_TYPES",
    "REQUEST_ONE_PIECE_TYPES",
    "REQUEST_TOP_TYPES",
    "TAXONOMY",
    "TOPS",
    "Taxonomy",
    "is_bottom_type",
    "is_top_type",
]
