"""Conflict resolution between garment pieces of one outfit."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from models.compliance import CoherenceResult
from models.taxonomy import TAXONOMY, Category, Taxonomy

logger = logging.getLogger(__name__)

_SEPARATES = {Category.TOP, Category.BOTTOM}
_ONE_PIECE_EXCLUSIONS = [
    "separate pants",
    "separate jeans",
    "separate skirt",
    "separate shorts",
    "separate top",
    "separate shirt",
    "two-piece outfit",
]
_ONE_PIECE_TERMS = ["dress", "gown", "jumpsuit"]
_GENERIC_CONFLICT_EXCLUSIONS = [
    "wearing multiple dresses",
    "wearing dress and pants",
    "wearing pants and skirt",
    "nude",
    "naked",
    "underwear only",
]


class CoherenceValidator:
    """Removes pieces that cannot be worn together (e.g. a dress with jeans).

    Exactly one rule applies per call, checked in order:

    1. a one-piece garment is present: separate tops and bottoms are removed;
    2. otherwise a top or bottom is present: one-piece garments are removed;
    3. otherwise every piece is kept unchanged.

    Layers, accessories and unrecognised pieces are never removed.
    """

    def __init__(self, taxonomy: Taxonomy = TAXONOMY) -> None:
        self.taxonomy = taxonomy

    def categorize(self, piece: str) -> Category:
        return self.taxonomy.categorize(piece)

    def validate(self, pieces: Sequence[str]) -> CoherenceResult:
        if not pieces:
            return CoherenceResult(
                is_valid=False,
                validated_pieces=[],
                removed_pieces=[],
                reason="No pieces provided",
            )

        categorized = self._categorize_all(pieces)
        categories = {category for _, category in categorized}

        if Category.ONE_PIECE in categories:
            validated = [piece for piece, category in categorized if category not in _SEPARATES]
            removed = [piece for piece, category in categorized if category in _SEPARATES]
            rule = "one_piece_dominance"
        elif categories & _SEPARATES:
            validated = [piece for piece, category in categorized if category is not Category.ONE_PIECE]
            removed = [piece for piece, category in categorized if category is Category.ONE_PIECE]
            rule = "separates_dominance"
        else:
            validated = list(pieces)
            removed = []
            rule = "no_conflict"

        if removed:
            logger.info(
                "Removed conflicting outfit pieces",
                extra={"rule": rule, "removed_count": len(removed)},
            )
        reason = (
            f"Removed {len(removed)} conflicting piece(s)" if removed else "All pieces are compatible"
        )
        return CoherenceResult(
            is_valid=True,
            validated_pieces=validated,
            removed_pieces=removed,
            reason=reason,
        )

    def negative_prompt_for(self, validated_pieces: Sequence[str]) -> str:
        """Exclusion terms that keep a generator from re-introducing conflicts."""

        categories = {category for _, category in self._categorize_all(validated_pieces)}
        has_bottom = Category.BOTTOM in categories
        terms: List[str] = []

        if Category.ONE_PIECE in categories:
            terms.extend(_ONE_PIECE_EXCLUSIONS)

        if has_bottom:
            terms.extend(_ONE_PIECE_TERMS)
            if any("skirt" in piece.lower() for piece in validated_pieces):
                terms.extend(["pants", "jeans"])
            else:
                terms.append("skirt")

        if Category.TOP in categories and not has_bottom:
            terms.extend(_ONE_PIECE_TERMS)

        terms.extend(_GENERIC_CONFLICT_EXCLUSIONS)
        return ", ".join(terms)

    def build_coherent_prompt(
        self,
        pieces: Sequence[str],
        colors: Optional[Sequence[str]] = None,
        style: Optional[str] = None,
        include_negative_prompt: bool = False,
    ) -> Dict[str, Optional[str]]:
        """Compose a simple ``wearing ...`` prompt from the conflict-free pieces."""

        coherent = self.validate(pieces).validated_pieces
        if not coherent:
            logger.warning("No valid pieces left after coherence validation")
            return {"prompt": "casual outfit", "negative_prompt": None}

        prompt = f"wearing {', '.join(coherent)}"
        if colors:
            prompt += f" in {' and '.join(colors)} colors"
        if style:
            prompt += f", {style} style"

        negative = self.negative_prompt_for(coherent) if include_negative_prompt else None
        return {"prompt": prompt, "negative_prompt": negative}

    def are_compatible(self, pieces: Sequence[str]) -> bool:
        return not self.validate(pieces).removed_pieces

    def filter_conflicting_pieces(self, pieces: Sequence[str]) -> List[str]:
        return self.validate(pieces).validated_pieces

    def _categorize_all(self, pieces: Sequence[str]) -> List[Tuple[str, Category]]:
        return [(piece, self.categorize(piece)) for piece in pieces]


__all__ = ["CoherenceValidator"]
