"""Compile mandatory specs into weighted generation prompts.

Positive prompts use the ``(term:weight)`` emphasis syntax understood by
diffusion backends. Negative prompts are flat, comma separated and
deduplicated so compiling the same input twice yields the same text.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from models.outfit_spec import MandatorySpecs

SLOT_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("top", 1.5),
    ("bottom", 1.5),
    ("dress", 1.5),
    ("shoes", 1.2),
)
STRICT_ADHERENCE_WEIGHT = 1.3

QUALITY_TERMS: Tuple[str, ...] = (
    "professional fashion photography",
    "studio lighting",
    "isolated on white background",
    "product photography",
    "high resolution",
    "detailed fabric texture",
    "fashion flat lay",
    "clothing only",
    "no person",
    "garment display",
    "EXACTLY as specified",
)
STRICT_ADHERENCE_TERMS: Tuple[str, ...] = ("ONLY items listed", "no additional clothing")

QUALITY_FAILURE_TERMS: Tuple[str, ...] = (
    "blurry",
    "low quality",
    "distorted",
    "pixelated",
    "bad anatomy",
    "deformed",
    "ugly",
    "bad proportions",
    "duplicate",
    "watermark",
    "signature",
    "text",
)
UNWANTED_SUBJECT_TERMS: Tuple[str, ...] = (
    "person wearing clothes",
    "model",
    "human",
    "body",
    "mannequin",
    "hangers",
    "background clutter",
)
OUTERWEAR_EXCLUSIONS: Tuple[str, ...] = (
    "jacket",
    "blazer",
    "coat",
    "cardigan",
    "outerwear",
    "vest",
    "shawl",
    "cape",
)
LAYERING_EXCLUSIONS: Tuple[str, ...] = ("shorts underneath", "leggings underneath", "layers under pants")
EXTRA_ITEM_EXCLUSIONS: Tuple[str, ...] = (
    "additional items",
    "extra clothing",
    "bonus pieces",
    "multiple versions",
    "more than specified",
)


def emphasize(term: str, weight: float) -> str:
    return f"({term}:{weight})"


def _dedupe(terms: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(terms))


class PromptCompiler:
    """Stateless compiler from :class:`MandatorySpecs` to prompt strings."""

    def compile_positive(self, specs: MandatorySpecs) -> str:
        parts: List[str] = []
        for slot, weight in SLOT_WEIGHTS:
            garment = getattr(specs, slot)
            if garment is not None:
                parts.append(emphasize(garment.describe(), weight))

        parts.extend(QUALITY_TERMS)
        parts.extend(emphasize(term, STRICT_ADHERENCE_WEIGHT) for term in STRICT_ADHERENCE_TERMS)
        return ", ".join(parts)

    def compile_negative(self, specs: MandatorySpecs, forbidden_items: Sequence[str]) -> str:
        negatives: List[str] = list(forbidden_items)
        negatives.extend(QUALITY_FAILURE_TERMS)
        negatives.extend(UNWANTED_SUBJECT_TERMS)

        top_type = specs.top.type.lower() if specs.top else ""
        if specs.outerwear is None and "jacket" not in top_type:
            negatives.extend(OUTERWEAR_EXCLUSIONS)

        bottom_type = specs.bottom.type.lower() if specs.bottom else ""
        if "short" not in bottom_type:
            negatives.extend(LAYERING_EXCLUSIONS)

        if not specs.allow_additional_items:
            negatives.extend(EXTRA_ITEM_EXCLUSIONS)

        return ", ".join(_dedupe(negatives))


__all__ = ["PromptCompiler", "emphasize"]
