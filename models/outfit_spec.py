"""Mandatory outfit specification schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

GARMENT_SLOTS: Tuple[str, ...] = ("top", "bottom", "dress", "outerwear", "shoes")
_ATTRIBUTE_ORDER: Tuple[str, ...] = ("color", "style", "neckline", "length", "fit")


@dataclass
class GarmentSpec:
    """One mandatory garment slot and the attributes it must show."""

    type: str
    color: Optional[str] = None
    style: Optional[str] = None
    length: Optional[str] = None
    neckline: Optional[str] = None
    fit: Optional[str] = None

    def describe(self) -> str:
        """Return ``color style neckline length fit type`` with absent fields omitted."""

        parts = [getattr(self, name) for name in _ATTRIBUTE_ORDER if getattr(self, name)]
        parts.append(self.type)
        return " ".join(parts)

    def to_dict(self) -> Dict[str, str]:
        payload = {"type": self.type}
        for name in _ATTRIBUTE_ORDER:
            value = getattr(self, name)
            if value:
                payload[name] = value
        return payload


@dataclass
class MandatorySpecs:
    """Per-slot description of the clothing a generated image must contain.

    ``item_count`` is set once at extraction time and is not recomputed by
    downstream consumers. Dress/separates exclusivity is not enforced here;
    see :class:`logic.coherence.CoherenceValidator`.
    """

    top: Optional[GarmentSpec] = None
    bottom: Optional[GarmentSpec] = None
    dress: Optional[GarmentSpec] = None
    outerwear: Optional[GarmentSpec] = None
    shoes: Optional[GarmentSpec] = None
    item_count: int = 0
    allow_additional_items: bool = False

    def populated_slots(self) -> List[Tuple[str, GarmentSpec]]:
        """Return ``(slot, spec)`` pairs for every filled slot in canonical order."""

        return [(slot, getattr(self, slot)) for slot in GARMENT_SLOTS if getattr(self, slot) is not None]

    def slot_count(self) -> int:
        return len(self.populated_slots())

    def garment_types(self) -> List[str]:
        return [spec.type for _, spec in self.populated_slots()]

    def colors(self) -> List[str]:
        seen: List[str] = []
        for _, spec in self.populated_slots():
            if spec.color and spec.color not in seen:
                seen.append(spec.color)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the camelCase wire shape exchanged with callers."""

        payload: Dict[str, Any] = {slot: spec.to_dict() for slot, spec in self.populated_slots()}
        payload["itemCount"] = self.item_count
        payload["allowAdditionalItems"] = self.allow_additional_items
        return payload


@dataclass
class ExtractionResult:
    """Output of a single specification extraction attempt."""

    mandatory_specs: MandatorySpecs
    forbidden_items: List[str] = field(default_factory=list)
    confidence: float = 0.0
    reasoning: str = ""
    source: str = "llm"


@dataclass
class EnforcedSpecification:
    """Extraction result plus the compiled generation prompts.

    ``confidence`` is the extraction confidence (0-100). It is a different
    metric from the compliance ``score`` of a generated image.
    """

    mandatory_specs: MandatorySpecs
    positive_prompt: str
    negative_prompt: str
    confidence: float
    reasoning: str
    forbidden_items: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mandatorySpecs": self.mandatory_specs.to_dict(),
            "positivePrompt": self.positive_prompt,
            "negativePrompt": self.negative_prompt,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "forbiddenItems": list(self.forbidden_items),
        }


__all__ = [
    "EnforcedSpecification",
    "ExtractionResult",
    "GARMENT_SLOTS",
    "GarmentSpec",
    "MandatorySpecs",
]
