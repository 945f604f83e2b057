"""Deterministic compliance scoring of detected items against mandatory specs."""

from __future__ import annotations

from typing import List, Optional

from models.color_theory import colors_match
from models.compliance import DetectedItem, ValidationResult, is_passing
from models.outfit_spec import GarmentSpec, MandatorySpecs
from models.taxonomy import is_bottom_type, is_top_type

EXTRA_ITEMS_PENALTY = 30
MISSING_ITEMS_PENALTY = 40
UNEXPECTED_ITEM_PENALTY = 20
COLOR_MISMATCH_PENALTY = 25
STYLE_MISMATCH_PENALTY = 20
COLOR_EMPHASIS_WEIGHT = 1.8
STYLE_EMPHASIS_WEIGHT = 1.5


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def format_expectation(spec: GarmentSpec) -> str:
    parts: List[str] = []
    if spec.color:
        parts.append(spec.color)
    if spec.style:
        parts.append(spec.style)
    if spec.neckline:
        parts.append(f"{spec.neckline} neckline")
    if spec.length:
        parts.append(f"{spec.length} length")
    if spec.fit:
        parts.append(spec.fit)
    parts.append(spec.type)
    return " ".join(parts)


def build_expected_items(specs: MandatorySpecs) -> List[str]:
    """Human readable description of every populated slot, in slot order."""

    return [format_expectation(spec) for _, spec in specs.populated_slots()]


def _first_top(items: List[DetectedItem]) -> Optional[DetectedItem]:
    return next((item for item in items if is_top_type(item.type)), None)


def _first_bottom(items: List[DetectedItem]) -> Optional[DetectedItem]:
    return next((item for item in items if is_bottom_type(item.type)), None)


def score_detected_items(
    detected_items: List[DetectedItem],
    specs: MandatorySpecs,
    expected_items: List[str],
) -> ValidationResult:
    """Score detected items, starting at 100 and applying every deduction.

    Item count, unexpected items, top/bottom colors and the top neckline are
    checked independently. The score is clamped to [0, 100] and the image
    passes at 70 or more with at most two issues.
    """

    issues: List[str] = []
    recommendations: List[str] = []
    score = 100.0
    found = len(detected_items)

    if found > specs.item_count and not specs.allow_additional_items:
        issues.append(f"Extra items detected: {found} items found, expected {specs.item_count}")
        score -= EXTRA_ITEMS_PENALTY
        recommendations.append("Regenerate with stricter negative prompt to exclude extra items")

    if found < specs.item_count:
        issues.append(f"Missing items: {found} items found, expected {specs.item_count}")
        score -= MISSING_ITEMS_PENALTY
        recommendations.append("Regenerate to include all requested items")

    unexpected = [item for item in detected_items if not item.is_expected]
    if unexpected:
        names = ", ".join(item.type for item in unexpected)
        issues.append(f"Unexpected items: {names}")
        score -= UNEXPECTED_ITEM_PENALTY * len(unexpected)
        recommendations.append(f"Remove unwanted items: {names}")

    top_item = _first_top(detected_items)
    bottom_item = _first_bottom(detected_items)

    for label, spec, item in (("Top", specs.top, top_item), ("Bottom", specs.bottom, bottom_item)):
        if spec is None or not spec.color or item is None:
            continue
        if not colors_match(item.color or "", spec.color):
            issues.append(
                f"{label} color mismatch: expected {spec.color}, got {item.color or 'unknown'}"
            )
            score -= COLOR_MISMATCH_PENALTY
            recommendations.append(
                f"Use stronger color emphasis: ({spec.color}:{COLOR_EMPHASIS_WEIGHT})"
            )

    if specs.top and specs.top.neckline and top_item and top_item.style:
        if specs.top.neckline.lower() not in top_item.style.lower():
            issues.append(
                f"Top style mismatch: expected {specs.top.neckline}, got {top_item.style}"
            )
            score -= STYLE_MISMATCH_PENALTY
            recommendations.append(
                f"Add explicit style: ({specs.top.neckline}:{STYLE_EMPHASIS_WEIGHT})"
            )

    score = _clamp(score)
    return ValidationResult(
        is_valid=is_passing(score, issues),
        confidence=score,
        score=score,
        issues=issues,
        detected_items=list(detected_items),
        expected_items=list(expected_items),
        recommendations=recommendations,
    )


__all__ = ["build_expected_items", "format_expectation", "score_detected_items"]
