"""Result types for coherence and compliance validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PASSING_SCORE = 70
MAX_ISSUES_FOR_PASS = 2
SYSTEM_ERROR_ISSUE = "Validation system error"
SYSTEM_ERROR_RECOMMENDATION = "Unable to validate - proceeding with caution"


@dataclass
class DetectedItem:
    """A clothing item the vision collaborator reported in a generated image."""

    type: str
    confidence: float
    is_expected: bool
    color: Optional[str] = None
    style: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type,
            "confidence": self.confidence,
            "isExpected": self.is_expected,
        }
        for name in ("color", "style", "reason"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload


@dataclass
class ValidationResult:
    """Compliance of one generated image against its mandatory specs."""

    is_valid: bool
    confidence: float
    score: float
    issues: List[str] = field(default_factory=list)
    detected_items: List[DetectedItem] = field(default_factory=list)
    expected_items: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @classmethod
    def system_error(cls, expected_items: List[str]) -> "ValidationResult":
        return cls(
            is_valid=False,
            confidence=0,
            score=0,
            issues=[SYSTEM_ERROR_ISSUE],
            detected_items=[],
            expected_items=list(expected_items),
            recommendations=[SYSTEM_ERROR_RECOMMENDATION],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "confidence": self.confidence,
            "score": self.score,
            "issues": list(self.issues),
            "detectedItems": [item.to_dict() for item in self.detected_items],
            "expectedItems": list(self.expected_items),
            "recommendations": list(self.recommendations),
        }


def is_passing(score: float, issues: List[str]) -> bool:
    return score >= PASSING_SCORE and len(issues) <= MAX_ISSUES_FOR_PASS


@dataclass
class CoherenceResult:
    """Outcome of resolving category conflicts in a flat piece list."""

    is_valid: bool
    validated_pieces: List[str]
    removed_pieces: List[str]
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "validatedPieces": list(self.validated_pieces),
            "removedPieces": list(self.removed_pieces),
            "reason": self.reason,
        }


__all__ = [
    "CoherenceResult",
    "DetectedItem",
    "MAX_ISSUES_FOR_PASS",
    "PASSING_SCORE",
    "SYSTEM_ERROR_ISSUE",
    "SYSTEM_ERROR_RECOMMENDATION",
    "ValidationResult",
    "is_passing",
]
