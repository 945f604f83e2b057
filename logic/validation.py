"""Pydantic schemas and helpers for validating collaborator replies.

LLM and vision collaborators answer with free text that should contain one
JSON object. The helpers here locate that object, validate it against a schema
and return a :class:`ParseOutcome` instead of raising, so callers can branch on
success or failure explicitly.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.compliance import DetectedItem
from models.outfit_spec import ExtractionResult, GarmentSpec, MandatorySpecs

T = TypeVar("T")

DEFAULT_LLM_CONFIDENCE = 85
DEFAULT_LLM_REASONING = "Parsed from user request"

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    """Tagged result of parsing a collaborator reply."""

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "ParseOutcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseOutcome[T]":
        return cls(ok=False, error=error)


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class GarmentSpecPayload(_Payload):
    type: str = Field(min_length=1)
    color: Optional[str] = None
    style: Optional[str] = None
    length: Optional[str] = None
    neckline: Optional[str] = None
    fit: Optional[str] = None

    @field_validator("color", "style", "length", "neckline", "fit")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_model(self) -> GarmentSpec:
        return GarmentSpec(**self.model_dump())


class MandatorySpecsPayload(_Payload):
    top: Optional[GarmentSpecPayload] = None
    bottom: Optional[GarmentSpecPayload] = None
    dress: Optional[GarmentSpecPayload] = None
    outerwear: Optional[GarmentSpecPayload] = None
    shoes: Optional[GarmentSpecPayload] = None
    item_count: Optional[int] = Field(default=None, alias="itemCount", ge=0)
    allow_additional_items: bool = Field(default=False, alias="allowAdditionalItems")

    def to_model(self) -> MandatorySpecs:
        specs = MandatorySpecs(
            top=self.top.to_model() if self.top else None,
            bottom=self.bottom.to_model() if self.bottom else None,
            dress=self.dress.to_model() if self.dress else None,
            outerwear=self.outerwear.to_model() if self.outerwear else None,
            shoes=self.shoes.to_model() if self.shoes else None,
            allow_additional_items=self.allow_additional_items,
        )
        specs.item_count = self.item_count if self.item_count is not None else specs.slot_count()
        return specs


class ExtractionPayload(_Payload):
    """Reply shape requested from the LLM text-completion collaborator."""

    mandatory_specs: MandatorySpecsPayload = Field(alias="mandatorySpecs")
    forbidden_items: List[str] = Field(default_factory=list, alias="forbiddenItems")
    confidence: float = Field(default=DEFAULT_LLM_CONFIDENCE, ge=0, le=100)
    reasoning: str = DEFAULT_LLM_REASONING

    @field_validator("confidence", mode="before")
    @classmethod
    def _default_confidence(cls, value: Any) -> Any:
        return DEFAULT_LLM_CONFIDENCE if value in (None, 0, "") else value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _default_reasoning(cls, value: Any) -> Any:
        return value or DEFAULT_LLM_REASONING

    def to_result(self) -> ExtractionResult:
        return ExtractionResult(
            mandatory_specs=self.mandatory_specs.to_model(),
            forbidden_items=[item for item in self.forbidden_items if item],
            confidence=self.confidence,
            reasoning=self.reasoning,
            source="llm",
        )


class DetectedItemPayload(_Payload):
    type: str = Field(min_length=1)
    color: Optional[str] = None
    style: Optional[str] = None
    confidence: float = 0.0
    is_expected: bool = Field(default=False, alias="isExpected")
    reason: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def _missing_confidence(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, value))

    def to_model(self) -> DetectedItem:
        return DetectedItem(
            type=self.type,
            color=self.color,
            style=self.style,
            confidence=self.confidence,
            is_expected=self.is_expected,
            reason=self.reason,
        )


class VisionPayload(_Payload):
    """Reply shape requested from the vision-analysis collaborator."""

    detected_items: List[DetectedItemPayload] = Field(alias="detectedItems")


def extract_json_object(text: str) -> Optional[str]:
    """Return the outermost ``{...}`` block of ``text`` after stripping code fences."""

    cleaned = _CODE_FENCE.sub("", text.strip())
    match = _JSON_OBJECT.search(cleaned)
    return match.group(0) if match else None


def _parse_payload(text: Optional[str], schema: type[BaseModel]) -> ParseOutcome[Any]:
    if not text or not text.strip():
        return ParseOutcome.failure("empty response")
    raw = extract_json_object(text)
    if raw is None:
        return ParseOutcome.failure("no JSON object found in response")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        return ParseOutcome.failure(f"invalid JSON: {exc.msg}")
    try:
        return ParseOutcome.success(schema.model_validate(data))
    except ValidationError as exc:
        return ParseOutcome.failure(f"schema mismatch: {exc.error_count()} error(s)")


def parse_extraction_response(text: Optional[str]) -> ParseOutcome[ExtractionResult]:
    outcome = _parse_payload(text, ExtractionPayload)
    if not outcome.ok:
        return ParseOutcome.failure(outcome.error or "unparsable response")
    return ParseOutcome.success(outcome.value.to_result())


def parse_vision_response(text: Optional[str]) -> ParseOutcome[List[DetectedItem]]:
    outcome = _parse_payload(text, VisionPayload)
    if not outcome.ok:
        return ParseOutcome.failure(outcome.error or "unparsable response")
    return ParseOutcome.success([item.to_model() for item in outcome.value.detected_items])


__all__ = [
    "DetectedItemPayload",
    "ExtractionPayload",
    "GarmentSpecPayload",
    "MandatorySpecsPayload",
    "ParseOutcome",
    "VisionPayload",
    "extract_json_object",
    "parse_extraction_response",
    "parse_vision_response",
]
