"""Compliance validator scoring generated outfit images against mandatory specs."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from fitcheck_app.config import EngineConfig
from fitcheck_app.logging_config import get_logger, log_event, operation_context
from logic.compliance_scoring import build_expected_items, score_detected_items
from logic.safety import json_only_instruction
from logic.validation import parse_vision_response
from models.compliance import ValidationResult
from models.outfit_spec import MandatorySpecs
from tools.image_loader import EncodedImage, load_image
from tools.vision_analysis import VisionAnalysisClient

logger = get_logger(__name__)

ImageLoader = Callable[[str, Optional[float]], EncodedImage]

_RESPONSE_TEMPLATE = """{
  "detectedItems": [
    {"type": "blouse", "color": "brown", "style": "off-shoulder", "confidence": 0.95, "isExpected": false, "reason": "Expected one-shoulder but detected off-shoulder"},
    {"type": "jacket", "color": "brown", "style": "casual", "confidence": 0.85, "isExpected": false, "reason": "Extra item - jacket not requested"}
  ]
}"""


class ComplianceValidatorAgent:
    """Asks a vision collaborator what an image contains and scores it.

    Image loading, collaborator and parsing failures all produce the fixed
    system-error :class:`ValidationResult`; ``validate`` never raises.
    """

    def __init__(
        self,
        config: EngineConfig,
        vision_client: VisionAnalysisClient,
        image_loader: ImageLoader = load_image,
    ) -> None:
        self.config = config
        self.vision_client = vision_client
        self.image_loader = image_loader
        self.system_instruction = json_only_instruction(
            "outfit compliance inspector. Itemize every visible clothing item and flag anything not requested"
        )

    def build_prompt(self, expected_items: List[str]) -> str:
        numbered = "\n".join(f"{index}. {item}" for index, item in enumerate(expected_items, start=1))
        return (
            f"{self.system_instruction}\n\n"
            "Analyze this fashion outfit image and identify ALL clothing items visible.\n\n"
            f"Expected items (what we requested):\n{numbered or '(none)'}\n\n"
            "Your task:\n"
            "1. List EVERY clothing item you see in the image\n"
            "2. For each item, specify: type, color, style/details\n"
            "3. Mark if each item was EXPECTED (in the list above) or UNEXPECTED\n"
            "4. Detect any extra/unwanted items (jackets, layers, accessories not requested)\n\n"
            "Rules:\n"
            '- Be specific about colors (e.g., "light brown" not just "brown")\n'
            '- Identify exact garment types (e.g., "blouse" vs "shirt" vs "top")\n'
            '- Note style details (e.g., "one-shoulder", "off-shoulder", "v-neck")\n'
            "- Flag ANY item not in the expected list as UNEXPECTED\n"
            "- confidence is a number between 0 and 1\n\n"
            f"Respond ONLY with valid JSON:\n{_RESPONSE_TEMPLATE}"
        )

    def validate(self, image_url: str, specs: MandatorySpecs) -> ValidationResult:
        expected_items = build_expected_items(specs)
        with operation_context("agent:compliance_validator.validate") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="compliance_validator",
                method="validate",
                correlation_id=correlation_id,
                image_url=image_url,
                expected_items=expected_items,
            )
            try:
                image = self.image_loader(image_url, self.config.image_timeout_seconds)
                raw_response = self.vision_client.analyze(image, self.build_prompt(expected_items))
            except Exception as exc:  # noqa: BLE001 - validation system errors never propagate
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="validation_system_error",
                    agent="compliance_validator",
                    correlation_id=correlation_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                return ValidationResult.system_error(expected_items)

            outcome = parse_vision_response(raw_response)
            if not outcome.ok:
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="validation_system_error",
                    agent="compliance_validator",
                    correlation_id=correlation_id,
                    cause="unparsable_response",
                    error=outcome.error,
                )
                return ValidationResult.system_error(expected_items)

            result = score_detected_items(outcome.value, specs, expected_items)
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="compliance_validator",
                method="validate",
                correlation_id=correlation_id,
                score=result.score,
                is_valid=result.is_valid,
                issue_count=len(result.issues),
            )
            return result


__all__ = ["ComplianceValidatorAgent"]
