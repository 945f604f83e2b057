"""Specification extractor turning free-text outfit requests into mandatory specs."""

from __future__ import annotations

import logging

from fitcheck_app.config import EngineConfig
from fitcheck_app.logging_config import get_logger, log_event, operation_context
from logic.keyword_extraction import extract_with_keywords
from logic.safety import json_only_instruction
from logic.validation import parse_extraction_response
from models.outfit_spec import ExtractionResult
from tools.text_completion import TextCompletionClient

logger = get_logger(__name__)

_RESPONSE_TEMPLATE = """{
  "mandatorySpecs": {
    "top": {"color": "brown", "style": "one-shoulder", "type": "blouse", "neckline": "one-shoulder"},
    "bottom": {"color": "white", "type": "pants", "length": "capri"},
    "itemCount": 2,
    "allowAdditionalItems": false
  },
  "forbiddenItems": ["jacket", "cardigan", "blazer", "coat", "shorts underneath", "leggings underneath", "extra layers", "outerwear"],
  "confidence": 95,
  "reasoning": "User explicitly requested brown one-shoulder blouse and white capri pants. No outerwear or additional items mentioned, so they are forbidden."
}"""


class SpecExtractorAgent:
    """Extracts :class:`MandatorySpecs` with an LLM and a keyword fallback.

    The LLM reply is schema-validated; an unreachable collaborator or an
    unparsable reply degrades to :func:`logic.keyword_extraction.extract_with_keywords`.
    ``extract`` never raises.
    """

    def __init__(self, config: EngineConfig, text_client: TextCompletionClient) -> None:
        self.config = config
        self.text_client = text_client
        self.system_instruction = json_only_instruction(
            "outfit specification extractor. Turn clothing requests into strict, checkable specifications"
        )

    def build_prompt(self, user_request: str, style_hint: str) -> str:
        return (
            f"{self.system_instruction}\n\n"
            f'Analyze this fashion request and extract MANDATORY specifications: "{user_request}"\n\n'
            f"Style context: {style_hint}\n\n"
            "Your task:\n"
            "1. Identify EACH clothing item explicitly mentioned\n"
            "2. Extract MANDATORY attributes (color, style, type, length, neckline, fit)\n"
            "3. Determine items that should be FORBIDDEN (not mentioned = forbidden)\n"
            "4. Count total items requested\n\n"
            "Rules:\n"
            '- If user says "white pants", that\'s MANDATORY white color\n'
            '- If user says "one-shoulder blouse", that\'s MANDATORY one-shoulder neckline\n'
            '- If user says "capri pants", that\'s MANDATORY capri length\n'
            "- Items NOT mentioned should be added to forbidden list "
            "(e.g., if no jacket mentioned, forbid jackets)\n"
            "- Use only the slots top, bottom, dress, outerwear and shoes\n\n"
            f"Respond ONLY with valid JSON:\n{_RESPONSE_TEMPLATE}\n\n"
            "NO additional text, ONLY JSON."
        )

    def extract(self, user_request: str, style_hint: str = "casual") -> ExtractionResult:
        with operation_context("agent:spec_extractor.extract") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="spec_extractor",
                method="extract",
                correlation_id=correlation_id,
                user_request=user_request,
                style_hint=style_hint,
            )
            try:
                raw_response = self.text_client.complete(
                    self.build_prompt(user_request, style_hint),
                    max_output_tokens=self.config.text_max_output_tokens,
                )
            except Exception as exc:  # noqa: BLE001 - any collaborator failure degrades
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="extraction_degraded",
                    agent="spec_extractor",
                    correlation_id=correlation_id,
                    cause="collaborator_unavailable",
                    exc_info=True,
                    error=str(exc),
                )
                return extract_with_keywords(user_request)

            outcome = parse_extraction_response(raw_response)
            if not outcome.ok:
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="extraction_degraded",
                    agent="spec_extractor",
                    correlation_id=correlation_id,
                    cause="unparsable_response",
                    error=outcome.error,
                )
                return extract_with_keywords(user_request)

            result = outcome.value
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="spec_extractor",
                method="extract",
                correlation_id=correlation_id,
                item_count=result.mandatory_specs.item_count,
                confidence=result.confidence,
            )
            return result


__all__ = ["SpecExtractorAgent"]
