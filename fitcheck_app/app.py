"""Engine bootstrap wiring the specification, coherence and compliance components."""

from __future__ import annotations

import logging
from typing import Sequence

from agents.compliance_validator import ComplianceValidatorAgent, ImageLoader
from agents.spec_extractor import SpecExtractorAgent
from fitcheck_app.config import EngineConfig
from fitcheck_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.coherence import CoherenceValidator
from logic.prompt_compiler import PromptCompiler
from models.compliance import CoherenceResult, ValidationResult
from models.outfit_spec import EnforcedSpecification, MandatorySpecs
from models.taxonomy import TAXONOMY, Taxonomy
from tools.image_loader import load_image
from tools.text_completion import GeminiTextClient, TextCompletionClient
from tools.vision_analysis import GeminiVisionClient, VisionAnalysisClient

LOGGER = get_logger(__name__)


class OutfitSpecEngine:
    """Caller-facing API of the outfit specification and compliance engine.

    The engine holds no per-request state. Collaborators are injected so tests
    and offline evaluation can substitute mock clients; by default Gemini
    clients are built from :class:`EngineConfig`.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        text_client: TextCompletionClient | None = None,
        vision_client: VisionAnalysisClient | None = None,
        image_loader: ImageLoader = load_image,
        taxonomy: Taxonomy = TAXONOMY,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        configure_logging(self.config.log_level)

        self.text_client = text_client or GeminiTextClient(
            model=self.config.text_model, api_key=self.config.api_key
        )
        self.vision_client = vision_client or GeminiVisionClient(
            model=self.config.vision_model,
            api_key=self.config.api_key,
            max_output_tokens=self.config.vision_max_output_tokens,
            temperature=self.config.vision_temperature,
        )
        self.coherence_validator = CoherenceValidator(taxonomy)
        self.prompt_compiler = PromptCompiler()
        self.spec_extractor = SpecExtractorAgent(config=self.config, text_client=self.text_client)
        self.compliance_validator = ComplianceValidatorAgent(
            config=self.config, vision_client=self.vision_client, image_loader=image_loader
        )

    def extract_specification(self, text: str, style_hint: str = "casual") -> EnforcedSpecification:
        """Extract mandatory specs from ``text`` and compile generation prompts."""

        with operation_context("app:extract_specification") as correlation_id:
            extraction = self.spec_extractor.extract(text, style_hint)
            specs = extraction.mandatory_specs
            enforced = EnforcedSpecification(
                mandatory_specs=specs,
                positive_prompt=self.prompt_compiler.compile_positive(specs),
                negative_prompt=self.prompt_compiler.compile_negative(specs, extraction.forbidden_items),
                confidence=extraction.confidence,
                reasoning=extraction.reasoning,
                forbidden_items=list(extraction.forbidden_items),
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                agent="app",
                method="extract_specification",
                correlation_id=correlation_id,
                source=extraction.source,
                item_count=specs.item_count,
            )
            return enforced

    def validate_pieces(self, pieces: Sequence[str]) -> CoherenceResult:
        return self.coherence_validator.validate(pieces)

    def validate_generated_image(self, image_url: str, mandatory_specs: MandatorySpecs) -> ValidationResult:
        return self.compliance_validator.validate(image_url, mandatory_specs)


__all__ = ["OutfitSpecEngine"]
