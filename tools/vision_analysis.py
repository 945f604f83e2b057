"""Vision-analysis collaborator used to itemize generated outfit images."""

from __future__ import annotations

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import google.generativeai as genai

from tools.image_loader import EncodedImage
from tools.observability import instrument_call
from tools.text_completion import CollaboratorUnavailableError

LOGGER = logging.getLogger(__name__)


class VisionAnalysisClient(ABC):
    """Abstract image + prompt analysis interface."""

    @abstractmethod
    def analyze(self, image: EncodedImage, prompt: str) -> str:
        """Return the collaborator's raw text reply about ``image``."""


class GeminiVisionClient(VisionAnalysisClient):
    """Gemini backed multimodal analysis."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        max_output_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        if api_key:
            genai.configure(api_key=api_key)

    @instrument_call("vision.analyze")
    def analyze(self, image: EncodedImage, prompt: str) -> str:
        if not self.api_key:
            raise CollaboratorUnavailableError("GOOGLE_API_KEY is not configured")
        try:
            image_bytes = base64.b64decode(image.data, validate=True)
        except binascii.Error as exc:
            raise CollaboratorUnavailableError("image payload is not valid base64") from exc

        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config={
                "max_output_tokens": self.max_output_tokens,
                "temperature": self.temperature,
            },
        )
        try:
            response = model.generate_content(
                [{"mime_type": image.mime_type, "data": image_bytes}, prompt]
            )
            text = response.text
        except Exception as exc:  # noqa: BLE001 - SDK raises a wide range of errors
            raise CollaboratorUnavailableError(f"Gemini vision analysis failed: {exc}") from exc

        if not text:
            raise CollaboratorUnavailableError("Gemini returned an empty analysis")
        return text


class MockVisionClient(VisionAnalysisClient):
    """Offline deterministic vision client for tests and evaluation."""

    def __init__(self, response: Optional[str] = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Tuple[EncodedImage, str]] = []

    def analyze(self, image: EncodedImage, prompt: str) -> str:
        self.calls.append((image, prompt))
        if self.error is not None:
            raise self.error
        if self.response is None:
            raise CollaboratorUnavailableError("mock vision client has no response configured")
        LOGGER.debug("Returning mock analysis", extra={"length": len(self.response)})
        return self.response


__all__ = ["GeminiVisionClient", "MockVisionClient", "VisionAnalysisClient"]
