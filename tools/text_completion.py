"""LLM text-completion collaborator used for specification extraction."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import google.generativeai as genai

from tools.observability import instrument_call

LOGGER = logging.getLogger(__name__)


class CollaboratorUnavailableError(RuntimeError):
    """Raised when an external LLM or vision collaborator cannot produce a reply."""


class TextCompletionClient(ABC):
    """Abstract single-message text completion interface."""

    @abstractmethod
    def complete(self, prompt: str, max_output_tokens: int) -> str:
        """Return the collaborator's raw text reply to ``prompt``."""


class GeminiTextClient(TextCompletionClient):
    """Gemini backed text completion."""

    def __init__(self, model: str, api_key: str | None = None) -> None:
        self.model = model
        self.api_key = api_key
        if api_key:
            genai.configure(api_key=api_key)

    @instrument_call("llm.complete")
    def complete(self, prompt: str, max_output_tokens: int) -> str:
        if not self.api_key:
            raise CollaboratorUnavailableError("GOOGLE_API_KEY is not configured")

        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config={"max_output_tokens": max_output_tokens},
        )
        try:
            response = model.generate_content(prompt)
            text = response.text
        except Exception as exc:  # noqa: BLE001 - SDK raises a wide range of errors
            raise CollaboratorUnavailableError(f"Gemini completion failed: {exc}") from exc

        if not text:
            raise CollaboratorUnavailableError("Gemini returned an empty completion")
        return text


class MockTextClient(TextCompletionClient):
    """Offline deterministic text client for tests and evaluation."""

    def __init__(self, response: Optional[str] = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: List[str] = []

    def complete(self, prompt: str, max_output_tokens: int) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self.response is None:
            raise CollaboratorUnavailableError("mock text client has no response configured")
        LOGGER.debug("Returning mock completion", extra={"length": len(self.response)})
        return self.response


__all__ = [
    "CollaboratorUnavailableError",
    "GeminiTextClient",
    "MockTextClient",
    "TextCompletionClient",
]
