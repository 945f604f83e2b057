"""FastAPI server exposing the specification engine over HTTP."""

from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from fitcheck_app.app import OutfitSpecEngine
from fitcheck_app.logging_config import configure_logging
from logic.validation import MandatorySpecsPayload

configure_logging()

app = FastAPI(title="FitCheck Specification Engine", version="0.1.0")


@lru_cache(maxsize=1)
def get_engine() -> OutfitSpecEngine:
    """Build the engine once per process from environment configuration."""

    return OutfitSpecEngine()


class SpecificationRequest(BaseModel):
    """Free-text outfit request to turn into mandatory specs and prompts."""

    text: str = Field(..., min_length=1, description="Clothing request in the user's words")
    style_hint: str = Field("casual", alias="styleHint", description="Style context for the extractor")

    model_config = {"populate_by_name": True}


class PieceValidationRequest(BaseModel):
    """Flat garment piece list to resolve category conflicts in."""

    pieces: List[str] = Field(default_factory=list)
    include_negative_prompt: bool = Field(False, alias="includeNegativePrompt")

    model_config = {"populate_by_name": True}


class ImageValidationRequest(BaseModel):
    """Generated image reference plus the specs it must satisfy."""

    image_url: str = Field(..., min_length=1, alias="imageUrl")
    mandatory_specs: MandatorySpecsPayload = Field(..., alias="mandatorySpecs")

    model_config = {"populate_by_name": True}


@app.get("/healthz")
def healthcheck(engine: OutfitSpecEngine = Depends(get_engine)) -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "fitcheck-spec-engine",
        "environment": engine.config.environment or "local",
        "model": engine.config.text_model,
    }


@app.post("/specifications")
def extract_specification(
    request: SpecificationRequest, engine: OutfitSpecEngine = Depends(get_engine)
) -> dict:
    """Extract mandatory specs and compile positive and negative prompts."""

    return engine.extract_specification(request.text, request.style_hint).to_dict()


@app.post("/pieces/validate")
def validate_pieces(
    request: PieceValidationRequest, engine: OutfitSpecEngine = Depends(get_engine)
) -> dict:
    """Resolve conflicts between outfit pieces."""

    result = engine.validate_pieces(request.pieces)
    payload = result.to_dict()
    negative_prompt: Optional[str] = None
    if request.include_negative_prompt and result.validated_pieces:
        negative_prompt = engine.coherence_validator.negative_prompt_for(result.validated_pieces)
    payload["negativePrompt"] = negative_prompt
    return payload


@app.post("/images/validate")
def validate_generated_image(
    request: ImageValidationRequest, engine: OutfitSpecEngine = Depends(get_engine)
) -> dict:
    """Score a generated image against the specs it was generated from."""

    specs = request.mandatory_specs.to_model()
    return engine.validate_generated_image(request.image_url, specs).to_dict()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
