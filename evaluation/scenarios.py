"""Evaluation scenarios covering extraction, coherence and compliance scoring."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

# 1x1 transparent PNG; the mock vision client never inspects pixels.
SAMPLE_IMAGE_URL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@dataclass
class EvaluationScenario:
    name: str
    description: str
    user_request: str
    style_hint: str = "casual"
    llm_response: Optional[str] = None
    detected_items: Optional[List[Dict[str, object]]] = None
    pieces: List[str] = field(default_factory=list)
    expectations: Dict[str, object] = field(default_factory=dict)


def _vision(items: List[Dict[str, object]]) -> List[Dict[str, object]]:
    return [{"confidence": 0.9, "isExpected": True, **item} for item in items]


_LLM_DRESS_REPLY = json.dumps(
    {
        "mandatorySpecs": {
            "dress": {"type": "dress", "color": "red", "length": "maxi"},
            "shoes": {"type": "heels", "color": "black"},
            "itemCount": 2,
            "allowAdditionalItems": False,
        },
        "forbiddenItems": ["jacket", "cardigan", "handbag"],
        "confidence": 92,
        "reasoning": "Red maxi dress with black heels requested.",
    }
)


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="fallback_separates",
        description="LLM unavailable; keyword scan recovers a two-piece outfit that renders cleanly.",
        user_request="brown one-shoulder blouse and white capri pants",
        detected_items=_vision(
            [
                {"type": "blouse", "color": "light brown", "style": "one-shoulder"},
                {"type": "capri pants", "color": "off-white"},
            ]
        ),
        pieces=["brown blouse", "white capri pants"],
        expectations={
            "item_count": 2,
            "confidence": 70,
            "positive_contains": ["(brown one-shoulder blouse:1.5)", "(white capri pants:1.5)"],
            "negative_contains": ["jacket", "leggings underneath"],
            "is_valid": True,
            "min_score": 100,
        },
    ),
    EvaluationScenario(
        name="llm_dress_with_extra_jacket",
        description="LLM reply parsed; generated image adds an unrequested jacket.",
        user_request="red maxi dress with black heels",
        llm_response=_LLM_DRESS_REPLY,
        detected_items=_vision(
            [
                {"type": "dress", "color": "red", "style": "maxi"},
                {"type": "heels", "color": "black"},
                {"type": "jacket", "color": "black", "isExpected": False},
            ]
        ),
        pieces=["red maxi dress", "blue jeans", "black heels"],
        expectations={
            "item_count": 2,
            "confidence": 92,
            "positive_contains": ["(red maxi dress:1.5)", "(black heels:1.2)"],
            "negative_contains": ["handbag", "outerwear"],
            "validated_pieces": ["red maxi dress", "black heels"],
            "is_valid": False,
            "max_score": 50,
        },
    ),
    EvaluationScenario(
        name="llm_garbage_color_mismatch",
        description="Unparsable LLM reply falls back; the image shows the wrong top color.",
        user_request="navy v-neck sweater with khaki trousers",
        llm_response="Sure! Here is a lovely outfit idea for you.",
        detected_items=_vision(
            [
                {"type": "sweater", "color": "red", "style": "v-neck"},
                {"type": "trousers", "color": "khaki"},
            ]
        ),
        pieces=["navy sweater", "khaki trousers", "leather belt"],
        expectations={
            "item_count": 2,
            "confidence": 70,
            "validated_pieces": ["navy sweater", "khaki trousers", "leather belt"],
            "is_valid": True,
            "max_score": 75,
        },
    ),
]


__all__ = ["EvaluationScenario", "SAMPLE_IMAGE_URL", "SCENARIOS"]
