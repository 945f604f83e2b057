"""Tests for schema-validated parsing of collaborator replies."""

import json

from logic.validation import (
    MandatorySpecsPayload,
    ParseOutcome,
    extract_json_object,
    parse_extraction_response,
    parse_vision_response,
)


def test_extract_json_object_strips_code_fences_and_prose() -> None:
    fenced = '```json\n{"a": {"b": 1}}\n```'
    chatty = 'Here you go: {"a": 1} hope that helps'

    assert extract_json_object(fenced) == '{"a": {"b": 1}}'
    assert extract_json_object(chatty) == '{"a": 1}'
    assert extract_json_object("no braces here") is None


def test_parse_outcome_constructors() -> None:
    ok = ParseOutcome.success([1])
    failed = ParseOutcome.failure("nope")

    assert ok.ok and ok.value == [1] and ok.error is None
    assert not failed.ok and failed.value is None and failed.error == "nope"


def test_extraction_failure_reasons() -> None:
    assert parse_extraction_response(None).error == "empty response"
    assert parse_extraction_response("   ").error == "empty response"
    assert parse_extraction_response("nothing useful").error == "no JSON object found in response"
    assert parse_extraction_response("{not: json}").error.startswith("invalid JSON")
    assert parse_extraction_response('{"forbiddenItems": []}').error.startswith("schema mismatch")


def test_extraction_defaults_for_missing_or_zero_confidence() -> None:
    reply = json.dumps(
        {
            "mandatorySpecs": {"top": {"type": " blouse ", "color": "", "neckline": "v-neck"}},
            "forbiddenItems": ["jacket", ""],
            "confidence": 0,
            "reasoning": "",
        }
    )

    outcome = parse_extraction_response(reply)

    assert outcome.ok
    result = outcome.value
    assert result.confidence == 85
    assert result.reasoning == "Parsed from user request"
    assert result.forbidden_items == ["jacket"]
    assert result.mandatory_specs.top.type == "blouse"
    assert result.mandatory_specs.top.color is None
    assert result.mandatory_specs.item_count == 1
    assert result.source == "llm"


def test_extraction_rejects_out_of_range_values() -> None:
    too_confident = json.dumps({"mandatorySpecs": {}, "confidence": 140})
    negative_count = json.dumps({"mandatorySpecs": {"itemCount": -1}})

    assert not parse_extraction_response(too_confident).ok
    assert not parse_extraction_response(negative_count).ok


def test_mandatory_specs_payload_accepts_camel_and_snake_case() -> None:
    camel = MandatorySpecsPayload.model_validate(
        {"dress": {"type": "gown"}, "itemCount": 3, "allowAdditionalItems": True}
    ).to_model()
    snake = MandatorySpecsPayload.model_validate(
        {"dress": {"type": "gown"}, "item_count": 3, "allow_additional_items": True}
    ).to_model()

    assert camel == snake
    assert camel.item_count == 3
    assert camel.allow_additional_items is True


def test_vision_items_are_normalised() -> None:
    reply = json.dumps(
        {
            "detectedItems": [
                {"type": "blouse", "color": "white", "confidence": 1.7, "isExpected": True},
                {"type": "jacket", "confidence": None, "reason": "Extra item"},
            ]
        }
    )

    outcome = parse_vision_response(reply)

    assert outcome.ok
    blouse, jacket = outcome.value
    assert blouse.confidence == 1.0 and blouse.is_expected is True
    assert jacket.confidence == 0.0 and jacket.is_expected is False
    assert jacket.reason == "Extra item"


def test_vision_empty_item_list_is_valid() -> None:
    outcome = parse_vision_response('{"detectedItems": []}')

    assert outcome.ok
    assert outcome.value == []
