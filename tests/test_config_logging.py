"""Tests for environment configuration and structured log redaction."""

import json
import logging
from pathlib import Path

import pytest

from fitcheck_app.config import EngineConfig
from fitcheck_app.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    ensure_correlation_id,
    operation_context,
    redact_for_log,
)

_CONFIG_VARS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "FITCHECK_CONFIG_DIR",
    "GOOGLE_API_KEY",
    "TEXT_MODEL",
    "VISION_MODEL",
    "TEXT_MAX_OUTPUT_TOKENS",
    "VISION_MAX_OUTPUT_TOKENS",
    "VISION_TEMPERATURE",
    "IMAGE_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.chdir(tmp_path)

    config = EngineConfig.from_env()

    assert config.api_key is None
    assert config.text_model == "gemini-1.5-flash"
    assert config.vision_max_output_tokens == 1000
    assert config.vision_temperature == 0.3
    assert config.environment is None


def test_yaml_file_with_environment_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "staging.yaml").write_text(
        "# staging settings\n"
        "google_api_key: 'yaml-key'\n"
        "text_model: gemini-1.5-pro\n"
        "vision_temperature: 0.1\n"
        "image_timeout_seconds: 4\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("FITCHECK_CONFIG_DIR", str(tmp_path))
    clean_env.setenv("TEXT_MODEL", "gemini-env-model")

    config = EngineConfig.from_env()

    assert config.environment == "staging"
    assert config.api_key == "yaml-key"
    assert config.text_model == "gemini-env-model"
    assert config.vision_temperature == 0.1
    assert config.image_timeout_seconds == 4.0


def test_explicit_config_path(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text('log_level: "DEBUG"\ntext_max_output_tokens: 512\n')
    clean_env.setenv("APP_CONFIG_PATH", str(path))

    config = EngineConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.text_max_output_tokens == 512


def test_redaction_scrubs_user_content() -> None:
    payload = {
        "user_request": "red dress for my wedding",
        "nested": {"prompt": "(red dress:1.5)", "count": 2},
        "note": "contact jane.doe@example.com",
        "url": "https://cdn.example.com/look.png",
        "items": ["data:image/png;base64,AAAA", "x" * 250],
    }

    redacted = redact_for_log(payload)

    assert redacted["user_request"] == "[redacted]"
    assert redacted["nested"] == {"prompt": "[redacted]", "count": 2}
    assert redacted["note"] == "contact [redacted-email]"
    assert redacted["url"] == "[redacted-url]"
    assert redacted["items"][0] == "[redacted-url]"
    assert redacted["items"][1] == "x" * 200 + "..."


def test_json_formatter_emits_event_and_correlation() -> None:
    record = logging.LogRecord("fitcheck.test", logging.INFO, __file__, 1, "spec_ready", None, None)
    record.event = "spec_ready"
    record.correlation_id = "corr-1"
    record.image_ref = "https://cdn.example.com/look.png"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "spec_ready"
    assert payload["level"] == "INFO"
    assert payload["correlation_id"] == "corr-1"
    assert payload["image_ref"] == "[redacted-url]"


def test_operation_context_scopes_correlation_id() -> None:
    before = CORRELATION_ID.get()

    with operation_context("test", correlation_id="fixed-id") as correlation_id:
        assert correlation_id == "fixed-id"
        assert ensure_correlation_id() == "fixed-id"

    assert CORRELATION_ID.get() == before
