"""Configuration helpers for the FitCheck specification engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_TEXT_MODEL = "gemini-1.5-flash"
DEFAULT_VISION_MODEL = "gemini-1.5-flash"


@dataclass
class EngineConfig:
    """Configuration values for the engine and its collaborators.

    Token budgets and temperatures are passed through to the LLM and vision
    collaborators untouched; the engine itself imposes no timeout or retry
    policy on them.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    text_max_output_tokens: int = 1000
    vision_max_output_tokens: int = 1000
    vision_temperature: float = 0.3
    image_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and environment variables win over it so secrets can be injected
        by the runtime.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("FITCHECK_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), yaml_config.get(key, default))

        return cls(
            api_key=get_value("google_api_key"),
            text_model=str(get_value("text_model") or DEFAULT_TEXT_MODEL),
            vision_model=str(get_value("vision_model") or DEFAULT_VISION_MODEL),
            text_max_output_tokens=int(get_value("text_max_output_tokens") or 1000),
            vision_max_output_tokens=int(get_value("vision_max_output_tokens") or 1000),
            vision_temperature=float(get_value("vision_temperature") or 0.3),
            image_timeout_seconds=float(get_value("image_timeout_seconds") or 10.0),
            log_level=str(get_value("log_level") or "INFO"),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` YAML file without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
                value = value[1:-1]
            config[key.strip()] = value
        return config
