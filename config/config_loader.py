"""Load settings.yaml into typed dataclasses. Checks API keys at startup."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

_DEFAULT_INTRODUCTION = """You are the host of a debate or discussion. Your role is to introduce the topic, establish the key points to be discussed, and guide the conversation.

First, provide a thoughtful introduction to this topic: "{topic}"

Then, outline the key aspects that should be discussed by our participants. What are the main points to consider?

Please respond in {language}."""

_DEFAULT_ROUND = """We are in round {round} of the debate on: "{topic}"

The previous messages of this discussion are shown above.

Based on the previous discussion, provide your perspective as {agent_name}.
Address points made by other participants if relevant, and further develop your own arguments.

Please respond in {language}."""

_DEFAULT_CONCLUSION = """Now that we've completed {max_rounds} rounds of our debate on "{topic}", please provide a thoughtful conclusion.

Summarize the key points made by each participant, identify areas of agreement and disagreement, and provide your own synthesis of the discussion. The full debate transcript is shown above.

Please respond in {language}."""


@dataclass
class ModelConfig:
    name: str
    sdk: str
    model: str
    api_key_env: str | None
    timeout_sec: int
    max_tokens: int
    base_url: str | None = None
    active: bool = True
    is_default: bool = False


@dataclass
class PromptsConfig:
    """Turn prompt templates.

    Placeholders: introduction takes {topic} and {language}; round takes
    {round}, {topic}, {agent_name} and {language}; conclusion takes
    {max_rounds}, {topic} and {language}.
    """

    introduction: str = _DEFAULT_INTRODUCTION
    round: str = _DEFAULT_ROUND
    conclusion: str = _DEFAULT_CONCLUSION


@dataclass
class DefaultsConfig:
    mode: str = "debate"
    rounds: int = 3
    max_rounds: int = 10
    max_tokens: int = 1000
    language: str = "English"
    model: str | None = None


@dataclass
class AppConfig:
    defaults: DefaultsConfig
    models: dict[str, ModelConfig]
    prompts: PromptsConfig = field(default_factory=PromptsConfig)
    available_models: set[str] = field(default_factory=set)


def _has_credentials(model_cfg: ModelConfig) -> bool:
    if not model_cfg.api_key_env:
        return True
    return bool(os.environ.get(model_cfg.api_key_env, "").strip())


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load and validate configuration from settings.yaml.

    Raises FileNotFoundError if settings file missing.
    Logs missing API keys but does not raise — callers check
    available_models before starting a debate.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    defaults_raw = raw.get("defaults") or {}
    defaults = DefaultsConfig(
        mode=str(defaults_raw.get("mode", "debate")),
        rounds=int(defaults_raw.get("rounds", 3)),
        max_rounds=int(defaults_raw.get("max_rounds", 10)),
        max_tokens=int(defaults_raw.get("max_tokens", 1000)),
        language=str(defaults_raw.get("language", "English")),
        model=defaults_raw.get("model"),
    )

    # Any template left out of settings.yaml keeps its built-in text
    prompts_raw = raw.get("prompts") or {}
    prompts = PromptsConfig(**{k: str(v) for k, v in prompts_raw.items() if k in ("introduction", "round", "conclusion")})

    models: dict[str, ModelConfig] = {}
    available_models: set[str] = set()

    for model_id, model_raw in (raw.get("models") or {}).items():
        model_cfg = ModelConfig(
            name=model_id,
            sdk=model_raw["sdk"],
            model=model_raw["model"],
            api_key_env=model_raw.get("api_key_env"),
            timeout_sec=int(model_raw["timeout_sec"]),
            max_tokens=int(model_raw["max_tokens"]),
            base_url=model_raw.get("base_url"),
            active=bool(model_raw.get("active", True)),
            is_default=bool(model_raw.get("default", False)),
        )
        models[model_id] = model_cfg

        if _has_credentials(model_cfg):
            available_models.add(model_id)
            logger.info("Model available: %s", model_id)
        else:
            logger.info(
                "Model skipped (no API key): %s — set %s in .env",
                model_id,
                model_cfg.api_key_env,
            )

    return AppConfig(
        defaults=defaults,
        models=models,
        prompts=prompts,
        available_models=available_models,
    )
