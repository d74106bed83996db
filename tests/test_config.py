"""Tests for config/config_loader.py."""

from pathlib import Path

import pytest
import yaml

from config.config_loader import AppConfig, DefaultsConfig, ModelConfig, PromptsConfig, load_config


@pytest.fixture
def minimal_settings(tmp_path: Path) -> Path:
    """Write a minimal valid settings.yaml to a temp path."""
    settings = {
        "defaults": {
            "mode": "swot",
            "rounds": 2,
            "max_rounds": 4,
            "max_tokens": 800,
            "language": "German",
            "model": "claude",
        },
        "models": {
            "claude": {
                "sdk": "anthropic",
                "model": "claude-sonnet-4-20250514",
                "api_key_env": "TEST_CLAUDE_KEY",
                "timeout_sec": 120,
                "max_tokens": 8192,
                "default": True,
            },
            "llama": {
                "sdk": "ollama",
                "model": "llama3.1",
                "base_url": "http://localhost:11434/v1",
                "timeout_sec": 300,
                "max_tokens": 4096,
                "active": False,
            },
        },
        "prompts": {
            "introduction": "Open the floor on {topic} in {language}.",
        },
    }
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump(settings), encoding="utf-8")
    return path


def test_load_config_returns_app_config(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config, AppConfig)


def test_load_config_defaults(minimal_settings):
    config = load_config(minimal_settings)
    assert config.defaults == DefaultsConfig(
        mode="swot",
        rounds=2,
        max_rounds=4,
        max_tokens=800,
        language="German",
        model="claude",
    )


def test_load_config_defaults_section_optional(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("models: {}\n", encoding="utf-8")
    config = load_config(path)
    assert config.defaults == DefaultsConfig()
    assert config.models == {}


def test_load_config_models(minimal_settings):
    config = load_config(minimal_settings)
    claude = config.models["claude"]
    assert isinstance(claude, ModelConfig)
    assert claude.name == "claude"
    assert claude.sdk == "anthropic"
    assert claude.is_default is True
    assert claude.active is True
    assert claude.base_url is None


def test_load_config_inactive_model_without_key(minimal_settings):
    config = load_config(minimal_settings)
    llama = config.models["llama"]
    assert llama.active is False
    assert llama.api_key_env is None
    assert llama.is_default is False
    assert llama.base_url == "http://localhost:11434/v1"


def test_load_config_partial_prompts_keep_builtin_text(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config.prompts, PromptsConfig)
    assert config.prompts.introduction == "Open the floor on {topic} in {language}."
    assert config.prompts.round == PromptsConfig().round
    assert config.prompts.conclusion == PromptsConfig().conclusion


def test_load_config_ignores_unknown_prompt_keys(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump({"prompts": {"synthesis": "ignored", "round": "R{round}"}}), encoding="utf-8")
    config = load_config(path)
    assert config.prompts.round == "R{round}"
    assert not hasattr(config.prompts, "synthesis")


def test_builtin_prompts_accept_their_placeholders():
    prompts = PromptsConfig()
    intro = prompts.introduction.format(topic="Tabs vs spaces", language="English")
    turn = prompts.round.format(round=2, topic="Tabs vs spaces", agent_name="Opponent", language="English")
    conclusion = prompts.conclusion.format(max_rounds=3, topic="Tabs vs spaces", language="English")
    assert '"Tabs vs spaces"' in intro
    assert "round 2" in turn
    assert "as Opponent" in turn
    assert "3 rounds" in conclusion
    assert all("Please respond in English." in p for p in (intro, turn, conclusion))


def test_load_config_available_models_with_key(minimal_settings, monkeypatch):
    monkeypatch.setenv("TEST_CLAUDE_KEY", "sk-test-key")
    config = load_config(minimal_settings)
    assert "claude" in config.available_models


def test_load_config_no_available_models_without_key(minimal_settings, monkeypatch):
    monkeypatch.delenv("TEST_CLAUDE_KEY", raising=False)
    config = load_config(minimal_settings)
    assert "claude" not in config.available_models


def test_load_config_blank_key_is_missing(minimal_settings, monkeypatch):
    monkeypatch.setenv("TEST_CLAUDE_KEY", "   ")
    config = load_config(minimal_settings)
    assert "claude" not in config.available_models


def test_model_without_key_env_is_available(minimal_settings):
    config = load_config(minimal_settings)
    assert "llama" in config.available_models


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(Path("/nonexistent/settings.yaml"))


def test_bundled_settings_load():
    config = load_config()
    assert config.defaults.model in config.models
    assert config.models[config.defaults.model].is_default is True
    assert {"openai", "anthropic", "gemini", "xai", "ollama"} == {m.sdk for m in config.models.values()}
