"""Tests for the click CLI in thinktank/cli.py."""

from unittest.mock import AsyncMock

import pytest
from click.testing import CliRunner

from config.config_loader import ModelConfig
from thinktank import model_service
from thinktank.cli import _build_debate_config, _debate_model_ids, _pick_model, _resolve_settings, main
from thinktank.model_service import ModelService
from thinktank.models import DebateMode
from thinktank.providers.base import ModelError
from tests.conftest import MockProvider

_API_KEYS = ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY", "XAI_API_KEY")

_EMPTY = {"mode": None, "rounds": None, "model": None, "host_model": None, "language": None, "max_tokens": None}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def api_keys(monkeypatch):
    """Every cloud model has a key; .env is not consulted."""
    monkeypatch.setattr("thinktank.cli.load_dotenv", lambda: None)
    for key in _API_KEYS:
        monkeypatch.setenv(key, "sk-test")


@pytest.fixture
def fake_models(monkeypatch, api_keys):
    """Every configured SDK answers with a canned reply instead of calling an API."""
    built: dict[str, MockProvider] = {}

    def build(cfg):
        built[cfg.name] = MockProvider(cfg.name, "Streamed answer.")
        return built[cfg.name]

    for sdk in ("openai", "anthropic", "gemini", "xai", "ollama"):
        monkeypatch.setitem(model_service.PROVIDER_CLASSES, sdk, build)
    return built


# --- settings resolution ---

def test_resolve_settings_uses_config_defaults(sample_app_config):
    settings = _resolve_settings(sample_app_config, dict(_EMPTY), {})
    assert settings == {
        "mode": "debate",
        "rounds": 2,
        "model": None,
        "host_model": None,
        "language": "English",
        "max_tokens": 500,
    }


def test_resolve_settings_file_overrides_defaults(sample_app_config):
    settings = _resolve_settings(sample_app_config, dict(_EMPTY), {"mode": "swot", "rounds": 1})
    assert settings["mode"] == "swot"
    assert settings["rounds"] == 1
    assert settings["language"] == "English"


def test_resolve_settings_cli_overrides_file(sample_app_config):
    cli = dict(_EMPTY, mode="pmi", language="Dutch")
    settings = _resolve_settings(sample_app_config, cli, {"mode": "swot", "language": "Polish", "rounds": 1})
    assert settings["mode"] == "pmi"
    assert settings["language"] == "Dutch"
    assert settings["rounds"] == 1


# --- model selection ---

def test_pick_model_default(sample_app_config):
    service = ModelService(sample_app_config.models)
    assert _pick_model(service, None) == "claude"


def test_pick_model_requested_known(sample_app_config):
    service = ModelService(sample_app_config.models)
    assert _pick_model(service, "claude") == "claude"


def test_pick_model_requested_unknown(sample_app_config):
    service = ModelService(sample_app_config.models)
    assert _pick_model(service, "gpt-9") is None


def test_pick_model_nothing_configured():
    assert _pick_model(ModelService({}), None) is None


def _two_models() -> ModelService:
    claude = ModelConfig("claude", "anthropic", "claude-sonnet-4-20250514", "ANTHROPIC_API_KEY", 60, 4096, is_default=True)
    openai = ModelConfig("openai", "openai", "gpt-4o", "OPENAI_API_KEY", 60, 4096)
    return ModelService({"claude": claude, "openai": openai})


def test_pick_model_default_without_key_falls_back():
    assert _pick_model(_two_models(), None, "claude", {"openai"}) == "openai"


def test_pick_model_default_with_key_kept():
    assert _pick_model(_two_models(), None, "claude", {"claude", "openai"}) == "claude"


def test_pick_model_nothing_available():
    assert _pick_model(_two_models(), None, "claude", set()) is None


def test_pick_model_requested_ignores_availability():
    assert _pick_model(_two_models(), "claude", "claude", {"openai"}) == "claude"


# --- debate config ---

def test_build_debate_config_from_settings():
    settings = {"mode": "sixHats", "rounds": 2, "language": "Italian", "max_tokens": 400, "host_model": None}
    config = _build_debate_config("Remote work", settings, "claude")
    assert config.mode is DebateMode.SIX_HATS
    assert config.max_rounds == 2
    assert config.language == "Italian"
    assert config.max_tokens_per_response == 400
    assert len(config.agents) == 6


def test_build_debate_config_host_model_override():
    settings = {"mode": "debate", "rounds": 1, "language": "English", "max_tokens": 100, "host_model": "gemini"}
    config = _build_debate_config("T", settings, "claude")
    assert config.host_agent.model_id == "gemini"
    assert {a.model_id for a in config.agents} == {"claude"}
    assert _debate_model_ids(config) == ["gemini", "claude"]


# --- command ---

def test_list_modes(runner):
    result = runner.invoke(main, ["--list-modes"])
    assert result.exit_code == 0
    assert "sixHats" in result.output
    assert "fivewhys" in result.output


def test_missing_topic_exits(runner):
    result = runner.invoke(main, [])
    assert result.exit_code == 1
    assert "Provide a TOPIC" in result.output


def test_unknown_mode_rejected_by_click(runner):
    result = runner.invoke(main, ["T", "--mode", "brainstorm"])
    assert result.exit_code == 2


def test_too_many_rounds_exits(runner):
    result = runner.invoke(main, ["T", "--rounds", "11", "--skip-health-check"])
    assert result.exit_code == 1
    assert "limit is 10" in result.output


def test_unknown_model_exits(runner):
    result = runner.invoke(main, ["T", "--model", "nope", "--skip-health-check"])
    assert result.exit_code == 1
    assert "No usable model" in result.output


def test_unknown_host_model_exits(runner, fake_models):
    result = runner.invoke(main, ["T", "--host-model", "nope", "--skip-health-check"])
    assert result.exit_code == 1
    assert "Unknown host model" in result.output


def test_runs_debate_end_to_end(runner, fake_models):
    result = runner.invoke(main, ["Tabs or spaces?", "--rounds", "1", "--skip-health-check"])

    assert result.exit_code == 0, result.output
    for label in ("Introduction", "Round 1", "Conclusion", "Debate complete"):
        assert label in result.output
    assert result.output.count("Streamed answer.") == 4
    assert fake_models["claude"].generate.await_count == 4


def test_case_insensitive_mode_and_model_flag(runner, fake_models):
    result = runner.invoke(main, ["T", "--mode", "SWOT", "--rounds", "1", "--model", "openai", "--skip-health-check"])

    assert result.exit_code == 0, result.output
    assert "Strengths Analyst" in result.output
    assert "claude" not in fake_models
    assert fake_models["openai"].generate.await_count == 6


def test_topic_file_frontmatter(runner, fake_models, tmp_path):
    topic = tmp_path / "topic.md"
    topic.write_text("---\nmode: pmi\nrounds: 1\n---\nShould we move to a monorepo?\n", encoding="utf-8")

    result = runner.invoke(main, ["--file", str(topic), "--skip-health-check"])

    assert result.exit_code == 0, result.output
    assert "Debate on Should we move to a monorepo?" in result.output
    assert "Balanced Evaluator" in result.output
    assert fake_models["claude"].generate.await_count == 6


def test_health_check_passes(runner, fake_models):
    result = runner.invoke(main, ["T", "--rounds", "1"])

    assert result.exit_code == 0, result.output
    assert "Checking models" in result.output
    assert "OK" in result.output
    # one ping plus four debate turns
    assert fake_models["claude"].generate.await_count == 5


def test_health_check_all_failed_exits(runner, monkeypatch, api_keys):
    def broken(cfg):
        provider = MockProvider(cfg.name)
        provider.generate = AsyncMock(side_effect=ModelError(cfg.name, "401 Unauthorized"))
        return provider

    monkeypatch.setitem(model_service.PROVIDER_CLASSES, "anthropic", broken)

    result = runner.invoke(main, ["T", "--rounds", "1"])

    assert result.exit_code == 1
    assert "401 Unauthorized" in result.output
    assert "No model passed the health check" in result.output


def test_default_model_without_key_uses_available_one(runner, fake_models, monkeypatch):
    for key in ("ANTHROPIC_API_KEY", "GEMINI_API_KEY", "XAI_API_KEY"):
        monkeypatch.delenv(key)

    result = runner.invoke(main, ["T", "--rounds", "1", "--skip-health-check"])

    assert result.exit_code == 0, result.output
    assert "claude" not in fake_models
    assert fake_models["openai"].generate.await_count == 4


@pytest.mark.parametrize("frontmatter, key", [
    ("rounds: two", "rounds"),
    ("max_tokens: lots", "max_tokens"),
    ("rounds: -1", "rounds"),
])
def test_topic_file_bad_number_exits(runner, fake_models, tmp_path, frontmatter, key):
    topic = tmp_path / "topic.md"
    topic.write_text(f"---\n{frontmatter}\n---\nShould we move to a monorepo?\n", encoding="utf-8")

    result = runner.invoke(main, ["--file", str(topic), "--skip-health-check"])

    assert result.exit_code == 1
    assert f"{key} must be a positive integer" in result.output
    assert not fake_models


def test_zero_rounds_flag_exits(runner, fake_models):
    result = runner.invoke(main, ["T", "--rounds", "0", "--skip-health-check"])
    assert result.exit_code == 1
    assert "rounds must be a positive integer" in result.output
