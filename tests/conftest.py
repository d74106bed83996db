"""Shared pytest fixtures."""

from unittest.mock import AsyncMock

import pytest

from config.config_loader import AppConfig, DefaultsConfig, ModelConfig, PromptsConfig
from thinktank.model_service import ModelService
from thinktank.models import DebateConfig, DebateMode, ModelResponse
from thinktank.modes import generate_default_config
from thinktank.providers.base import AIProvider, ChunkSink


def split_chunks(text: str, size: int = 8) -> list[str]:
    return [text[i:i + size] for i in range(0, len(text), size)]


@pytest.fixture
def sample_model_config() -> ModelConfig:
    return ModelConfig(
        name="test_model",
        sdk="test",
        model="test-model-1",
        api_key_env="TEST_API_KEY",
        timeout_sec=30,
        max_tokens=1024,
        base_url=None,
    )


@pytest.fixture
def sample_prompts_config() -> PromptsConfig:
    return PromptsConfig(
        introduction="Introduce: {topic} ({language})",
        round="Round {round} on {topic}. Speak as {agent_name} in {language}.",
        conclusion="Conclude {max_rounds} rounds on {topic} in {language}.",
    )


@pytest.fixture
def sample_defaults_config() -> DefaultsConfig:
    return DefaultsConfig(
        mode="debate",
        rounds=2,
        max_rounds=5,
        max_tokens=500,
        language="English",
        model="claude",
    )


@pytest.fixture
def sample_app_config(
    sample_defaults_config: DefaultsConfig,
    sample_prompts_config: PromptsConfig,
) -> AppConfig:
    model_cfg = ModelConfig(
        name="claude",
        sdk="anthropic",
        model="claude-sonnet-4-20250514",
        api_key_env="ANTHROPIC_API_KEY",
        timeout_sec=60,
        max_tokens=4096,
        is_default=True,
    )
    return AppConfig(
        defaults=sample_defaults_config,
        models={"claude": model_cfg},
        prompts=sample_prompts_config,
        available_models={"claude"},
    )


@pytest.fixture
def sample_response() -> ModelResponse:
    return ModelResponse(
        provider="anthropic",
        model="claude-sonnet-4-20250514",
        content="Use YAML for human-editable config, JSON for machine interchange.",
        latency_sec=1.5,
        token_count=42,
    )


class MockProvider(AIProvider):
    """Test double AIProvider. Streams its response in 8-char chunks."""

    def __init__(self, provider_name: str = "mock", response_content: str = "Mock response") -> None:
        self._name = provider_name
        self._response_content = response_content
        # Shadow the class method with an AsyncMock at the instance level so
        # tests can inspect calls or swap in a side_effect.
        self.generate = AsyncMock(side_effect=self._respond)  # type: ignore[assignment]

    def name(self) -> str:
        return self._name

    def model_string(self) -> str:
        return "mock-model"

    async def _respond(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        on_chunk: ChunkSink | None = None,
        timeout_sec: float | None = None,
    ) -> ModelResponse:
        if on_chunk is not None:
            for chunk in split_chunks(self._response_content):
                on_chunk(chunk)
        return ModelResponse(
            provider=self._name,
            model="mock-model",
            content=self._response_content,
            latency_sec=0.1,
            token_count=10,
        )

    async def generate(  # type: ignore[override]
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        on_chunk: ChunkSink | None = None,
        timeout_sec: float | None = None,
    ) -> ModelResponse:
        """Default implementation; replaced by AsyncMock in __init__."""
        return await self._respond(prompt, max_tokens=max_tokens, on_chunk=on_chunk, timeout_sec=timeout_sec)


def make_service(**providers: AIProvider) -> ModelService:
    """ModelService with no configured models and the given providers registered."""
    service = ModelService({})
    for model_id, provider in providers.items():
        service.register_provider(model_id, provider)
    return service


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def mock_service(mock_provider: MockProvider) -> ModelService:
    return make_service(mock=mock_provider)


@pytest.fixture
def pro_con_config() -> DebateConfig:
    return generate_default_config("T", DebateMode.DEBATE, "mock", max_rounds=2)
