"""OpenAI-compatible providers: xAI Grok and local Ollama."""

from dataclasses import replace

from config.config_loader import ModelConfig
from thinktank.providers.base import ModelError
from thinktank.providers.openai_provider import OpenAIProvider

_OLLAMA_BASE_URL = "http://localhost:11434/v1"


class XAIProvider(OpenAIProvider):
    """xAI Grok provider via OpenAI-compatible API."""

    _label = "xAI"
    _stream_usage = False

    def __init__(self, config: ModelConfig) -> None:
        if not config.base_url:
            raise ModelError(config.name, "base_url is required for xAI provider")
        super().__init__(config)


class OllamaProvider(OpenAIProvider):
    """Local Ollama server via its OpenAI-compatible endpoint. No API key needed."""

    _label = "Ollama"
    _stream_usage = False

    def __init__(self, config: ModelConfig) -> None:
        if not config.base_url:
            config = replace(config, base_url=_OLLAMA_BASE_URL)
        super().__init__(config)

    def _api_key(self) -> str:
        # The SDK insists on a key; Ollama ignores it
        if self._config.api_key_env:
            return super()._api_key()
        return "ollama"
