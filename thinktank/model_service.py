"""Model invocation: registry of configured models and provider dispatch."""

import asyncio
import logging

from config.config_loader import ModelConfig
from thinktank.models import ModelResponse
from thinktank.providers.anthropic import AnthropicProvider
from thinktank.providers.base import AIProvider, ChunkSink, ModelError, ModelTimeoutError
from thinktank.providers.gemini import GeminiProvider
from thinktank.providers.openai_provider import OpenAIProvider
from thinktank.providers.xai import OllamaProvider, XAIProvider

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[AIProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "gemini": GeminiProvider,
    "xai": XAIProvider,
    "ollama": OllamaProvider,
}

_RETRY_TIMEOUT_FACTOR = 1.5


class ModelService:
    """Executes prompts against configured models.

    Providers are built lazily on first use, so a model whose API key is
    missing only fails when something actually calls it.
    """

    def __init__(
        self,
        models: dict[str, ModelConfig],
        provider_classes: dict[str, type[AIProvider]] | None = None,
    ) -> None:
        self._models = dict(models)
        self._provider_classes = provider_classes if provider_classes is not None else PROVIDER_CLASSES
        self._providers: dict[str, AIProvider] = {}

    def __contains__(self, model_id: str) -> bool:
        return model_id in self._models or model_id in self._providers

    def models(self) -> list[ModelConfig]:
        return list(self._models.values())

    def active_models(self) -> list[ModelConfig]:
        return [m for m in self._models.values() if m.active]

    def get_model(self, model_id: str) -> ModelConfig | None:
        return self._models.get(model_id)

    def default_model(self, available: set[str] | None = None) -> ModelConfig | None:
        """First active model flagged default, else the first active model.

        When available is given, only those model ids are candidates.
        """
        active = [m for m in self.active_models() if available is None or m.name in available]
        for model in active:
            if model.is_default:
                return model
        return active[0] if active else None

    def register_provider(self, model_id: str, provider: AIProvider) -> None:
        """Bind a ready-made provider to a model id, bypassing config lookup."""
        self._providers[model_id] = provider

    def provider(self, model_id: str) -> AIProvider:
        """Return the provider for model_id, building it on first use.

        Raises:
            ModelError: Unknown model id, unsupported SDK or missing API key.
        """
        if model_id in self._providers:
            return self._providers[model_id]

        model_cfg = self._models.get(model_id)
        if model_cfg is None:
            raise ModelError(model_id, f"Model {model_id} not found")
        provider_cls = self._provider_classes.get(model_cfg.sdk)
        if provider_cls is None:
            raise ModelError(model_id, f"Model type {model_cfg.sdk} not supported")

        provider = provider_cls(model_cfg)
        self._providers[model_id] = provider
        return provider

    async def _generate(
        self,
        model_id: str,
        provider: AIProvider,
        prompt: str,
        max_tokens: int | None,
        on_chunk: ChunkSink | None,
        timeout_sec: float | None = None,
    ) -> ModelResponse:
        try:
            return await provider.generate(
                prompt,
                max_tokens=max_tokens,
                on_chunk=on_chunk,
                timeout_sec=timeout_sec,
            )
        except ModelError:
            raise
        except Exception as exc:
            raise ModelError(model_id, f"Unexpected error: {exc}") from exc

    async def invoke(
        self,
        model_id: str,
        prompt: str,
        *,
        streaming: bool = False,
        on_chunk: ChunkSink | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Run prompt against model_id and return the complete text.

        When streaming is set and on_chunk is given, on_chunk receives the
        text incrementally; the chunks concatenate to the returned text.
        A timeout is retried once with 1.5x the configured timeout, unless
        some chunks were already delivered.

        Raises:
            ModelError: On unknown model, provider failure or empty output.
        """
        provider = self.provider(model_id)
        sink = on_chunk if streaming else None
        delivered = 0

        def forward(chunk: str) -> None:
            nonlocal delivered
            delivered += 1
            sink(chunk)

        stream_to = forward if sink is not None else None
        logger.debug("Calling model %s (%d prompt chars, streaming=%s)", model_id, len(prompt), sink is not None)

        try:
            response = await self._generate(model_id, provider, prompt, max_tokens, stream_to)
        except ModelTimeoutError as exc:
            if delivered:
                logger.warning("Model %s timed out mid-stream after %d chunks: %s", model_id, delivered, exc)
                raise
            model_cfg = self._models.get(model_id)
            retry_timeout = model_cfg.timeout_sec * _RETRY_TIMEOUT_FACTOR if model_cfg else None
            logger.warning("Model %s timed out, retrying with %ss (1.5x)", model_id, retry_timeout)
            try:
                response = await self._generate(model_id, provider, prompt, max_tokens, stream_to, retry_timeout)
            except ModelError as retry_exc:
                logger.warning("Model %s failed after retry: %s", model_id, retry_exc)
                raise
        except ModelError as exc:
            logger.warning("Model %s failed: %s", model_id, exc)
            raise

        return response.content

    async def _invoke_or_error(self, model_id: str, prompt: str, max_tokens: int | None) -> str:
        try:
            return await self.invoke(model_id, prompt, max_tokens=max_tokens)
        except ModelError as exc:
            return f"Error: {exc}"

    async def invoke_many(
        self,
        model_ids: list[str],
        prompt: str,
        max_tokens: int | None = None,
    ) -> dict[str, str]:
        """Send the same prompt to several models concurrently.

        Never raises — a failed model maps to an "Error: ..." string.
        """
        results = await asyncio.gather(*(self._invoke_or_error(m, prompt, max_tokens) for m in model_ids))
        return dict(zip(model_ids, results))
