"""OpenAI provider using openai SDK with native async streaming."""

import asyncio
import logging
import os
import time

from openai import AsyncOpenAI

from config.config_loader import ModelConfig
from thinktank.models import ModelResponse
from thinktank.providers.base import AIProvider, ChunkSink, ModelError, ModelTimeoutError

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """OpenAI provider via openai SDK. Also the base for OpenAI-compatible APIs."""

    _label = "OpenAI"
    # Only the first-party API is known to honour stream_options
    _stream_usage = True

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        self._client = AsyncOpenAI(api_key=self._api_key(), base_url=config.base_url)

    def _api_key(self) -> str:
        api_key = os.environ.get(self._config.api_key_env or "", "").strip()
        if not api_key:
            raise ModelError(self._config.name, f"Missing API key: {self._config.api_key_env}")
        return api_key

    def name(self) -> str:
        return self._config.name

    def model_string(self) -> str:
        return self._config.model

    async def _complete(self, prompt: str, max_tokens: int) -> tuple[str, int | None]:
        response = await self._client.chat.completions.create(
            model=self._config.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
        )
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message.content:
            raise ModelError(self._config.name, "Empty response content")

        token_count = response.usage.total_tokens if response.usage else None
        return choice.message.content, token_count

    async def _stream(self, prompt: str, max_tokens: int, on_chunk: ChunkSink) -> tuple[str, int | None]:
        extra = {"stream_options": {"include_usage": True}} if self._stream_usage else {}
        stream = await self._client.chat.completions.create(
            model=self._config.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            stream=True,
            **extra,
        )

        parts: list[str] = []
        token_count: int | None = None
        async for chunk in stream:
            if getattr(chunk, "usage", None):
                token_count = chunk.usage.total_tokens
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                parts.append(delta)
                on_chunk(delta)

        if not parts:
            raise ModelError(self._config.name, "Empty response content")
        return "".join(parts), token_count

    async def generate(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        on_chunk: ChunkSink | None = None,
        timeout_sec: float | None = None,
    ) -> ModelResponse:
        timeout = timeout_sec or self._config.timeout_sec
        tokens = max_tokens or self._config.max_tokens
        start = time.monotonic()
        try:
            if on_chunk is None:
                call = self._complete(prompt, tokens)
            else:
                call = self._stream(prompt, tokens, on_chunk)
            content, token_count = await asyncio.wait_for(call, timeout=timeout)
        except TimeoutError as exc:
            raise ModelTimeoutError(self._config.name, f"Request timed out after {timeout}s") from exc
        except ModelError:
            raise
        except Exception as exc:
            raise ModelError(self._config.name, f"API call failed: {exc}") from exc

        latency = time.monotonic() - start

        logger.info(
            "%s %s: %.2fs, %s tokens",
            self._label,
            self._config.model,
            latency,
            token_count,
        )

        return ModelResponse(
            provider=self._config.sdk,
            model=self._config.model,
            content=content,
            latency_sec=latency,
            token_count=token_count,
        )
