"""Anthropic Claude provider using anthropic SDK with native async."""

import asyncio
import logging
import os
import time

import anthropic as anthropic_sdk

from config.config_loader import ModelConfig
from thinktank.models import ModelResponse
from thinktank.providers.base import AIProvider, ChunkSink, ModelError, ModelTimeoutError

logger = logging.getLogger(__name__)


def _usage_tokens(message) -> int | None:
    if not message.usage:
        return None
    return message.usage.input_tokens + message.usage.output_tokens


class AnthropicProvider(AIProvider):
    """Anthropic Claude provider via anthropic SDK."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        api_key = os.environ.get(config.api_key_env or "", "").strip()
        if not api_key:
            raise ModelError(config.name, f"Missing API key: {config.api_key_env}")
        self._client = anthropic_sdk.AsyncAnthropic(api_key=api_key, base_url=config.base_url)

    def name(self) -> str:
        return self._config.name

    def model_string(self) -> str:
        return self._config.model

    async def _complete(self, prompt: str, max_tokens: int) -> tuple[str, int | None]:
        response = await self._client.messages.create(
            model=self._config.model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.content:
            raise ModelError(self._config.name, "Empty response content")

        text_blocks = [b.text for b in response.content if b.type == "text"]
        if not text_blocks:
            raise ModelError(self._config.name, "No text blocks in response")

        return "\n".join(text_blocks), _usage_tokens(response)

    async def _stream(self, prompt: str, max_tokens: int, on_chunk: ChunkSink) -> tuple[str, int | None]:
        parts: list[str] = []
        async with self._client.messages.stream(
            model=self._config.model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            async for text in stream.text_stream:
                if text:
                    parts.append(text)
                    on_chunk(text)
            final = await stream.get_final_message()

        if not parts:
            raise ModelError(self._config.name, "No text blocks in response")
        return "".join(parts), _usage_tokens(final)

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
            "Anthropic %s: %.2fs, %s tokens",
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
