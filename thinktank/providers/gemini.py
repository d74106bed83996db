"""Gemini provider using google-genai SDK with native async."""

import asyncio
import logging
import os
import time

from google import genai
from google.genai import types as genai_types

from config.config_loader import ModelConfig
from thinktank.models import ModelResponse
from thinktank.providers.base import AIProvider, ChunkSink, ModelError, ModelTimeoutError

logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    """Google Gemini provider via google-genai SDK."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        api_key = os.environ.get(config.api_key_env or "", "").strip()
        if not api_key:
            raise ModelError(config.name, f"Missing API key: {config.api_key_env}")
        self._client = genai.Client(api_key=api_key)

    def name(self) -> str:
        return self._config.name

    def model_string(self) -> str:
        return self._config.model

    def _generation_config(self, max_tokens: int) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(max_output_tokens=max_tokens)

    async def _complete(self, prompt: str, max_tokens: int) -> tuple[str, int | None]:
        response = await self._client.aio.models.generate_content(
            model=self._config.model,
            contents=prompt,
            config=self._generation_config(max_tokens),
        )
        if not response.text:
            raise ModelError(self._config.name, "Empty response text")

        token_count = response.usage_metadata.total_token_count if response.usage_metadata else None
        return response.text, token_count

    async def _stream(self, prompt: str, max_tokens: int, on_chunk: ChunkSink) -> tuple[str, int | None]:
        parts: list[str] = []
        token_count: int | None = None
        async for chunk in await self._client.aio.models.generate_content_stream(
            model=self._config.model,
            contents=prompt,
            config=self._generation_config(max_tokens),
        ):
            if chunk.usage_metadata:
                token_count = chunk.usage_metadata.total_token_count
            if chunk.text:
                parts.append(chunk.text)
                on_chunk(chunk.text)

        if not parts:
            raise ModelError(self._config.name, "Empty response text")
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
            "Gemini %s: %.2fs, %s tokens",
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
