"""Abstract base for all AI model providers."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from thinktank.models import ModelResponse

ChunkSink = Callable[[str], None]


class ModelError(Exception):
    """Raised when a model call fails."""

    def __init__(self, model_id: str, message: str) -> None:
        self.model_id = model_id
        self.cause = message
        super().__init__(f"[{model_id}] {message}")


class ModelTimeoutError(ModelError):
    """Raised when a model call exceeds its timeout."""


class AIProvider(ABC):
    """Abstract base for all AI model providers."""

    @abstractmethod
    def name(self) -> str:
        """Return the configured model id (e.g. 'claude', 'gpt')."""
        ...

    @abstractmethod
    def model_string(self) -> str:
        """Return the actual model identifier string."""
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        on_chunk: ChunkSink | None = None,
        timeout_sec: float | None = None,
    ) -> ModelResponse:
        """Generate a response for the given prompt.

        Args:
            prompt: The full prompt text to send.
            max_tokens: Per-call cap; the configured max_tokens when None.
            on_chunk: When given, the response is streamed and every text
                delta is passed to it in order. The deltas concatenate to
                the returned content.
            timeout_sec: Per-call timeout; the configured timeout when None.

        Returns:
            ModelResponse dataclass with content and metadata.

        Raises:
            ModelTimeoutError: When the call exceeds the timeout.
            ModelError: On API failure or invalid response.
        """
        ...
