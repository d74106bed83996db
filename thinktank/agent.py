"""A debate participant bound to a role prompt and a model."""

import logging

from thinktank.model_service import ModelService
from thinktank.models import AgentConfig
from thinktank.providers.base import ChunkSink, ModelError

logger = logging.getLogger(__name__)


class Agent:
    """Produces one piece of text per turn.

    Model failures never escape think(); they come back as a placeholder
    message so one broken model degrades the transcript instead of aborting
    the debate.
    """

    def __init__(
        self,
        id: str,
        name: str,
        role_prompt: str,
        model_id: str,
        service: ModelService,
        max_tokens: int | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.role_prompt = role_prompt
        self.model_id = model_id
        self.max_tokens = max_tokens
        self._service = service

    @classmethod
    def from_config(cls, config: AgentConfig, service: ModelService, max_tokens: int | None = None) -> "Agent":
        return cls(config.id, config.name, config.role_prompt, config.model_id, service, max_tokens)

    def build_prompt(self, message: str, context: str = "") -> str:
        return "\n\n".join(part for part in (context, self.role_prompt, message) if part)

    async def think(self, message: str, context: str = "", on_chunk: ChunkSink | None = None) -> str:
        """Answer message in role, streaming through on_chunk when given."""
        prompt = self.build_prompt(message, context)
        try:
            return await self._service.invoke(
                self.model_id,
                prompt,
                streaming=on_chunk is not None,
                on_chunk=on_chunk,
                max_tokens=self.max_tokens,
            )
        except ModelError as exc:
            logger.warning("Agent %s failed on model %s: %s", self.name, self.model_id, exc)
            return f"[Agent {self.name} encountered an error: {exc}]"
        except Exception as exc:
            # Not a model failure: keep the traceback
            logger.exception("Agent %s unexpected failure on model %s", self.name, self.model_id)
            return f"[Agent {self.name} encountered an error: {exc}]"
