"""Debate orchestration: host introduction, sequential rounds, host conclusion."""

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from config.config_loader import PromptsConfig
from thinktank.agent import Agent
from thinktank.events import EventChannel
from thinktank.model_service import ModelService
from thinktank.models import DebateConfig, DebateMessage, DebateStatus

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """The debate cannot start: no host, no active agents or no rounds."""


class EngineStateError(Exception):
    """The operation conflicts with a debate already running on this engine."""


class AgentDebateEngine:
    """Runs one debate at a time and streams its transcript to subscribers.

    The message log is append-only and owned by the engine. Subscribers and
    accessors only ever see copies of its entries.

    Every turn receives the full transcript so far as context. Nothing is
    summarized or truncated, so prompt size grows with rounds x agents.
    """

    def __init__(
        self,
        agents: list[Agent],
        host_agent: Agent | None,
        max_rounds: int = 3,
        language: str = "English",
        prompts: PromptsConfig | None = None,
    ) -> None:
        self._agents = list(agents)
        self._host = host_agent
        self._max_rounds = max_rounds
        self._language = language
        self._prompts = prompts or PromptsConfig()

        self._round = 0
        self._messages: list[DebateMessage] = []
        self._current_agent_index = 0
        self._running = False
        self._complete = False

        self._message_created = EventChannel("message")
        self._message_updated = EventChannel("message_update")
        self._completed = EventChannel("complete")

    @classmethod
    def create_from_config(
        cls,
        config: DebateConfig,
        service: ModelService,
        prompts: PromptsConfig | None = None,
    ) -> "AgentDebateEngine":
        """Build agents for the active roster entries, in roster order."""
        max_tokens = config.max_tokens_per_response
        agents = [Agent.from_config(a, service, max_tokens) for a in config.agents if a.active]
        host = Agent.from_config(config.host_agent, service, max_tokens) if config.host_agent else None
        return cls(agents, host, config.max_rounds, config.language, prompts)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        return self._complete

    def get_messages(self) -> list[DebateMessage]:
        return [replace(m) for m in self._messages]

    def get_status(self) -> DebateStatus:
        return DebateStatus(
            current_round=self._round,
            current_agent_index=self._current_agent_index,
            is_complete=self._complete,
            is_running=self._running,
            messages=self.get_messages(),
        )

    def on_message(self, callback: Callable[[DebateMessage], None] | None) -> None:
        self._message_created.subscribe(callback)

    def on_message_update(self, callback: Callable[[DebateMessage], None] | None) -> None:
        self._message_updated.subscribe(callback)

    def on_complete(self, callback: Callable[[], None] | None) -> None:
        self._completed.subscribe(callback)

    def reset_debate(self) -> None:
        """Clear the transcript and counters.

        Raises:
            EngineStateError: If a debate is running.
        """
        if self._running:
            raise EngineStateError("Cannot reset while a debate is running")
        self._reset()

    def _reset(self) -> None:
        self._round = 0
        self._messages = []
        self._current_agent_index = 0
        self._running = False
        self._complete = False

    def _validate(self) -> None:
        if self._host is None:
            raise ConfigurationError("Debate has no host agent")
        if not self._agents:
            raise ConfigurationError("Debate has no active agents")
        if self._max_rounds < 1:
            raise ConfigurationError(f"max_rounds must be at least 1, got {self._max_rounds}")

    def build_debate_context(self) -> str:
        """Serialize the log so far, one "[Round r] Name: content" block per message."""
        return "\n\n".join(f"[Round {m.round}] {m.agent_name}: {m.content}" for m in self._messages)

    async def start_debate(self, topic: str) -> None:
        """Run the whole debate on topic.

        Raises:
            EngineStateError: If a debate is already running on this engine.
            ConfigurationError: If the roster cannot hold a debate.
        """
        if self._running:
            raise EngineStateError("Debate is already running")
        self._validate()

        self._reset()
        self._running = True
        start = time.monotonic()
        logger.info(
            "Starting debate on %r: %d agents, %d rounds, language %s",
            topic,
            len(self._agents),
            self._max_rounds,
            self._language,
        )

        try:
            await self._introduction(topic)
            await self._run_rounds(topic)
            await self._conclusion(topic)
        except Exception as exc:
            logger.error("Debate on %r aborted: %s", topic, exc)
            raise
        finally:
            self._running = False

        self._complete = True
        logger.info("Debate complete: %d messages in %.1fs", len(self._messages), time.monotonic() - start)
        self._completed.emit()

    async def _introduction(self, topic: str) -> None:
        prompt = self._prompts.introduction.format(topic=topic, language=self._language)
        await self._run_turn(self._host, 0, prompt)

    async def _run_rounds(self, topic: str) -> None:
        for round_number in range(1, self._max_rounds + 1):
            self._round = round_number
            logger.info("Starting round %d with %d agents", round_number, len(self._agents))
            for index, agent in enumerate(self._agents):
                self._current_agent_index = index
                prompt = self._prompts.round.format(
                    round=round_number,
                    topic=topic,
                    agent_name=agent.name,
                    language=self._language,
                )
                await self._run_turn(agent, round_number, prompt)

    async def _conclusion(self, topic: str) -> None:
        self._round = self._max_rounds + 1
        prompt = self._prompts.conclusion.format(
            max_rounds=self._max_rounds,
            topic=topic,
            language=self._language,
        )
        await self._run_turn(self._host, self._round, prompt)

    async def _run_turn(self, agent: Agent, round_number: int, prompt: str) -> None:
        context = self.build_debate_context()
        logger.debug("Turn %s (round %d): %d chars of context", agent.name, round_number, len(context))

        index = len(self._messages)
        message = DebateMessage(
            id=f"msg_{index}_{agent.id}",
            agent_id=agent.id,
            agent_name=agent.name,
            content="",
            timestamp=time.time(),
            round=round_number,
            streaming=True,
        )
        self._messages.append(message)
        self._message_created.emit(replace(message))

        try:
            text = await agent.think(prompt, context, lambda chunk: self._append_chunk(index, chunk))
            # The returned text wins: it equals the streamed content on success
            # and carries the error placeholder on failure.
            message.content = text
        finally:
            # Also reached on cancellation, leaving whatever streamed so far
            self._finish_message(index)

    def _append_chunk(self, index: int, chunk: str) -> None:
        message = self._messages[index]
        if not message.streaming:
            return
        message.content += chunk
        self._message_updated.emit(replace(message))

    def _finish_message(self, index: int) -> None:
        message = self._messages[index]
        if not message.streaming:
            return
        message.streaming = False
        self._message_updated.emit(replace(message))
