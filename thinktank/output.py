"""Rich console output: live transcript, roster and mode listings."""

import logging

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.text import Text

from thinktank.debate import AgentDebateEngine
from thinktank.modes import MODE_TEMPLATES
from thinktank.models import DebateConfig, DebateMessage

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def round_label(round_number: int, max_rounds: int) -> str:
    if round_number == 0:
        return "Introduction"
    if round_number > max_rounds:
        return "Conclusion"
    return f"Round {round_number}"


class TranscriptPrinter:
    """Prints a debate to the console as it streams.

    Subscribes to all three engine channels; each chunk is printed as soon
    as it arrives.
    """

    def __init__(self, max_rounds: int, out: Console | None = None) -> None:
        self._max_rounds = max_rounds
        self._console = out or console
        self._printed: dict[str, str] = {}

    def attach(self, engine: AgentDebateEngine) -> None:
        engine.on_message(self.on_message)
        engine.on_message_update(self.on_message_update)
        engine.on_complete(self.on_complete)

    def on_message(self, message: DebateMessage) -> None:
        label = round_label(message.round, self._max_rounds)
        self._console.print(Rule(f"[bold cyan]{message.agent_name}[/bold cyan] [dim]{label}[/dim]"))
        self._printed[message.id] = ""

    def on_message_update(self, message: DebateMessage) -> None:
        shown = self._printed.get(message.id, "")
        if message.content.startswith(shown):
            delta = message.content[len(shown):]
        else:
            # Content was replaced, e.g. by an error placeholder
            delta = "\n" + message.content
        if delta:
            self._console.print(delta, end="", markup=False, highlight=False, soft_wrap=True)
        self._printed[message.id] = message.content

        if not message.streaming:
            self._console.print()
            self._printed.pop(message.id, None)

    def on_complete(self) -> None:
        self._console.print(Rule("[bold green]Debate complete[/bold green]"))


def print_roster(config: DebateConfig, out: Console | None = None) -> None:
    """Print who takes part in the debate, host first, in speaking order."""
    target = out or console
    active = [a for a in config.agents if a.active]
    target.print(f"\n[bold cyan]{escape(config.title)}[/bold cyan] — {len(active)} agents, {config.max_rounds} rounds")
    if config.host_agent is not None:
        target.print(f"  [dim]host[/dim] [bold]{config.host_agent.name}[/bold] ({config.host_agent.model_id})")
    for position, agent in enumerate(active, start=1):
        target.print(f"  [dim]{position:>4}[/dim] [bold]{agent.name}[/bold] ({agent.model_id})")
    target.print(
        Text(
            f"Mode: {config.mode.value} | Rounds: {config.max_rounds} | Language: {config.language}",
            style="dim",
        )
    )
    target.print()


def print_modes(out: Console | None = None) -> None:
    """List every discussion mode with its roster size."""
    target = out or console
    target.print(Rule("[bold cyan]Discussion modes[/bold cyan]"))
    for mode, template in MODE_TEMPLATES.items():
        target.print(f"  [bold]{mode.value:<16}[/bold] {template.label} [dim]({len(template.roster)} agents)[/dim]")
