"""Click CLI — loads config, builds the roster, runs and streams one debate."""

import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from config.config_loader import AppConfig, load_config
from thinktank.debate import AgentDebateEngine, ConfigurationError, EngineStateError
from thinktank.healthcheck import run_health_checks
from thinktank.model_service import ModelService
from thinktank.models import DebateConfig, DebateMode
from thinktank.modes import generate_default_config
from thinktank.output import TranscriptPrinter, print_modes, print_roster
from thinktank.topic_file import parse_topic_file

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)

_MODE_CHOICES = [m.value for m in DebateMode]


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _resolve_settings(config: AppConfig, cli: dict, from_file: dict) -> dict:
    """Merge per-debate settings. Precedence: CLI flag > frontmatter > config default."""
    # model stays None unless asked for; _pick_model applies the config default
    defaults = {
        "mode": config.defaults.mode,
        "rounds": config.defaults.rounds,
        "model": None,
        "host_model": None,
        "language": config.defaults.language,
        "max_tokens": config.defaults.max_tokens,
    }
    settings = dict(defaults)
    for key in defaults:
        if cli.get(key) is not None:
            settings[key] = cli[key]
        elif from_file.get(key) is not None:
            settings[key] = from_file[key]
    return settings


def _pick_model(
    service: ModelService,
    requested: str | None,
    preferred: str | None = None,
    available: set[str] | None = None,
) -> str | None:
    """Return the model id agents are bound to, or None if nothing is usable.

    An explicit request is used as long as the model exists. Otherwise the
    configured default (preferred) is used if its API key is set, falling
    back to the service default among the available models.
    """
    if requested:
        return requested if requested in service else None
    if preferred and preferred in service and (available is None or preferred in available):
        return preferred
    default = service.default_model(available)
    if default is not None and preferred:
        logger.warning("Default model %s is unknown or has no API key, using %s instead", preferred, default.name)
    return default.name if default else None


def _positive_int(value: object) -> int | None:
    """Parse a rounds/token setting. None unless it is a whole number above zero."""
    if isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def _build_debate_config(topic: str, settings: dict, model_id: str) -> DebateConfig:
    debate_config = generate_default_config(
        topic,
        DebateMode(settings["mode"]),
        model_id,
        language=str(settings["language"]),
        max_rounds=int(settings["rounds"]),
        max_tokens_per_response=int(settings["max_tokens"]),
    )
    host_model = settings.get("host_model")
    if host_model and debate_config.host_agent is not None:
        debate_config = replace(debate_config, host_agent=replace(debate_config.host_agent, model_id=host_model))
    return debate_config


def _debate_model_ids(debate_config: DebateConfig) -> list[str]:
    ids = [a.model_id for a in debate_config.agents if a.active]
    if debate_config.host_agent is not None:
        ids.insert(0, debate_config.host_agent.model_id)
    return list(dict.fromkeys(ids))


def _check_models(service: ModelService, model_ids: list[str]) -> None:
    """Ping every model the debate uses. Exits if the user declines to continue."""
    console.print("\n[bold]Checking models...[/bold]")
    results: dict[str, tuple[bool, str]] = asyncio.run(run_health_checks(service, model_ids))

    failed_names: list[str] = []
    for name in sorted(results):
        ok, err = results[name]
        if ok:
            console.print(f"  [green]OK  [/green] {name}")
        else:
            short_err = err.splitlines()[0][:120] if err else "unknown error"
            console.print(f"  [red]FAIL[/red] {name}: {short_err}")
            failed_names.append(name)

    console.print()
    if not failed_names:
        return

    if len(failed_names) == len(results):
        console.print("[bold red]Error:[/bold red] No model passed the health check.")
        sys.exit(1)

    console.print(f"[yellow]{len(failed_names)} model(s) failed:[/yellow] {', '.join(failed_names)}")
    if not click.confirm("Continue? Agents on failed models will post error messages.", default=False):
        sys.exit(0)


async def _run_debate(engine: AgentDebateEngine, topic: str) -> None:
    await engine.start_debate(topic)


@click.command()
@click.argument("topic", required=False)
@click.option("--file", "topic_file", type=click.Path(exists=True, dir_okay=False),
              help="Read the topic from a .md file (frontmatter may set mode, rounds, model, language)")
@click.option("--mode", type=click.Choice(_MODE_CHOICES, case_sensitive=False), default=None,
              help="Discussion mode (default: from config)")
@click.option("--rounds", type=int, default=None, help="Number of discussion rounds (default: from config)")
@click.option("--model", default=None, help="Model id every agent uses (default: from config)")
@click.option("--host-model", default=None, help="Model id for the host only")
@click.option("--language", default=None, help="Language the agents answer in (default: from config)")
@click.option("--max-tokens", type=int, default=None, help="Token budget per response (default: from config)")
@click.option("--list-modes", is_flag=True, help="List the discussion modes and exit")
@click.option("--skip-health-check", is_flag=True, default=False,
              help="Skip the API connectivity check at startup")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def main(
    topic: str | None,
    topic_file: str | None,
    mode: str | None,
    rounds: int | None,
    model: str | None,
    host_model: str | None,
    language: str | None,
    max_tokens: int | None,
    list_modes: bool,
    skip_health_check: bool,
    verbose: bool,
) -> None:
    """thinktank -- multi-agent structured discussion.

    \b
    Examples:
      thinktank "Should we adopt a four-day week?"
      thinktank "Launching in Europe" --mode swot --rounds 2
      thinktank "Why did the release slip?" --mode fivewhys --model openai
      thinktank --file topic.md
      thinktank --list-modes
    """
    if list_modes:
        print_modes(console)
        return

    load_dotenv()
    _setup_logging(verbose)

    try:
        config = load_config()
    except FileNotFoundError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)

    from_file: dict = {}
    if topic_file:
        try:
            topic_text, from_file = parse_topic_file(Path(topic_file))
        except ValueError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            sys.exit(1)
    elif topic:
        topic_text = topic
    else:
        console.print("[bold red]Error:[/bold red] Provide a TOPIC argument or --file.")
        sys.exit(1)

    cli_settings = {
        "mode": mode,
        "rounds": rounds,
        "model": model,
        "host_model": host_model,
        "language": language,
        "max_tokens": max_tokens,
    }
    settings = _resolve_settings(config, cli_settings, from_file)

    if settings["mode"] not in _MODE_CHOICES:
        console.print(f"[bold red]Error:[/bold red] Unknown mode '{settings['mode']}'. See --list-modes.")
        sys.exit(1)
    for key in ("rounds", "max_tokens"):
        number = _positive_int(settings[key])
        if number is None:
            console.print(f"[bold red]Error:[/bold red] {key} must be a positive integer, got {escape(repr(settings[key]))}.")
            sys.exit(1)
        settings[key] = number
    if settings["rounds"] > config.defaults.max_rounds:
        console.print(
            f"[bold red]Error:[/bold red] {settings['rounds']} rounds requested, "
            f"limit is {config.defaults.max_rounds}."
        )
        sys.exit(1)

    service = ModelService(config.models)
    model_id = _pick_model(service, settings["model"], config.defaults.model, config.available_models)
    if model_id is None:
        console.print("[bold red]Error:[/bold red] No usable model. Check settings.yaml and --model.")
        sys.exit(1)

    debate_config = _build_debate_config(topic_text, settings, model_id)
    if debate_config.host_agent is not None and debate_config.host_agent.model_id not in service:
        console.print(f"[bold red]Error:[/bold red] Unknown host model '{debate_config.host_agent.model_id}'.")
        sys.exit(1)

    print_roster(debate_config, console)

    if not skip_health_check:
        _check_models(service, _debate_model_ids(debate_config))

    engine = AgentDebateEngine.create_from_config(debate_config, service, prompts=config.prompts)
    TranscriptPrinter(debate_config.max_rounds, console).attach(engine)

    try:
        asyncio.run(_run_debate(engine, topic_text))
    except (ConfigurationError, EngineStateError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
