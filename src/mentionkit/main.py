import asyncio
import dataclasses
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mentionkit.application import TriggerController, create_controller
from mentionkit.core.config import MentionSettings
from mentionkit.domain.events import EventBus, LookupFailed, OptionsChanged
from mentionkit.domain.exceptions import MentionConfigError
from mentionkit.infrastructure.lookup import DirectoryLookup
from mentionkit.logger import get_logger, setup_logger
from mentionkit.presentation.completion import TextDocument

logger = get_logger("main")
console = Console()

cli = typer.Typer(
    name="mentionkit",
    help="Mention detection and suggestion demo over a built-in directory",
    epilog="""
    Examples:
    $ mentionkit suggest "Hi @Han"
    $ mentionkit insert "Ping @obi" --pick 0
    """,
    add_completion=False,
)


def load_settings(delay: Optional[float], limit: Optional[int], debug: bool) -> MentionSettings:
    """Environment settings with command-line overrides applied."""
    settings = MentionSettings.from_env()
    overrides: dict = {}
    if delay is not None:
        overrides["lookup_delay"] = delay
    if limit is not None:
        overrides["suggestion_limit"] = limit
    if debug:
        overrides["log_level"] = "DEBUG"
    return dataclasses.replace(settings, **overrides)


async def resolve_mentions(text: str, settings: MentionSettings) -> tuple[TriggerController, TextDocument]:
    """Run the controller over ``text`` (cursor at the end) and wait for its results."""
    bus = EventBus()
    document = TextDocument(text)
    controller = create_controller(
        DirectoryLookup(delay=settings.lookup_delay),
        settings,
        document=document,
        event_bus=bus,
    )

    settled = asyncio.Event()
    bus.subscribe(OptionsChanged, lambda event: settled.set())
    bus.subscribe(LookupFailed, lambda event: settled.set())

    match = controller.on_text_changed(document.text_before_cursor)
    if match is not None and not settled.is_set():
        await settled.wait()
    return controller, document


def _run(text: str, settings: MentionSettings) -> tuple[TriggerController, TextDocument]:
    setup_logger(log_level=settings.log_level)
    logger.info(f"Resolving mentions for {text!r}")
    return asyncio.run(resolve_mentions(text, settings))


def _settings_or_exit(delay: Optional[float], limit: Optional[int], debug: bool) -> MentionSettings:
    try:
        return load_settings(delay, limit, debug)
    except MentionConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=2)


@cli.command()
def suggest(
    text: str = typer.Argument(..., help="Text before the cursor"),
    delay: Optional[float] = typer.Option(None, "--delay", help="Simulated lookup latency in seconds"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of suggestions"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Show the suggestions offered for TEXT."""
    settings = _settings_or_exit(delay, limit, debug)
    controller, _ = _run(text, settings)

    if controller.query_string is None:
        console.print("No mention at the cursor.")
        return

    table = Table(title=f"Suggestions for {controller.query_string!r}")
    table.add_column("#", justify="right")
    table.add_column("Name")
    for index, option in enumerate(controller.options):
        table.add_row(str(index), option.label)
    console.print(table)
    if not controller.options:
        console.print("No matching names.")


@cli.command()
def insert(
    text: str = typer.Argument(..., help="Text before the cursor"),
    pick: int = typer.Option(0, "--pick", help="Index of the suggestion to insert"),
    delay: Optional[float] = typer.Option(None, "--delay", help="Simulated lookup latency in seconds"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum number of suggestions"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Insert suggestion number PICK into TEXT and print the result."""
    settings = _settings_or_exit(delay, limit, debug)
    controller, document = _run(text, settings)

    if not controller.options:
        console.print("No suggestions to insert.")
        raise typer.Exit(code=1)
    if not 0 <= pick < len(controller.options):
        console.print(f"[red]--pick must be between 0 and {len(controller.options) - 1}[/red]")
        raise typer.Exit(code=2)

    controller.set_highlighted_index(pick)
    controller.select_highlighted()
    console.print(document.text, markup=False, highlight=False)
