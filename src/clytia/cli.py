"""Demo CLI - try every prompt from the shell."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

from clytia.errors import Cancelled, NonOptionalInputError, ParseError

if TYPE_CHECKING:
    from clytia.base import Prompter
    from clytia.core import Clytia

app = typer.Typer(
    name="clytia",
    help="Colorful interactive prompts - demo of every primitive.",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Show or change prompt settings.", no_args_is_help=True)
app.add_typer(config_app, name="config")
console = Console()

EXIT_CANCELLED = 130


def _get_clytia() -> Clytia:
    """Lazy import and create the prompt facade."""
    from clytia.core import Clytia

    return Clytia()


def _get_prompter() -> Prompter:
    return _get_clytia()


def _cancelled() -> typer.Exit:
    console.print("[dim]Cancelled[/dim]")
    return typer.Exit(EXIT_CANCELLED)


@app.command()
def validated(
    low: Annotated[int, typer.Option("--min", help="Smallest accepted number")] = 1,
    high: Annotated[int, typer.Option("--max", help="Largest accepted number")] = 10,
):
    """Ask for a number until it is within range."""
    from clytia.validation import in_range

    ui = _get_prompter()
    try:
        number = ui.validated_input(
            "Please enter a number", in_range(low, high), requirements=f"{low}-{high}"
        )
    except Cancelled:
        raise _cancelled()
    console.print(f"Double your number is [green]{number * 2}[/green]")


@app.command()
def parsed(
    default: Annotated[
        int | None, typer.Option("--default", "-d", help="Used on blank input")
    ] = None,
):
    """Ask for a number once."""
    ui = _get_prompter()
    try:
        number = ui.parsed_input("Please enter a number", int, default)
    except (NonOptionalInputError, ParseError):
        console.print("[red]You didn't enter a number![/red]")
        raise typer.Exit(1)
    except Cancelled:
        raise _cancelled()
    console.print(f"Double your number is [green]{number * 2}[/green]")


@app.command()
def options(
    choices: Annotated[list[str] | None, typer.Argument(help="Options to pick from")] = None,
):
    """Pick one option with the arrow keys."""
    ui = _get_prompter()
    try:
        choice = ui.options_menu(
            choices or ["cats", "dogs", "both"], title="What animal do you like?"
        )
    except Cancelled:
        raise _cancelled()
    console.print(f"You picked [cyan]{choice}[/cyan]")


@app.command()
def multichoice(
    choices: Annotated[list[str] | None, typer.Argument(help="Options to pick from")] = None,
):
    """Pick any number of options (space toggles, enter confirms)."""
    ui = _get_prompter()
    items = choices or ["cats", "dogs", "birds"]
    try:
        picked = ui.multichoice(items, title="What animals do you like?")
    except Cancelled:
        raise _cancelled()
    console.print(f"[dim]{len(picked)} of {len(items)} selected[/dim]")


@app.command(name="confirm")
def confirm_cmd(
    message: Annotated[str, typer.Argument(help="Yes/no question")] = "Continue?",
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Default to Yes")] = False,
):
    """Ask a yes/no question. Exit code 0 for yes, 1 for no."""
    ui = _get_prompter()
    try:
        answer = ui.confirm(message, default=yes)
    except Cancelled:
        raise _cancelled()
    raise typer.Exit(0 if answer else 1)


@app.command()
def spinner(
    seconds: Annotated[float, typer.Option("--seconds", "-s", help="How long to spin")] = 2.0,
    dynamic: Annotated[bool, typer.Option("--dynamic", help="Show a countdown")] = False,
    fail: Annotated[bool, typer.Option("--fail", help="Make the task fail")] = False,
):
    """Spin while a fake task sleeps."""
    cli = _get_clytia()
    deadline = time.monotonic() + seconds

    def task() -> None:
        time.sleep(seconds)
        if fail:
            raise RuntimeError("task failed")

    def remaining() -> str:
        left = max(0.0, deadline - time.monotonic())
        return f"Waiting, {left:.1f}s left" if left else f"Waited for {seconds:g}s"

    try:
        if dynamic:
            cli.dynamic_background_spinner(remaining, task)
        else:
            cli.static_background_spinner(f"A delay for {seconds:g}s", task)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def progress(
    seconds: Annotated[
        float, typer.Option("--seconds", "-s", help="How long the task takes")
    ] = 2.0,
):
    """Show a progress bar for a fake task."""
    cli = _get_clytia()
    start = time.monotonic()

    def percent() -> int:
        if seconds <= 0:
            return 100
        return int((time.monotonic() - start) / seconds * 100)

    cli.progress_bar(f"Waiting for {seconds:g}s", percent, lambda: time.sleep(seconds))


@config_app.command(name="show")
def config_show():
    """Show current settings."""
    from clytia.config import Config

    cfg = Config.load()
    table = Table(title=str(cfg.config_dir / "config.json"))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for key, desc, value in cfg.get_settings():
        table.add_row(key, str(value), desc)
    console.print(table)


@config_app.command(name="set")
def config_set(
    key: Annotated[str, typer.Argument(help="Setting name")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """Change a setting and save it."""
    from clytia.config import Config

    cfg = Config.load()
    if key not in Config.DEFAULTS:
        console.print(f"[red]Error:[/red] Unknown setting '{key}'")
        raise typer.Exit(1)
    try:
        coerced = cfg.set_from_string(key, value)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid value '{value}' for {key}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] {key} = {coerced}")
