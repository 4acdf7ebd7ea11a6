#!/usr/bin/env python3
"""
Noteboard CLI.

Primary entry point for all application operations.
Use --service to select what to run.

Usage:
    python cli.py --help
    python cli.py --service tui
    python cli.py --service list --search tax
    python cli.py --service pin --note-id 3
    python cli.py --service delete --note-id 1 --note-id 2
    python cli.py --service config
"""

import asyncio
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from noteboard.core.logging import get_logger, setup_logging
from noteboard.home.controller import HomeScreenController
from noteboard.home.mutations import DeleteStatus
from noteboard.schemas.note import Note, NoteId

console = Console()


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _resolve_note_id(controller: HomeScreenController, value: str) -> NoteId | None:
    """Match a command-line argument against the loaded notes by their printed id."""
    for note in controller.notes.notes:
        if str(note.id) == value:
            return note.id
    return None


class ConsoleCollaborators:
    """Navigator, confirmer and notifier for a non-interactive terminal."""

    def __init__(self, assume_yes: bool = False) -> None:
        self.assume_yes = assume_yes
        self.errors: list[str] = []

    def open_editor(self, note: Note | None = None) -> None:
        if note is None:
            console.print("[dim]Use the TUI to create notes (python cli.py --service tui).[/]")
            return
        console.print(f"[bold]{note.title or '(untitled)'}[/]\n{note.content}")

    async def confirm(self, title: str, message: str) -> bool:
        if self.assume_yes:
            return True
        return click.confirm(f"{title}: {message}", default=False)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)
        click.echo(click.style(f"Error: {message}", fg="red"), err=True)


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["tui", "list", "pin", "delete", "config", "info"]),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--search",
    default="",
    help="Title filter for the list service.",
)
@click.option(
    "--note-id", "note_ids",
    multiple=True,
    help="Note id for pin/delete (repeat for several notes).",
)
@click.option(
    "--yes", "-y",
    is_flag=True,
    help="Skip the delete confirmation prompt.",
)
def main(
    service: str,
    verbose: bool,
    debug: bool,
    search: str,
    note_ids: tuple[str, ...],
    yes: bool,
) -> None:
    """
    Noteboard CLI.

    \b
    Examples:
        python cli.py --service tui
        python cli.py --service list --search groceries
        python cli.py --service pin --note-id 7
        python cli.py --service delete --note-id 1 --note-id 2 --yes
        python cli.py --service config
        python cli.py --service info
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    # The TUI owns the terminal; everything else may log to the console
    setup_logging(level=log_level, format_type="console", enable_console=service != "tui")

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", service=service, log_level=log_level)

    if service == "tui":
        run_tui(logger, debug)
    elif service == "list":
        sys.exit(asyncio.run(list_notes(logger, search)))
    elif service == "pin":
        sys.exit(asyncio.run(toggle_pins(logger, list(note_ids))))
    elif service == "delete":
        sys.exit(asyncio.run(delete_notes(logger, list(note_ids), yes)))
    elif service == "config":
        show_config(logger)
    elif service == "info":
        show_info(logger)


def run_tui(logger, debug: bool) -> None:
    """Start the terminal UI."""
    from noteboard.tui.app import main as tui_main

    logger.info("Starting TUI")
    tui_main(debug=debug)


def _build_controller(collaborators: ConsoleCollaborators):
    from noteboard.client.note_store import HttpNoteStore

    store = HttpNoteStore()
    controller = HomeScreenController(
        store,
        navigator=collaborators,
        confirmer=collaborators,
        notifier=collaborators,
    )
    return store, controller


def _render_table(controller: HomeScreenController) -> Table:
    table = Table(title="Notes")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Pinned", justify="center")
    table.add_column("Title", style="bold")
    table.add_column("Content", style="dim", overflow="ellipsis", max_width=50)
    for note in controller.visible_notes():
        table.add_row(
            str(note.id),
            "📌" if note.pinned else "",
            note.title or "(untitled)",
            " ".join(note.content.split()),
        )
    return table


async def list_notes(logger, search: str) -> int:
    """Print the visible notes, pinned first, filtered by title."""
    collaborators = ConsoleCollaborators()
    store, controller = _build_controller(collaborators)
    try:
        if not await controller.refresh():
            return 1
        controller.set_query(search)
        console.print(_render_table(controller))
        logger.info("Notes listed", visible=len(controller.visible_notes()), query=search)
        return 0
    finally:
        await store.close()


async def toggle_pins(logger, note_ids: list[str]) -> int:
    """Flip the pin status of each given note."""
    if not note_ids:
        click.echo(click.style("Error: --note-id is required for pin.", fg="red"), err=True)
        return 2

    collaborators = ConsoleCollaborators()
    store, controller = _build_controller(collaborators)
    try:
        if not await controller.refresh():
            return 1
        for value in note_ids:
            note_id = _resolve_note_id(controller, value)
            if note_id is None:
                click.echo(click.style(f"Error: note {value} not found.", fg="red"), err=True)
                return 1
            await controller.toggle_pin(note_id)
        console.print(_render_table(controller))
        return 1 if collaborators.errors else 0
    finally:
        await store.close()


async def delete_notes(logger, note_ids: list[str], assume_yes: bool) -> int:
    """Select the given notes and delete them as one batch."""
    if not note_ids:
        click.echo(click.style("Error: --note-id is required for delete.", fg="red"), err=True)
        return 2

    collaborators = ConsoleCollaborators(assume_yes=assume_yes)
    store, controller = _build_controller(collaborators)
    try:
        if not await controller.refresh():
            return 1
        for value in note_ids:
            note_id = _resolve_note_id(controller, value)
            if note_id is None:
                click.echo(click.style(f"Error: note {value} not found.", fg="red"), err=True)
                return 1
            if not controller.is_selected(note_id):
                controller.long_press(note_id)

        result = await controller.delete_selected()
        if result.status is DeleteStatus.DELETED:
            click.echo(f"Deleted {len(result.requested)} note(s).")
            return 0
        if result.status is DeleteStatus.CANCELLED:
            click.echo("Cancelled.")
            return 0
        logger.warning("Delete failed", failed=[str(i) for i in result.failures])
        return 1
    finally:
        await store.close()


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from noteboard.core.config import get_app_config

        app_config = get_app_config()

        for title, section in (
            ("Application Settings (from YAML):", app_config.application),
            ("Logging Settings (from YAML):", app_config.logging),
        ):
            click.echo(title)
            click.echo("-" * 40)
            for key, value in section.model_dump().items():
                if isinstance(value, dict):
                    click.echo(f"  {key}:")
                    for k, v in value.items():
                        click.echo(f"    {k}: {v}")
                else:
                    click.echo(f"  {key}: {value}")
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", error=str(e))
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    try:
        from noteboard.core.config import get_app_config
        application = get_app_config().application
    except Exception as e:
        logger.error("Failed to load application configuration", error=str(e))
        click.echo(
            click.style("Error: Could not load application.yaml configuration.", fg="red"),
            err=True,
        )
        sys.exit(1)

    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")
    click.echo(f"Notes API: {application.api.base_url}{application.api.notes_path}")

    click.echo()
    click.echo("Services (--service):")
    click.echo("  tui      Interactive note list")
    click.echo("  list     Print notes (pinned first, --search to filter)")
    click.echo("  pin      Toggle pin on --note-id")
    click.echo("  delete   Delete every --note-id as one batch")
    click.echo("  config   Display configuration")
    click.echo("  info     Show this information")


if __name__ == "__main__":
    main()
