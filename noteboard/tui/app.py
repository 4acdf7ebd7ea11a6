"""
Noteboard TUI Application.

Usage:
    python tui.py
    python tui.py --debug
"""

from __future__ import annotations

import structlog
from textual.app import App
from textual.binding import Binding

from noteboard.client.note_store import HttpNoteStore, NoteStore
from noteboard.core.config import get_app_config
from noteboard.core.logging import get_logger, log_with_source
from noteboard.tui.screens import HomeScreen

logger = get_logger(__name__)


class NoteboardApp(App):
    """Terminal client for the notes API."""

    TITLE = "Noteboard"
    SUB_TITLE = "Notes"

    CSS = """
    #search {
        margin: 1 0;
    }

    NoteList {
        height: 1fr;
        border: solid $primary;
    }

    NoteCard {
        height: auto;
        padding: 0 1;
    }

    NoteCard.-selected {
        background: $warning 20%;
    }

    SelectionBar {
        height: 1;
        background: $warning;
        color: $text;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
    }

    ConfirmDialog {
        align: center middle;
    }

    #dialog-container {
        width: 50;
        height: auto;
        padding: 1 2;
        border: thick $error;
        background: $surface;
    }

    #dialog-title {
        text-style: bold;
    }

    #dialog-buttons {
        height: auto;
        margin-top: 1;
    }

    #editor-content {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: NoteStore | None = None, debug: bool = False) -> None:
        super().__init__()
        self._debug = debug
        self._owns_store = store is None
        self.store: NoteStore = store if store is not None else HttpNoteStore()

    def on_mount(self) -> None:
        if self._owns_store:
            self.sub_title = get_app_config().application.api.base_url
        log_with_source(logger, "tui", "info", "TUI started", debug=self._debug)
        self.push_screen(HomeScreen(self.store))

    async def on_unmount(self) -> None:
        # Workers are cancelled by Textual on exit; the HTTP pool is ours
        if self._owns_store and isinstance(self.store, HttpNoteStore):
            await self.store.close()
        log_with_source(logger, "tui", "info", "TUI stopped")


def main(debug: bool = False) -> None:
    structlog.contextvars.bind_contextvars(source="tui")
    app = NoteboardApp(debug=debug)
    app.run()
