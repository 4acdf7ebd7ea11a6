"""Widgets for the note list screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.reactive import reactive
from textual.widgets import Label, ListItem, ListView, Static

from noteboard.home.selection import SelectionMode
from noteboard.schemas.note import Note

PREVIEW_LENGTH = 60


class NoteCard(ListItem):
    """One note in the list: pin marker, title, content preview."""

    def __init__(self, note: Note, selected: bool = False) -> None:
        super().__init__(classes="-selected" if selected else "")
        self.note = note
        self.selected = selected

    def compose(self) -> ComposeResult:
        yield Label(self._render_heading(), classes="note-title")
        preview = " ".join(self.note.content.split())
        if len(preview) > PREVIEW_LENGTH:
            preview = preview[: PREVIEW_LENGTH - 1] + "…"
        yield Label(Text(preview, style="dim"), classes="note-preview")

    def _render_heading(self) -> Text:
        heading = Text()
        heading.append("[x] " if self.selected else "[ ] ", style="bold yellow" if self.selected else "dim")
        if self.note.pinned:
            heading.append("📌 ")
        heading.append(self.note.title or "(untitled)", style="bold")
        return heading


class NoteList(ListView):
    """Note list; Enter taps the highlighted note."""

    BINDINGS = [
        Binding("space", "screen.select_note", "Select"),
        Binding("p", "screen.toggle_pin", "Pin"),
        Binding("delete", "screen.delete_selected", "Delete"),
    ]


class SelectionBar(Static):
    """Toolbar shown while notes are selected."""

    selected: reactive[int] = reactive(0)

    def render(self) -> Text:
        return Text.from_markup(
            f" [bold]{self.selected}[/] selected  |  "
            "[b]Del[/] delete  [b]Esc[/] cancel"
        )

    def watch_selected(self, selected: int) -> None:
        self.display = selected > 0


class StatusBar(Static):
    """Persistent status bar showing list metrics."""

    visible_count: reactive[int] = reactive(0)
    total_count: reactive[int] = reactive(0)
    mode: reactive[SelectionMode] = reactive(SelectionMode.BROWSE)
    refreshing: reactive[bool] = reactive(False)

    def render(self) -> Text:
        state = "[yellow]refreshing…[/]" if self.refreshing else "[green]ready[/]"
        return Text.from_markup(
            f" Notes: [bold]{self.visible_count}[/] of {self.total_count} | "
            f"Mode: [bold]{self.mode.value}[/] | {state}"
        )
