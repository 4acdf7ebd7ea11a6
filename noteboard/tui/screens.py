"""
Screens for the Noteboard TUI.

HomeScreen renders the home screen controller and acts as its navigator,
confirmer and notifier. ConfirmDialog and NoteEditorScreen are the two
screens it opens.
"""

from __future__ import annotations

import asyncio

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Input, Label, TextArea

from noteboard.client.note_store import NoteStore
from noteboard.core.exceptions import RemoteStoreError
from noteboard.core.logging import get_logger, log_with_source
from noteboard.home.controller import HomeScreenController
from noteboard.schemas.note import Note, NoteCreate, NoteUpdate
from noteboard.tui.widgets import NoteCard, NoteList, SelectionBar, StatusBar

logger = get_logger(__name__)


class ConfirmDialog(ModalScreen[bool]):
    """Yes/no prompt. Dismisses with True only for the destructive button."""

    BINDINGS = [Binding("escape", "dismiss(False)", "Cancel")]

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog-container"):
            yield Label(self.title_text, id="dialog-title")
            yield Label(self.message, id="dialog-message")
            with Horizontal(id="dialog-buttons"):
                yield Button("Cancel", id="cancel", variant="default")
                yield Button("Delete", id="confirm", variant="error")

    @on(Button.Pressed)
    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")


class NoteEditorScreen(Screen[bool]):
    """Edits an existing note, or creates one when opened without a note."""

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "back", "Back"),
    ]

    def __init__(self, store: NoteStore, note: Note | None = None) -> None:
        super().__init__()
        self.store = store
        self.note = note

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="editor"):
            yield Input(
                value=(self.note.title or "") if self.note else "",
                placeholder="Title",
                id="editor-title",
            )
            yield TextArea(self.note.content if self.note else "", id="editor-content")
        yield Footer()

    def action_back(self) -> None:
        self.dismiss(False)

    @work(exclusive=True)
    async def action_save(self) -> None:
        title = self.query_one("#editor-title", Input).value
        content = self.query_one("#editor-content", TextArea).text
        try:
            if self.note is None:
                await self.store.create(NoteCreate(title=title, content=content))
            else:
                await self.store.update(
                    self.note.id,
                    NoteUpdate(title=title, content=content, pinned=self.note.pinned),
                )
        except RemoteStoreError as e:
            log_with_source(logger, "tui", "warning", "Save failed", error=e.message, code=e.code)
            self.notify("Failed to save note", title="Error", severity="error")
            return
        self.dismiss(True)


class HomeScreen(Screen):
    """Searchable, pin-ordered note list with multi-select."""

    BINDINGS = [
        Binding("escape", "cancel_selection", "Cancel"),
        Binding("ctrl+n", "new_note", "New"),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(self, store: NoteStore) -> None:
        super().__init__()
        self.store = store
        self.controller = HomeScreenController(store, navigator=self, confirmer=self, notifier=self)
        self._skip_resume_reload = False
        self._render_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        yield Header()
        yield SelectionBar(id="selection-bar")
        yield Input(placeholder="Search notes...", id="search")
        yield NoteList(id="notes")
        yield StatusBar(id="status")
        yield Footer()

    # -- collaborators --------------------------------------------------

    def open_editor(self, note: Note | None = None) -> None:
        self.app.push_screen(NoteEditorScreen(self.store, note))

    async def confirm(self, title: str, message: str) -> bool:
        # Closing the dialog resumes this screen; that is not a focus change
        self._skip_resume_reload = True
        return bool(await self.app.push_screen(ConfirmDialog(title, message), wait_for_dismiss=True))

    def notify_error(self, message: str) -> None:
        self.notify(message, title="Error", severity="error")

    # -- lifecycle ------------------------------------------------------

    def on_screen_resume(self) -> None:
        if self._skip_resume_reload:
            self._skip_resume_reload = False
            return
        self.reload()

    @work(group="reload")
    async def reload(self) -> None:
        status = self.query_one(StatusBar)
        status.refreshing = True
        try:
            await self.controller.on_focus()
        finally:
            status.refreshing = False
        await self.render_notes()

    async def render_notes(self) -> None:
        """Rebuild the list from the controller's visible notes."""
        note_list = self.query_one(NoteList)
        async with self._render_lock:
            index = note_list.index
            notes = self.controller.visible_notes()

            await note_list.clear()
            await note_list.extend(
                NoteCard(note, selected=self.controller.is_selected(note.id)) for note in notes
            )
            if notes:
                note_list.index = min(index or 0, len(notes) - 1)

        self.query_one(SelectionBar).selected = len(self.controller.selected_ids)
        status = self.query_one(StatusBar)
        status.visible_count = len(notes)
        status.total_count = len(self.controller.notes)
        status.mode = self.controller.mode

    def _highlighted(self) -> Note | None:
        item = self.query_one(NoteList).highlighted_child
        return item.note if isinstance(item, NoteCard) else None

    # -- user input -----------------------------------------------------

    @on(Input.Changed, "#search")
    async def on_search_changed(self, event: Input.Changed) -> None:
        self.controller.set_query(event.value)
        await self.render_notes()

    @on(NoteList.Selected, "#notes")
    async def on_note_tapped(self, event: NoteList.Selected) -> None:
        if isinstance(event.item, NoteCard):
            self.controller.tap(event.item.note.id)
            await self.render_notes()

    async def action_select_note(self) -> None:
        note = self._highlighted()
        if note is not None:
            self.controller.long_press(note.id)
            await self.render_notes()

    async def action_cancel_selection(self) -> None:
        self.controller.cancel_selection()
        await self.render_notes()

    def action_new_note(self) -> None:
        self.controller.create_note()

    def action_refresh(self) -> None:
        log_with_source(logger, "tui", "debug", "Manual refresh")
        self.reload()

    @work
    async def action_toggle_pin(self) -> None:
        note = self._highlighted()
        if note is not None and await self.controller.toggle_pin(note.id):
            await self.render_notes()

    @work(exclusive=True, group="delete")
    async def action_delete_selected(self) -> None:
        await self.controller.delete_selected()
        await self.render_notes()
