"""
Home Screen Controller.

The user actions of the note list screen, wired to the list store,
selection controller and mutation coordinator. Rendering layers call
these methods and redraw from visible_notes() afterwards.

Usage:
    controller = HomeScreenController(store, navigator, confirmer, notifier)
    await controller.on_focus()
    controller.set_query("tax")
    for note in controller.visible_notes():
        ...
"""

from noteboard.client.note_store import NoteStore
from noteboard.core.logging import get_logger
from noteboard.home.list_store import NoteListStore
from noteboard.home.mutations import DeleteResult, MutationCoordinator
from noteboard.home.ports import Confirmer, Navigator, Notifier
from noteboard.home.selection import SelectionController, SelectionMode
from noteboard.schemas.note import Note, NoteId

logger = get_logger(__name__)


class HomeScreenController:
    """One screen instance's state and actions."""

    def __init__(
        self,
        store: NoteStore,
        navigator: Navigator,
        confirmer: Confirmer,
        notifier: Notifier,
    ) -> None:
        self._navigator = navigator
        self.selection = SelectionController(navigator)
        self.notes = NoteListStore(store, self.selection, notifier)
        self.mutations = MutationCoordinator(store, self.notes, self.selection, confirmer, notifier)

    @property
    def mode(self) -> SelectionMode:
        return self.selection.mode

    @property
    def selected_ids(self) -> tuple[NoteId, ...]:
        return self.selection.selected_ids

    @property
    def query(self) -> str:
        return self.notes.query

    @property
    def refreshing(self) -> bool:
        return self.notes.refreshing

    def is_selected(self, note_id: NoteId) -> bool:
        return note_id in self.selection

    def visible_notes(self) -> list[Note]:
        return self.notes.visible_notes()

    async def on_focus(self) -> bool:
        """The screen became visible: reload everything."""
        return await self.notes.reload()

    async def refresh(self) -> bool:
        return await self.notes.reload()

    def set_query(self, query: str | None) -> None:
        self.notes.set_query(query)

    def tap(self, note_id: NoteId) -> SelectionMode:
        """Open or toggle the note, ignoring ids no longer in the list."""
        note = self.notes.get(note_id)
        if note is None:
            logger.debug("Tap on unknown note ignored", note_id=note_id)
            return self.mode
        return self.selection.tap(note)

    def long_press(self, note_id: NoteId) -> SelectionMode:
        if self.notes.get(note_id) is None:
            logger.debug("Long press on unknown note ignored", note_id=note_id)
            return self.mode
        return self.selection.long_press(note_id)

    def cancel_selection(self) -> None:
        self.selection.cancel()

    async def toggle_pin(self, note_id: NoteId) -> bool:
        note = self.notes.get(note_id)
        if note is None:
            return False
        return await self.mutations.toggle_pin(note)

    async def delete_selected(self) -> DeleteResult:
        return await self.mutations.delete_selected()

    def create_note(self) -> None:
        """Open a blank editor. The new note appears on the next reload."""
        self._navigator.open_editor(None)
