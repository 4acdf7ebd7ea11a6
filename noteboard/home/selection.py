"""
Selection Controller.

Tracks which notes are pending a bulk action and decides what a tap
means. The mode is derived from membership: any selected note puts the
screen in SELECTING, an empty selection is BROWSE.

    BROWSE    --tap(note)-->        open editor          (stays BROWSE)
    BROWSE    --long_press(id)-->   SELECTING {id}
    SELECTING --tap / long_press--> toggle; BROWSE once empty
    SELECTING --cancel()-->         BROWSE
    SELECTING --delete succeeds-->  BROWSE
"""

from enum import Enum

from noteboard.core.logging import get_logger
from noteboard.home.ports import Navigator
from noteboard.schemas.note import Note, NoteId

logger = get_logger(__name__)


class SelectionMode(str, Enum):
    BROWSE = "browse"
    SELECTING = "selecting"


class SelectionController:
    """Ordered set of selected note ids plus the tap dispatcher."""

    def __init__(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self._selected: dict[NoteId, None] = {}

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.SELECTING if self._selected else SelectionMode.BROWSE

    @property
    def selected_ids(self) -> tuple[NoteId, ...]:
        return tuple(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._selected

    def toggle(self, note_id: NoteId) -> SelectionMode:
        """Add the id if absent, remove it if present."""
        if note_id in self._selected:
            del self._selected[note_id]
        else:
            self._selected[note_id] = None
        logger.debug("Selection toggled", note_id=note_id, selected=len(self._selected))
        return self.mode

    def tap(self, note: Note) -> SelectionMode:
        """Toggle while selecting; otherwise open the note in the editor."""
        if self.mode is SelectionMode.SELECTING:
            return self.toggle(note.id)
        self._navigator.open_editor(note)
        return self.mode

    def long_press(self, note_id: NoteId) -> SelectionMode:
        return self.toggle(note_id)

    def cancel(self) -> None:
        self.clear()

    def clear(self) -> None:
        self._selected.clear()

