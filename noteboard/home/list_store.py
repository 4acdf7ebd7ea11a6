"""
Note List Store.

Holds the screen's local copy of the notes and derives the visible list.
The stored sequence always keeps pinned notes ahead of unpinned ones;
within each group the load order is preserved.
"""

from collections.abc import Collection, Iterable, Mapping

from noteboard.client.note_store import NoteStore
from noteboard.core.exceptions import RemoteStoreError
from noteboard.core.logging import get_logger
from noteboard.home.ports import Notifier
from noteboard.home.selection import SelectionController
from noteboard.schemas.note import Note, NoteId

logger = get_logger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load notes"


def sort_notes(
    notes: Iterable[Note],
    load_order: Mapping[NoteId, int] | None = None,
) -> list[Note]:
    """
    Return a new list with pinned notes first. No side effects.

    Within each pin group notes follow load_order when given, otherwise
    the sort is stable on the input order.
    """
    if load_order is None:
        return sorted(notes, key=lambda note: not note.pinned)
    return sorted(
        notes,
        key=lambda note: (not note.pinned, load_order.get(note.id, len(load_order))),
    )


def matches_query(note: Note, query: str | None) -> bool:
    """Case-insensitive substring match of the query against the note title."""
    return (query or "").lower() in (note.title or "").lower()


class NoteListStore:
    """
    Canonical in-memory list of notes for one screen instance.

    Mutations happen through reload() and the patch helpers used by the
    mutation coordinator; visible_notes() is derived on every call.
    """

    def __init__(
        self,
        store: NoteStore,
        selection: SelectionController,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._selection = selection
        self._notifier = notifier
        self._notes: list[Note] = []
        self._load_order: dict[NoteId, int] = {}
        self.query = ""
        self.refreshing = False

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    @property
    def ids(self) -> set[NoteId]:
        return {note.id for note in self._notes}

    def __len__(self) -> int:
        return len(self._notes)

    def get(self, note_id: NoteId) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def set_query(self, query: str | None) -> None:
        self.query = query or ""

    def visible_notes(self) -> list[Note]:
        """Unarchived notes whose title contains the current query."""
        return [
            note for note in self._notes
            if not note.archived and matches_query(note, self.query)
        ]

    def replace(self, notes: Iterable[Note]) -> None:
        notes = list(notes)
        self._load_order = {note.id: index for index, note in enumerate(notes)}
        self._notes = sort_notes(notes, self._load_order)

    def patch_pinned(self, note_id: NoteId, pinned: bool) -> None:
        """Set the pin status of one note and restore the ordering."""
        self._notes = sort_notes(
            (note.with_pinned(pinned) if note.id == note_id else note for note in self._notes),
            self._load_order,
        )

    def remove(self, note_ids: Collection[NoteId]) -> None:
        self._notes = [note for note in self._notes if note.id not in note_ids]

    async def reload(self) -> bool:
        """
        Replace the local list with the remote store's full note set.

        On success the selection is cleared. On failure the previous list
        is kept and a single error is shown; nothing is retried.

        Returns:
            True if the list was replaced
        """
        self.refreshing = True
        try:
            notes = await self._store.fetch_all()
        except RemoteStoreError as e:
            logger.warning("Reload failed", error=e.message, code=e.code)
            self._notifier.notify_error(LOAD_FAILED_MESSAGE)
            return False
        finally:
            self.refreshing = False

        self.replace(notes)
        self._selection.clear()
        logger.info("Notes reloaded", count=len(self._notes))
        return True
