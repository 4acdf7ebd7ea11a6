"""
Mutation Coordinator.

The only component that writes to the remote store. Local state changes
only after the remote outcome is known: a pin is patched after the update
succeeds, and deleted notes are removed after every delete succeeds.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from noteboard.client.note_store import NoteStore
from noteboard.core.exceptions import RemoteStoreError
from noteboard.core.logging import get_logger
from noteboard.home.list_store import NoteListStore
from noteboard.home.ports import Confirmer, Notifier
from noteboard.home.selection import SelectionController
from noteboard.schemas.note import Note, NoteId, NoteUpdate

logger = get_logger(__name__)

PIN_FAILED_MESSAGE = "Failed to toggle pin"
DELETE_FAILED_MESSAGE = "Failed to delete notes"
DELETE_PROMPT_TITLE = "Delete Notes"


def delete_prompt(count: int) -> str:
    return f"Are you sure you want to delete {count} note(s)?"


class DeleteStatus(str, Enum):
    NOTHING_SELECTED = "nothing_selected"
    CANCELLED = "cancelled"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass
class DeleteResult:
    """Outcome of a bulk delete, including what each request reported."""

    status: DeleteStatus
    requested: tuple[NoteId, ...] = ()
    failures: dict[NoteId, RemoteStoreError] = field(default_factory=dict)

    @property
    def succeeded(self) -> tuple[NoteId, ...]:
        return tuple(i for i in self.requested if i not in self.failures)


class MutationCoordinator:
    """Pin toggling and bulk deletion with confirm-then-apply reconciliation."""

    def __init__(
        self,
        store: NoteStore,
        notes: NoteListStore,
        selection: SelectionController,
        confirmer: Confirmer,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._notes = notes
        self._selection = selection
        self._confirmer = confirmer
        self._notifier = notifier

    async def toggle_pin(self, note: Note) -> bool:
        """
        Flip the pin status of a note on the server, then locally.

        Args:
            note: The note as currently displayed

        Returns:
            True if the note was updated
        """
        pinned = not note.pinned
        update = NoteUpdate(title=note.title, content=note.content, pinned=pinned)
        try:
            await self._store.update(note.id, update)
        except RemoteStoreError as e:
            logger.warning(
                "Pin toggle failed",
                note_id=note.id, error=e.message, code=e.code,
            )
            self._notifier.notify_error(PIN_FAILED_MESSAGE)
            return False

        self._notes.patch_pinned(note.id, pinned)
        logger.info("Pin toggled", note_id=note.id, pinned=pinned)
        return True

    async def delete_selected(self) -> DeleteResult:
        """
        Delete every selected note after the user confirms.

        All requests are sent together. The list is only changed when
        every one of them succeeds; a single failure leaves both the list
        and the selection exactly as they were.
        """
        note_ids = self._selection.selected_ids
        if not note_ids:
            return DeleteResult(DeleteStatus.NOTHING_SELECTED)

        confirmed = await self._confirmer.confirm(DELETE_PROMPT_TITLE, delete_prompt(len(note_ids)))
        if not confirmed:
            return DeleteResult(DeleteStatus.CANCELLED, requested=note_ids)

        outcomes = await asyncio.gather(
            *(self._store.delete(note_id) for note_id in note_ids),
            return_exceptions=True,
        )

        failures: dict[NoteId, RemoteStoreError] = {}
        for note_id, outcome in zip(note_ids, outcomes):
            if isinstance(outcome, RemoteStoreError):
                failures[note_id] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome

        if failures:
            logger.warning(
                "Bulk delete failed",
                requested=list(note_ids),
                failed={str(i): e.code for i, e in failures.items()},
            )
            self._notifier.notify_error(DELETE_FAILED_MESSAGE)
            return DeleteResult(DeleteStatus.FAILED, requested=note_ids, failures=failures)

        self._notes.remove(set(note_ids))
        self._selection.clear()
        logger.info("Notes deleted", count=len(note_ids))
        return DeleteResult(DeleteStatus.DELETED, requested=note_ids)
