"""
Root Pytest Fixtures.

Shared fixtures available to all test types: notes, an in-memory remote
store, and recording stand-ins for the screen's collaborators.
"""

import asyncio
from typing import Any, Callable

import pytest

from noteboard.core.exceptions import NotFoundError
from noteboard.home.controller import HomeScreenController
from noteboard.schemas.note import Note, NoteCreate, NoteId, NoteUpdate


# =============================================================================
# Remote Store Fake
# =============================================================================


class FakeNoteStore:
    """
    In-memory NoteStore with failure injection.

    Set fail_fetch, or map ids in fail_update / fail_delete, to an exception
    instance and the matching call raises it. Set gate to an unset
    asyncio.Event to hold write calls until the test releases it.
    """

    def __init__(self, notes: list[Note] | None = None) -> None:
        self.server: dict[NoteId, Note] = {note.id: note for note in notes or []}
        self.fail_fetch: Exception | None = None
        self.fail_update: dict[NoteId, Exception] = {}
        self.fail_delete: dict[NoteId, Exception] = {}
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[Any, ...]] = []
        self._next_id = 1000

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def fetch_all(self) -> list[Note]:
        self.calls.append(("fetch_all",))
        if self.fail_fetch is not None:
            raise self.fail_fetch
        return list(self.server.values())

    async def update(self, note_id: NoteId, data: NoteUpdate) -> Note | None:
        self.calls.append(("update", note_id, data.model_dump()))
        await self._wait()
        if note_id in self.fail_update:
            raise self.fail_update[note_id]
        if note_id not in self.server:
            raise NotFoundError(f"note {note_id} not found")
        self.server[note_id] = Note.model_validate(
            {**self.server[note_id].model_dump(), **data.model_dump()}
        )
        return self.server[note_id]

    async def delete(self, note_id: NoteId) -> None:
        self.calls.append(("delete", note_id))
        await self._wait()
        if note_id in self.fail_delete:
            raise self.fail_delete[note_id]
        if note_id not in self.server:
            raise NotFoundError(f"note {note_id} not found")
        del self.server[note_id]

    async def create(self, data: NoteCreate) -> Note | None:
        self.calls.append(("create", data.model_dump()))
        self._next_id += 1
        note = Note(id=self._next_id, **data.model_dump())
        self.server[note.id] = note
        return note

    async def close(self) -> None:
        self.calls.append(("close",))

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


# =============================================================================
# Collaborator Stand-ins
# =============================================================================


class RecordingNavigator:
    def __init__(self) -> None:
        self.opened: list[Note | None] = []

    def open_editor(self, note: Note | None = None) -> None:
        self.opened.append(note)


class ScriptedConfirmer:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: list[tuple[str, str]] = []

    async def confirm(self, title: str, message: str) -> bool:
        self.prompts.append((title, message))
        return self.answer


class RecordingNotifier:
    def __init__(self) -> None:
        self.errors: list[str] = []

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """Build notes with sensible defaults: make_note(1, "Title", pinned=True)."""

    def _make(note_id: NoteId, title: str | None = "", **kwargs: Any) -> Note:
        kwargs.setdefault("content", f"content of {note_id}")
        return Note(id=note_id, title=title, **kwargs)

    return _make


@pytest.fixture
def sample_notes(make_note) -> list[Note]:
    """Two notes from the Groceries/Taxes scenario plus an archived one."""
    return [
        make_note(1, "Groceries"),
        make_note(2, "Taxes", pinned=True),
        make_note(3, "Old tax receipts", archived=True),
    ]


@pytest.fixture
def fake_store(sample_notes) -> FakeNoteStore:
    return FakeNoteStore(sample_notes)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def confirmer() -> ScriptedConfirmer:
    return ScriptedConfirmer(answer=True)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def controller(fake_store, navigator, confirmer, notifier) -> HomeScreenController:
    return HomeScreenController(fake_store, navigator, confirmer, notifier)


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
