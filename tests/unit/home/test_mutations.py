"""
Unit Tests for the Mutation Coordinator.

Pin toggling and all-or-nothing bulk deletion against the fake store.
"""

import asyncio

import pytest

from noteboard.core.exceptions import NetworkError, NotFoundError
from noteboard.home.list_store import NoteListStore
from noteboard.home.mutations import (
    DELETE_FAILED_MESSAGE,
    DELETE_PROMPT_TITLE,
    PIN_FAILED_MESSAGE,
    DeleteStatus,
    MutationCoordinator,
    delete_prompt,
)
from noteboard.home.selection import SelectionController, SelectionMode


@pytest.fixture
def selection(navigator) -> SelectionController:
    return SelectionController(navigator)


@pytest.fixture
async def list_store(fake_store, selection, notifier) -> NoteListStore:
    store = NoteListStore(fake_store, selection, notifier)
    await store.reload()
    return store


@pytest.fixture
def coordinator(fake_store, list_store, selection, confirmer, notifier) -> MutationCoordinator:
    return MutationCoordinator(fake_store, list_store, selection, confirmer, notifier)


class TestTogglePin:
    @pytest.mark.asyncio
    async def test_sends_full_editable_state(self, coordinator, list_store, fake_store):
        note = list_store.get(1)

        assert await coordinator.toggle_pin(note) is True

        assert fake_store.calls[-1] == (
            "update",
            1,
            {"title": "Groceries", "content": "content of 1", "pinned": 1},
        )

    @pytest.mark.asyncio
    async def test_pinning_moves_note_up(self, coordinator, list_store):
        assert [n.id for n in list_store.notes] == [2, 1, 3]

        await coordinator.toggle_pin(list_store.get(3))

        assert [n.id for n in list_store.notes] == [2, 3, 1]
        assert list_store.get(3).pinned is True

    @pytest.mark.asyncio
    async def test_unpinning_moves_note_behind_pinned(self, coordinator, list_store):
        await coordinator.toggle_pin(list_store.get(2))

        assert list_store.get(2).pinned is False
        assert [n.id for n in list_store.notes] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_twice_restores_value_and_position(self, coordinator, list_store):
        original = list_store.notes

        await coordinator.toggle_pin(list_store.get(1))
        await coordinator.toggle_pin(list_store.get(1))

        assert list_store.notes == original

    @pytest.mark.asyncio
    async def test_twice_restores_position_of_later_note(self, fake_store, notifier, navigator, confirmer, make_note):
        fake_store.server = {i: make_note(i) for i in (1, 2, 3)}
        selection = SelectionController(navigator)
        notes = NoteListStore(fake_store, selection, notifier)
        await notes.reload()
        coordinator = MutationCoordinator(fake_store, notes, selection, confirmer, notifier)

        await coordinator.toggle_pin(notes.get(3))
        assert [n.id for n in notes.notes] == [3, 1, 2]

        await coordinator.toggle_pin(notes.get(3))
        assert [n.id for n in notes.notes] == [1, 2, 3]
        assert notes.get(3).pinned is False

    @pytest.mark.asyncio
    async def test_failure_leaves_list_untouched(self, coordinator, list_store, fake_store, notifier):
        fake_store.fail_update[1] = NetworkError("offline")
        before = list_store.notes

        assert await coordinator.toggle_pin(list_store.get(1)) is False

        assert list_store.notes == before
        assert notifier.errors == [PIN_FAILED_MESSAGE]

    @pytest.mark.asyncio
    async def test_not_found_is_reported_once(self, coordinator, list_store, fake_store, notifier):
        del fake_store.server[1]

        assert await coordinator.toggle_pin(list_store.get(1)) is False

        assert notifier.errors == [PIN_FAILED_MESSAGE]
        assert list_store.get(1).pinned is False

    @pytest.mark.asyncio
    async def test_no_optimistic_update(self, coordinator, list_store, fake_store):
        fake_store.gate = asyncio.Event()
        task = asyncio.create_task(coordinator.toggle_pin(list_store.get(1)))
        await asyncio.sleep(0)

        assert list_store.get(1).pinned is False

        fake_store.gate.set()
        assert await task is True
        assert list_store.get(1).pinned is True


class TestDeleteSelected:
    @pytest.mark.asyncio
    async def test_nothing_selected_skips_prompt(self, coordinator, confirmer, fake_store):
        result = await coordinator.delete_selected()

        assert result.status is DeleteStatus.NOTHING_SELECTED
        assert confirmer.prompts == []
        assert fake_store.count("delete") == 0

    @pytest.mark.asyncio
    async def test_prompt_names_the_count(self, coordinator, selection, confirmer):
        selection.long_press(1)
        selection.long_press(2)

        await coordinator.delete_selected()

        assert confirmer.prompts == [
            (DELETE_PROMPT_TITLE, "Are you sure you want to delete 2 note(s)?")
        ]
        assert delete_prompt(1) == "Are you sure you want to delete 1 note(s)?"

    @pytest.mark.asyncio
    async def test_declined_prompt_sends_nothing(self, coordinator, selection, confirmer, fake_store, list_store):
        confirmer.answer = False
        selection.long_press(1)
        before = list_store.notes

        result = await coordinator.delete_selected()

        assert result.status is DeleteStatus.CANCELLED
        assert fake_store.count("delete") == 0
        assert list_store.notes == before
        assert selection.selected_ids == (1,)

    @pytest.mark.asyncio
    async def test_success_removes_notes_and_clears_selection(self, coordinator, selection, list_store, fake_store, notifier):
        selection.long_press(1)
        selection.long_press(2)

        result = await coordinator.delete_selected()

        assert result.status is DeleteStatus.DELETED
        assert result.succeeded == (1, 2)
        assert [n.id for n in list_store.notes] == [3]
        assert selection.mode is SelectionMode.BROWSE
        assert set(fake_store.server) == {3}
        assert notifier.errors == []

    @pytest.mark.asyncio
    async def test_partial_failure_changes_nothing(self, coordinator, selection, list_store, fake_store, notifier):
        selection.long_press(1)
        selection.long_press(2)
        fake_store.fail_delete[2] = NetworkError("offline")
        before = list_store.notes

        result = await coordinator.delete_selected()

        assert result.status is DeleteStatus.FAILED
        assert list_store.notes == before
        assert selection.selected_ids == (1, 2)
        assert notifier.errors == [DELETE_FAILED_MESSAGE]
        assert set(result.failures) == {2}
        assert result.succeeded == (1,)

    @pytest.mark.asyncio
    async def test_all_failures_surface_one_error(self, coordinator, selection, fake_store, notifier):
        selection.long_press(1)
        selection.long_press(2)
        fake_store.fail_delete[1] = NotFoundError()
        fake_store.fail_delete[2] = NetworkError()

        result = await coordinator.delete_selected()

        assert result.status is DeleteStatus.FAILED
        assert notifier.errors == [DELETE_FAILED_MESSAGE]

    @pytest.mark.asyncio
    async def test_requests_are_issued_together(self, coordinator, selection, fake_store):
        selection.long_press(1)
        selection.long_press(2)
        fake_store.gate = asyncio.Event()

        task = asyncio.create_task(coordinator.delete_selected())
        for _ in range(5):
            await asyncio.sleep(0)

        assert fake_store.count("delete") == 2
        fake_store.gate.set()
        assert (await task).status is DeleteStatus.DELETED

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, coordinator, selection, fake_store, list_store):
        selection.long_press(1)
        fake_store.fail_delete[1] = RuntimeError("bug")
        before = list_store.notes

        with pytest.raises(RuntimeError):
            await coordinator.delete_selected()

        assert list_store.notes == before
