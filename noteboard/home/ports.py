"""
Collaborator interfaces for the home screen.

The rendering layer supplies these; tests supply fakes.
"""

from typing import Protocol

from noteboard.schemas.note import Note


class Navigator(Protocol):
    """Opens other screens."""

    def open_editor(self, note: Note | None = None) -> None:
        """Open the editor for an existing note, or a blank one when None."""


class Confirmer(Protocol):
    """Asks the user a yes/no question."""

    async def confirm(self, title: str, message: str) -> bool: ...


class Notifier(Protocol):
    """Shows user-visible notifications."""

    def notify_error(self, message: str) -> None: ...
