"""
Note Schemas.

Pydantic models for notes as cached by the home screen, and the payloads
sent to the notes API. The API carries `pinned` and `archived` as 0/1
integers; internally they are booleans.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

NoteId = int | str


class Note(BaseModel):
    """A note owned by the remote store and cached locally."""

    id: NoteId = Field(description="Note unique identifier")
    title: str | None = Field(default=None, description="Note title, may be absent")
    content: str = Field(default="", description="Note content")
    pinned: bool = Field(default=False, description="Sorts before unpinned notes")
    archived: bool = Field(default=False, description="Hidden from the note list")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("content", mode="before")
    @classmethod
    def _content_not_null(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("pinned", "archived", mode="before")
    @classmethod
    def _flag_not_null(cls, value: object) -> object:
        return False if value is None else value

    @field_serializer("pinned", "archived")
    def _flag_to_int(self, value: bool) -> int:
        return int(value)

    def with_pinned(self, pinned: bool) -> "Note":
        """Return a copy of this note with a new pin status."""
        return self.model_copy(update={"pinned": pinned})


class NoteUpdate(BaseModel):
    """Body of an update request: the full editable state of a note."""

    title: str | None = None
    content: str = ""
    pinned: bool = False

    @field_serializer("pinned")
    def _flag_to_int(self, value: bool) -> int:
        return int(value)


class NoteCreate(BaseModel):
    """Body of a create request, sent from the editor."""

    title: str | None = None
    content: str = ""
