# Pydantic schemas package
from noteboard.schemas.note import Note, NoteCreate, NoteId, NoteUpdate

__all__ = [
    "Note",
    "NoteCreate",
    "NoteId",
    "NoteUpdate",
]
