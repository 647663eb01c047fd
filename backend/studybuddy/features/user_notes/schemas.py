"""
User notes feature: Schemas for request/response models.
"""

from datetime import datetime

from pydantic import BaseModel


class UserNoteCreate(BaseModel):
    """Text clipped by the user; appended to the document's notebook."""
    content: str | None = None


class UserNoteUpdate(BaseModel):
    """Full replacement of a note's title and content."""
    id: str | None = None
    title: str | None = None
    content: str | None = None


class UserNoteResponse(BaseModel):
    id: str
    document_id: str
    title: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserNoteListResponse(BaseModel):
    userNotes: list[UserNoteResponse]


class UserNoteEnvelope(BaseModel):
    userNote: UserNoteResponse
