"""
Notes feature: Schemas for request/response models.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class GenerateNotesRequest(BaseModel):
    """Request to (re)generate summary notes for a document."""
    model_config = ConfigDict(populate_by_name=True)

    document_id: str | None = Field(default=None, alias="documentId")


class NoteResponse(BaseModel):
    """Response model for a document's generated notes (markdown)."""
    id: str
    document_id: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NoteEnvelope(BaseModel):
    note: NoteResponse
