"""
Documents feature: Schemas for response models.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class DocumentResponse(BaseModel):
    """A stored document (its text lives in document_chunks)."""
    id: str
    user_id: str
    title: str
    filename: str | None = None
    content_type: Literal["pdf", "text"]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentListResponse(BaseModel):
    documents: list[DocumentResponse]


class DocumentEnvelope(BaseModel):
    document: DocumentResponse
