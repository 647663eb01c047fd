"""
Flashcards feature: Schemas for request/response models.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GenerateFlashcardsRequest(BaseModel):
    """Request to generate flashcards for a document."""
    model_config = ConfigDict(populate_by_name=True)

    document_id: str | None = Field(default=None, alias="documentId")


class GeneratedFlashcard(BaseModel):
    """One flashcard as returned by the LLM."""
    front: str
    back: str


class FlashcardResponse(BaseModel):
    id: str
    document_id: str
    front: str
    back: str
    created_at: datetime | None = None


class FlashcardListResponse(BaseModel):
    flashcards: list[FlashcardResponse]
