"""
MCQs feature: Schemas for request/response models.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GenerateMCQsRequest(BaseModel):
    """Request to generate a multiple-choice quiz for a document."""
    model_config = ConfigDict(populate_by_name=True)

    document_id: str | None = Field(default=None, alias="documentId")
    count: int = Field(default=15, ge=1, le=50)


class GeneratedMCQ(BaseModel):
    """One question as returned by the LLM, before options are trimmed and the answer clamped."""
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct_answer: int = 0
    explanation: str = ""


class MCQResponse(BaseModel):
    id: str
    document_id: str
    question: str
    options: list[str]
    correct_answer: int  # index into options
    explanation: str
    created_at: datetime | None = None


class MCQListResponse(BaseModel):
    mcqs: list[MCQResponse]
