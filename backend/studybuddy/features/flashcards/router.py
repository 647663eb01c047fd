"""
Flashcards feature: API routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from studybuddy.core.dependencies import get_current_user_id, get_db
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.flashcards.schemas import FlashcardListResponse, GenerateFlashcardsRequest
from studybuddy.features.flashcards.service import FlashcardsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/documents/{document_id}/flashcards", response_model=FlashcardListResponse)
async def list_flashcards(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """List a document's flashcards."""
    try:
        flashcards = FlashcardsService(db).list_flashcards(user_id, document_id)
        return {"flashcards": flashcards}
    except Exception as e:
        logger.error(f"Error fetching flashcards: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch flashcards")


@router.post("/flashcards/generate", response_model=FlashcardListResponse)
async def generate_flashcards(
    data: GenerateFlashcardsRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Generate flashcards for every important topic of a document."""
    if not data.document_id:
        raise HTTPException(status_code=400, detail="Document ID is required")

    try:
        flashcards = await FlashcardsService(db).generate_flashcards(user_id, data.document_id)
        return {"flashcards": flashcards}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error generating flashcards: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate flashcards")
