"""
Notes feature: API routes for generated summary notes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from studybuddy.core.dependencies import get_db, get_current_user_id
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.notes.schemas import GenerateNotesRequest, NoteEnvelope
from studybuddy.features.notes.service import NotesService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/documents/{document_id}/notes", response_model=NoteEnvelope)
async def get_note(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Get the generated notes of a document."""
    try:
        note = NotesService(db).get_note(user_id, document_id)
    except Exception as e:
        logger.error(f"Error fetching notes: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch notes")

    if not note:
        raise HTTPException(status_code=404, detail="Notes not found")
    return {"note": note}


@router.post("/notes/generate", response_model=NoteEnvelope)
async def generate_notes(
    data: GenerateNotesRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Generate (or regenerate) concise markdown notes for a document."""
    if not data.document_id:
        raise HTTPException(status_code=400, detail="Document ID is required")

    try:
        note = await NotesService(db).generate_notes(user_id, data.document_id)
        return {"note": note}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error generating notes: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate notes")
