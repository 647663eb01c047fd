"""
User notes feature: API routes for the per-document notebook.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from studybuddy.core.dependencies import get_db, get_current_user_id
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.user_notes.schemas import (
    UserNoteCreate,
    UserNoteEnvelope,
    UserNoteListResponse,
    UserNoteUpdate,
)
from studybuddy.features.user_notes.service import UserNotesService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/documents/{document_id}/user-notes", response_model=UserNoteListResponse)
async def list_user_notes(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """List the user's notes for a document, newest first."""
    try:
        notes = UserNotesService(db).list_user_notes(user_id, document_id)
        return {"userNotes": notes}
    except Exception as e:
        logger.error(f"Error fetching user notes: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch user notes")


@router.post("/documents/{document_id}/user-notes", response_model=UserNoteEnvelope)
async def add_user_note(
    document_id: str,
    data: UserNoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Clip text into the document's notebook."""
    if not data.content or not data.content.strip():
        raise HTTPException(status_code=400, detail="Content is required")

    try:
        note = await UserNotesService(db).add_clipping(user_id, document_id, data.content)
        return {"userNote": note}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error creating user note: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create user note")


@router.put("/documents/{document_id}/user-notes", response_model=UserNoteEnvelope)
async def update_user_note(
    document_id: str,
    data: UserNoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Replace a note's title and content."""
    if not data.id or not data.title or not data.content:
        raise HTTPException(status_code=400, detail="ID, title, and content are required")

    service = UserNotesService(db)
    try:
        service.require_user_note(user_id, document_id, data.id)
        note = service.update_user_note(user_id, data.id, data.title.strip(), data.content.strip())
        return {"userNote": note}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error updating user note: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update user note")


@router.delete("/documents/{document_id}/user-notes")
async def delete_user_note(
    document_id: str,
    id: str | None = None,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Delete one note; the note id is passed as the `id` query parameter."""
    if not id:
        raise HTTPException(status_code=400, detail="Note ID is required")

    try:
        UserNotesService(db).delete_user_note(user_id, document_id, id)
        return {"success": True}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error deleting user note: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete user note")
