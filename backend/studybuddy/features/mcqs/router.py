"""
MCQs feature: API routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from studybuddy.core.dependencies import get_current_user_id, get_db
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.mcqs.schemas import GenerateMCQsRequest, MCQListResponse
from studybuddy.features.mcqs.service import MCQsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/documents/{document_id}/mcqs", response_model=MCQListResponse)
async def list_mcqs(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """List a document's multiple-choice questions."""
    try:
        mcqs = MCQsService(db).list_mcqs(user_id, document_id)
        return {"mcqs": mcqs}
    except Exception as e:
        logger.error(f"Error fetching MCQs: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch MCQs")


@router.post("/mcqs/generate", response_model=MCQListResponse)
async def generate_mcqs(
    data: GenerateMCQsRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Generate a multiple-choice quiz (default 15 questions) for a document."""
    if not data.document_id:
        raise HTTPException(status_code=400, detail="Document ID is required")

    try:
        mcqs = await MCQsService(db).generate_mcqs(user_id, data.document_id, data.count)
        return {"mcqs": mcqs}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error generating MCQs: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate MCQs")
