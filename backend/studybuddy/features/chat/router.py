"""
Chat feature: API routes for the per-document tutor.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from supabase import Client

from studybuddy.core.dependencies import get_current_user_id, get_db
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.chat.service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter()


class ChatRequest(BaseModel):
    message: str | None = None


@router.get("/documents/{document_id}/chat")
async def list_messages(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Conversation history for a document, oldest first."""
    try:
        messages = ChatService(db).list_messages(user_id, document_id)
        return {"messages": messages}
    except Exception as e:
        logger.error(f"Error fetching chat messages: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch chat messages")


@router.post("/documents/{document_id}/chat")
async def send_message(
    document_id: str,
    data: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Ask the tutor a question about the document."""
    if not data.message or not data.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        return await ChatService(db).ask(user_id, document_id, data.message)
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error processing chat message: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to process chat message")
