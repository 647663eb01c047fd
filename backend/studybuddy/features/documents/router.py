"""
Documents feature: API routes for uploading, listing and deleting documents.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from supabase import Client

from studybuddy.config import get_settings
from studybuddy.core.dependencies import get_current_user_id, get_db
from studybuddy.core.exceptions import AppBaseError, app_error_to_http
from studybuddy.features.documents.ingestion import extract_text_from_bytes, ingest_document
from studybuddy.features.documents.schemas import DocumentEnvelope, DocumentListResponse
from studybuddy.features.documents.service import DocumentsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """List the current user's documents, newest first."""
    try:
        documents = DocumentsService(db).list_documents(user_id)
        return {"documents": documents}
    except Exception as e:
        logger.error(f"Error fetching documents: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch documents")


@router.post("", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_document(
    file: UploadFile | None = File(None),
    text: str | None = Form(None),
    title: str | None = Form(None),
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """
    Create a document from an uploaded PDF (`file`) or pasted `text`.
    - Extracts the text, creates the `documents` row.
    - Chunks, embeds and stores the chunks before responding.
    """
    settings = get_settings()
    filename: str | None = None

    try:
        if file is not None:
            file_bytes = await file.read()

            max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
            if len(file_bytes) > max_size:
                raise HTTPException(
                    status_code=400,
                    detail=f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit.",
                )

            filename = file.filename or "upload.pdf"
            extracted_text = extract_text_from_bytes(file_bytes, filename)
            content_type = "pdf" if not filename.lower().endswith((".txt", ".md")) else "text"
        elif text:
            extracted_text = text
            content_type = "text"
        else:
            raise HTTPException(status_code=400, detail="Either file or text must be provided")

        if not extracted_text or not extracted_text.strip():
            raise HTTPException(status_code=400, detail="No text content found")

        service = DocumentsService(db)
        document = service.create_document(
            user_id=user_id,
            title=title or filename or "Untitled Document",
            content_type=content_type,
            filename=filename,
        )

        await ingest_document(db, user_id, document["id"], extracted_text)
        return {"document": document}

    except HTTPException:
        raise
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error creating document: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create document")


@router.get("/{document_id}", response_model=DocumentEnvelope)
async def get_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Fetch a single document owned by the current user."""
    try:
        document = DocumentsService(db).get_document(user_id, document_id)
    except Exception as e:
        logger.error(f"Error fetching document: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch document")

    if not document:
        raise HTTPException(status_code=404, detail="Document not found")
    return {"document": document}


@router.delete("/{document_id}")
async def delete_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Delete a document together with its chunks and generated material."""
    try:
        DocumentsService(db).delete_document(user_id, document_id)
        return {"success": True}
    except AppBaseError as e:
        raise app_error_to_http(e)
    except Exception as e:
        logger.error(f"Error deleting document: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete document")
