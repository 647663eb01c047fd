"""
Notes feature: Service layer for generated summary notes (one per document).
"""

import logging
import uuid
from datetime import datetime, timezone

from supabase import Client

from studybuddy.core.exceptions import ValidationFailedError
from studybuddy.features.documents.service import DocumentsService
from studybuddy.features.notes.prompts import NOTES_PROMPT, NOTES_SYSTEM_PROMPT
from studybuddy.features.rag.generation import generate_chat
from studybuddy.features.rag.retrieval import NOTES_PLAN, build_context, gather_context

logger = logging.getLogger(__name__)


class NotesService:
    """Read, upsert and generate the summary note of a document."""

    def __init__(self, db: Client):
        self.db = db

    def get_note(self, user_id: str, document_id: str) -> dict | None:
        result = (
            self.db.table("notes")
            .select("*")
            .eq("document_id", document_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def upsert_note(self, user_id: str, document_id: str, content: str) -> dict:
        """Replace the document's note content, creating the note on first use."""
        if self.get_note(user_id, document_id):
            result = (
                self.db.table("notes")
                .update({
                    "content": content,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })
                .eq("document_id", document_id)
                .eq("user_id", user_id)
                .execute()
            )
            return result.data[0]

        insert_data = {
            "id": str(uuid.uuid4()),
            "document_id": document_id,
            "user_id": user_id,
            "content": content,
        }
        result = self.db.table("notes").insert(insert_data).execute()
        return result.data[0]

    async def generate_notes(self, user_id: str, document_id: str) -> dict:
        """Summarize the document into markdown notes and store them.

        Raises:
            NotFoundError: Document missing or not owned by the user.
            ValidationFailedError: No chunks could be retrieved.
        """
        DocumentsService(self.db).require_document(user_id, document_id)

        chunks = await gather_context(self.db, user_id, document_id, NOTES_PLAN)
        if not chunks:
            raise ValidationFailedError("No content found in document")

        prompt = NOTES_PROMPT.format(context=build_context(chunks))
        content = await generate_chat(prompt, NOTES_SYSTEM_PROMPT, 0.7)

        logger.info(f"🗒️ Generated notes for document {document_id} ({len(content)} chars)")
        return self.upsert_note(user_id, document_id, content)
