"""
Documents feature: Service layer for document records.
"""

import uuid

from supabase import Client

from studybuddy.core.exceptions import NotFoundError
from studybuddy.features.rag.vector_store import delete_document_chunks


class DocumentsService:
    """CRUD operations for documents, always scoped to the owning user."""

    def __init__(self, db: Client):
        self.db = db

    def list_documents(self, user_id: str) -> list[dict]:
        """List documents for a user, newest first."""
        result = (
            self.db.table("documents")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    def get_document(self, user_id: str, document_id: str) -> dict | None:
        """Fetch one document, or None if it is missing or owned by someone else."""
        result = (
            self.db.table("documents")
            .select("*")
            .eq("id", document_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def require_document(self, user_id: str, document_id: str) -> dict:
        """Like get_document, but raises NotFoundError instead of returning None."""
        document = self.get_document(user_id, document_id)
        if document is None:
            raise NotFoundError("Document")
        return document

    def create_document(
        self,
        user_id: str,
        title: str,
        content_type: str,
        filename: str | None = None,
    ) -> dict:
        """Insert a document record and return it."""
        insert_data = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "title": title,
            "filename": filename,
            "content_type": content_type,
        }
        result = self.db.table("documents").insert(insert_data).execute()
        return result.data[0]

    def delete_document(self, user_id: str, document_id: str) -> None:
        """Delete a document and its chunks.

        Chunks go first; flashcards, MCQs, messages and notes are removed by
        the database's ON DELETE CASCADE.
        """
        self.require_document(user_id, document_id)
        delete_document_chunks(self.db, user_id, document_id)
        self.db.table("documents").delete().eq("id", document_id).eq("user_id", user_id).execute()
