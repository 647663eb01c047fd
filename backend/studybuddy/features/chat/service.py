"""
Chat feature: Service layer for per-document tutor conversations.
"""

import logging
import uuid

from supabase import Client

from studybuddy.config import get_settings
from studybuddy.features.chat.prompts import TUTOR_SYSTEM_PROMPT, build_tutor_prompt
from studybuddy.features.documents.service import DocumentsService
from studybuddy.features.rag.generation import generate_chat
from studybuddy.features.rag.retrieval import build_context, retrieve

logger = logging.getLogger(__name__)


class ChatService:
    """Stores chat messages and answers questions with retrieved context."""

    def __init__(self, db: Client):
        self.db = db

    def list_messages(self, user_id: str, document_id: str) -> list[dict]:
        """Messages of one document's conversation, oldest first."""
        result = (
            self.db.table("chat_messages")
            .select("*")
            .eq("document_id", document_id)
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data or []

    def save_message(self, user_id: str, document_id: str, role: str, content: str) -> dict:
        insert_data = {
            "id": str(uuid.uuid4()),
            "document_id": document_id,
            "user_id": user_id,
            "role": role,
            "content": content,
        }
        result = self.db.table("chat_messages").insert(insert_data).execute()
        return result.data[0]

    async def ask(self, user_id: str, document_id: str, question: str) -> dict:
        """Answer a question about a document.

        Flow:
          1. Check the document belongs to the user (NotFoundError otherwise).
          2. Load the last CHAT_HISTORY_WINDOW messages, before saving the new one.
          3. Save the question, retrieve the closest chunks, ask the LLM.
          4. Save and return the answer.
        """
        settings = get_settings()
        DocumentsService(self.db).require_document(user_id, document_id)

        recent_history = [
            {"role": m["role"], "content": m["content"]}
            for m in self.list_messages(user_id, document_id)[-settings.CHAT_HISTORY_WINDOW:]
        ]

        user_message = self.save_message(user_id, document_id, "user", question)

        chunks = await retrieve(
            self.db, user_id, question, document_id, settings.CHAT_CONTEXT_CHUNKS
        )
        prompt = build_tutor_prompt(question, build_context(chunks), recent_history)

        answer = await generate_chat(prompt, TUTOR_SYSTEM_PROMPT, 0.7, recent_history)
        assistant_message = self.save_message(user_id, document_id, "assistant", answer)

        logger.info(f"💬 Answered question on document {document_id} using {len(chunks)} chunks")
        return {
            "message": answer,
            "userMessage": {
                "id": user_message["id"],
                "role": "user",
                "content": question,
            },
            "assistantMessage": {
                "id": assistant_message["id"],
                "role": "assistant",
                "content": answer,
            },
        }
