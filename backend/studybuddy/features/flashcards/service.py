"""
Flashcards feature: Service layer for flashcard storage and generation.
"""

import logging
import uuid

from pydantic import ValidationError
from supabase import Client

from studybuddy.core.exceptions import GenerationParseError, ValidationFailedError
from studybuddy.features.documents.service import DocumentsService
from studybuddy.features.flashcards.prompts import FLASHCARDS_PROMPT, FLASHCARDS_SYSTEM_PROMPT
from studybuddy.features.flashcards.schemas import GeneratedFlashcard
from studybuddy.features.rag.generation import extract_json_array, generate_chat
from studybuddy.features.rag.retrieval import FLASHCARD_PLAN, build_context, gather_context

logger = logging.getLogger(__name__)


def parse_flashcards(response: str) -> list[GeneratedFlashcard]:
    """Pull flashcards out of raw LLM output, skipping malformed entries."""
    items = extract_json_array(response, "flashcards")
    cards = []
    for item in items:
        try:
            cards.append(GeneratedFlashcard.model_validate(item))
        except ValidationError:
            logger.warning(f"⚠️ Skipping malformed flashcard: {item!r}")
    if items and not cards:
        raise GenerationParseError("flashcards", "no entry had both front and back")
    return cards


class FlashcardsService:
    """Flashcards are generated from retrieved document context and stored per user."""

    def __init__(self, db: Client):
        self.db = db

    def list_flashcards(self, user_id: str, document_id: str) -> list[dict]:
        """Flashcards of a document, oldest first."""
        result = (
            self.db.table("flashcards")
            .select("*")
            .eq("document_id", document_id)
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data or []

    def create_flashcards(
        self, user_id: str, document_id: str, cards: list[GeneratedFlashcard]
    ) -> list[dict]:
        if not cards:
            return []
        rows = [
            {
                "id": str(uuid.uuid4()),
                "document_id": document_id,
                "user_id": user_id,
                "front": card.front,
                "back": card.back,
            }
            for card in cards
        ]
        result = self.db.table("flashcards").insert(rows).execute()
        return result.data or []

    async def generate_flashcards(self, user_id: str, document_id: str) -> list[dict]:
        """Generate topic-wise flashcards covering the whole document.

        Raises:
            NotFoundError: Document missing or not owned by the user.
            ValidationFailedError: No chunks could be retrieved.
            GenerationParseError: LLM output had no usable JSON array.
        """
        DocumentsService(self.db).require_document(user_id, document_id)

        chunks = await gather_context(self.db, user_id, document_id, FLASHCARD_PLAN)
        if not chunks:
            raise ValidationFailedError("No content found in document")

        prompt = FLASHCARDS_PROMPT.format(context=build_context(chunks))
        response = await generate_chat(prompt, FLASHCARDS_SYSTEM_PROMPT, 0.7)

        cards = parse_flashcards(response)
        logger.info(f"🃏 Generated {len(cards)} flashcards for document {document_id}")
        return self.create_flashcards(user_id, document_id, cards)
