"""
MCQs feature: Service layer for quiz storage and generation.
"""

import json
import logging
import uuid

from pydantic import ValidationError
from supabase import Client

from studybuddy.core.exceptions import GenerationParseError, ValidationFailedError
from studybuddy.features.documents.service import DocumentsService
from studybuddy.features.mcqs.prompts import MCQ_PROMPT, MCQ_SYSTEM_PROMPT
from studybuddy.features.mcqs.schemas import GeneratedMCQ
from studybuddy.features.rag.generation import extract_json_array, generate_chat
from studybuddy.features.rag.retrieval import build_context, retrieve

logger = logging.getLogger(__name__)

MCQ_QUERY = "study notes content"
MAX_CONTEXT_CHUNKS = 50
OPTIONS_PER_QUESTION = 4


def _answer_index(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_mcqs(items: list, count: int) -> list[dict]:
    """Trim LLM output to ``count`` questions with at most 4 options.

    Each entry is validated with ``GeneratedMCQ``; entries that fail are
    dropped. The answer index is clamped to the options actually kept.
    """
    mcqs = []
    for item in items[:count]:
        if isinstance(item, dict):
            item = {
                **item,
                "correct_answer": _answer_index(item.get("correct_answer")),
                "explanation": item.get("explanation") or "",
            }
        try:
            mcq = GeneratedMCQ.model_validate(item)
        except ValidationError:
            logger.warning(f"⚠️ Skipping malformed MCQ: {item!r}")
            continue

        options = mcq.options[:OPTIONS_PER_QUESTION]
        mcqs.append({
            "question": mcq.question,
            "options": options,
            "correct_answer": max(0, min(len(options) - 1, mcq.correct_answer)),
            "explanation": mcq.explanation,
        })
    if items and not mcqs:
        raise GenerationParseError("MCQs", "no well-formed question in output")
    return mcqs


def decode_options(row: dict) -> dict:
    """Options may be stored as a JSON string; always hand back a list."""
    options = row.get("options")
    if isinstance(options, str):
        row = {**row, "options": json.loads(options)}
    return row


class MCQsService:
    """Multiple-choice questions generated from document context."""

    def __init__(self, db: Client):
        self.db = db

    def list_mcqs(self, user_id: str, document_id: str) -> list[dict]:
        """MCQs of a document, oldest first."""
        result = (
            self.db.table("mcqs")
            .select("*")
            .eq("document_id", document_id)
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [decode_options(row) for row in result.data or []]

    def create_mcqs(self, user_id: str, document_id: str, mcqs: list[dict]) -> list[dict]:
        if not mcqs:
            return []
        rows = [
            {
                "id": str(uuid.uuid4()),
                "document_id": document_id,
                "user_id": user_id,
                **mcq,
            }
            for mcq in mcqs
        ]
        result = self.db.table("mcqs").insert(rows).execute()
        return [decode_options(row) for row in result.data or []]

    async def generate_mcqs(self, user_id: str, document_id: str, count: int = 15) -> list[dict]:
        """Generate up to ``count`` questions from the document.

        Raises:
            NotFoundError: Document missing or not owned by the user.
            ValidationFailedError: No chunks could be retrieved.
            GenerationParseError: LLM output had no usable JSON array.
        """
        DocumentsService(self.db).require_document(user_id, document_id)

        chunks = await retrieve(
            self.db, user_id, MCQ_QUERY, document_id, min(count * 3, MAX_CONTEXT_CHUNKS)
        )
        if not chunks:
            raise ValidationFailedError("No content found in document")

        prompt = MCQ_PROMPT.format(count=count, context=build_context(chunks))
        response = await generate_chat(prompt, MCQ_SYSTEM_PROMPT, 0.7)

        mcqs = normalize_mcqs(extract_json_array(response, "MCQs"), count)
        logger.info(f"📝 Generated {len(mcqs)} MCQs for document {document_id}")
        return self.create_mcqs(user_id, document_id, mcqs)
