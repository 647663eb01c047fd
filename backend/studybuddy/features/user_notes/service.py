"""
User notes feature: Service layer for the user's own per-document notebook.
"""

import logging
import re
import uuid
from datetime import datetime, timezone

from supabase import Client

from studybuddy.core.exceptions import NotFoundError
from studybuddy.features.documents.service import DocumentsService
from studybuddy.features.rag.generation import generate_chat

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "My Notes"
MAX_TITLE_LENGTH = 60

TABLE_SYSTEM_PROMPT = "You are a helpful assistant that converts text selections into properly formatted markdown tables."
TITLE_SYSTEM_PROMPT = "You are a helpful assistant that creates brief, descriptive titles for study notes."

_WHITESPACE_RUN = re.compile(r"\s{2,}")


def looks_like_table(content: str) -> bool:
    """True if any line has 2+ tabs or 2+ runs of repeated whitespace (copied table cells)."""
    for line in content.split("\n"):
        if line.count("\t") >= 2 or len(_WHITESPACE_RUN.findall(line)) >= 2:
            return True
    return False


def append_separator(now: datetime | None = None) -> str:
    """Markdown rule plus timestamp placed between appended clippings."""
    now = now or datetime.now()
    return f"\n\n---\n\n*Added: {now.strftime('%m/%d/%Y, %I:%M:%S %p')}*\n\n"


class UserNotesService:
    """CRUD for user notes. Clippings are appended to the newest note of the document."""

    def __init__(self, db: Client):
        self.db = db

    def list_user_notes(self, user_id: str, document_id: str) -> list[dict]:
        """User notes of a document, newest first."""
        result = (
            self.db.table("user_notes")
            .select("*")
            .eq("document_id", document_id)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    def get_user_note(self, user_id: str, note_id: str) -> dict | None:
        result = (
            self.db.table("user_notes")
            .select("*")
            .eq("id", note_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def require_user_note(self, user_id: str, document_id: str, note_id: str) -> dict:
        """Fetch a note that must belong to both the user and the document."""
        note = self.get_user_note(user_id, note_id)
        if not note or note["document_id"] != document_id:
            raise NotFoundError("Note")
        return note

    def create_user_note(self, user_id: str, document_id: str, title: str, content: str) -> dict:
        insert_data = {
            "id": str(uuid.uuid4()),
            "document_id": document_id,
            "user_id": user_id,
            "title": title,
            "content": content,
        }
        result = self.db.table("user_notes").insert(insert_data).execute()
        return result.data[0]

    def update_user_note(self, user_id: str, note_id: str, title: str, content: str) -> dict:
        result = (
            self.db.table("user_notes")
            .update({
                "title": title,
                "content": content,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", note_id)
            .eq("user_id", user_id)
            .execute()
        )
        return result.data[0]

    def delete_user_note(self, user_id: str, document_id: str, note_id: str) -> None:
        self.require_user_note(user_id, document_id, note_id)
        self.db.table("user_notes").delete().eq("id", note_id).eq("user_id", user_id).execute()

    async def format_table(self, content: str) -> str:
        """Ask the LLM to turn a pasted table into markdown; keep the original text on any failure."""
        prompt = f"""Convert the following text into a properly formatted markdown table. Preserve all data and structure. Return ONLY the markdown table, nothing else.

Text to convert:
{content}"""
        try:
            formatted = await generate_chat(prompt, TABLE_SYSTEM_PROMPT, 0.3)
        except Exception as e:
            logger.error(f"Error formatting table: {e}")
            return content
        return formatted.strip() or content

    async def generate_title(self, content: str) -> str:
        prompt = f"""Create a brief, descriptive title (maximum {MAX_TITLE_LENGTH} characters) for this note content. Return only the title, nothing else.

Content:
{content[:500]}"""
        title = await generate_chat(prompt, TITLE_SYSTEM_PROMPT, 0.5)
        return title.strip()[:MAX_TITLE_LENGTH] or DEFAULT_TITLE

    async def add_clipping(self, user_id: str, document_id: str, content: str) -> dict:
        """Save a clipping from the document.

        Tabular selections are reformatted as markdown first. The clipping is
        appended to the newest existing note; otherwise a new note is created
        with an LLM-generated title.

        Raises:
            NotFoundError: Document missing or not owned by the user.
        """
        DocumentsService(self.db).require_document(user_id, document_id)

        formatted = content.strip()
        if looks_like_table(formatted):
            formatted = await self.format_table(formatted)

        existing = self.list_user_notes(user_id, document_id)
        if existing:
            note = existing[0]
            updated_content = note["content"] + append_separator() + formatted
            return self.update_user_note(user_id, note["id"], note["title"], updated_content)

        title = await self.generate_title(formatted)
        return self.create_user_note(user_id, document_id, title, formatted)
