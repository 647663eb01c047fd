"""
Documents feature: text extraction and indexing of uploaded documents.
"""

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader
from supabase import Client

from studybuddy.config import get_settings
from studybuddy.features.rag.chunking import chunk_text
from studybuddy.features.rag.embedding import embed_texts
from studybuddy.features.rag.vector_store import add_chunks

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {"txt", "md"}


def extract_text_from_bytes(file_bytes: bytes, filename: str) -> str:
    """
    Extract plain text from an uploaded file.
    PDFs go through PyPDFLoader, which needs a path, so the bytes are
    written to a temp file first. .txt/.md files are decoded directly.
    """
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "pdf"

    if ext in TEXT_EXTENSIONS:
        return file_bytes.decode("utf-8", errors="replace")

    with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as temp_file:
        temp_file.write(file_bytes)
        temp_path = temp_file.name

    try:
        pages = PyPDFLoader(temp_path).load()
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)

    return "\n\n".join(page.page_content for page in pages)


async def ingest_document(db: Client, user_id: str, document_id: str, text: str) -> int:
    """
    Index a document's text for retrieval:
    1. Chunk text (CHUNK_SIZE / CHUNK_OVERLAP, sentence aware).
    2. Embed chunks in batches of EMBEDDING_BATCH_SIZE.
    3. Save to the `document_chunks` table.

    Returns the number of chunks stored.
    """
    settings = get_settings()
    logger.info(f"🚀 Indexing document {document_id} ({len(text)} chars)")

    chunks = chunk_text(text, settings.CHUNK_SIZE, settings.CHUNK_OVERLAP)
    logger.info(f"✅ Generated {len(chunks)} chunks.")

    embeddings = await embed_texts([chunk.text for chunk in chunks])
    add_chunks(db, user_id, document_id, chunks, embeddings)

    logger.info(f"🎉 Document {document_id} indexed.")
    return len(chunks)
