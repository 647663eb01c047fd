"""
RAG feature: sentence-aware text chunking with character overlap.
"""

import re

from pydantic import BaseModel

# Whitespace that follows sentence-ending punctuation
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


class Chunk(BaseModel):
    text: str
    chunk_index: int


def chunk_text(text: str, chunk_size: int = 1000, overlap: int = 200) -> list[Chunk]:
    """Split text into overlapping windows on sentence boundaries.

    Sentences are accumulated until the next one would push the window past
    ``chunk_size``. The window is then closed and the next one starts with
    the last ``overlap`` characters of the closed window, so neighbouring
    chunks share context.

    A sentence longer than ``chunk_size`` is kept whole as its own chunk.

    Args:
        text: Raw document text.
        chunk_size: Target maximum characters per chunk.
        overlap: Characters carried over from the previous chunk.

    Returns:
        Ordered chunks with contiguous indexes starting at 0.
        Empty or whitespace-only input yields an empty list.
    """
    chunks: list[Chunk] = []
    sentences = _SENTENCE_BOUNDARY.split(text)

    current = ""
    chunk_index = 0

    for sentence in sentences:
        if len(current) + len(sentence) > chunk_size and len(current) > 0:
            chunks.append(Chunk(text=current.strip(), chunk_index=chunk_index))
            chunk_index += 1

            overlap_text = current[-overlap:] if overlap > 0 else ""
            current = f"{overlap_text} {sentence}"
        else:
            current += (" " if current else "") + sentence

    if current.strip():
        chunks.append(Chunk(text=current.strip(), chunk_index=chunk_index))

    return chunks
