"""
RAG feature: storage and similarity search for document chunks.

Similarity search runs in Postgres (pgvector) through the
``match_document_chunks`` RPC. When the RPC is missing or fails, a smaller
candidate set is pulled back and ranked in-process with cosine similarity.
"""

import json
import logging

import numpy as np
from pydantic import BaseModel
from supabase import Client

from studybuddy.features.rag.chunking import Chunk

logger = logging.getLogger(__name__)

CHUNKS_TABLE = "document_chunks"
MATCH_RPC = "match_document_chunks"
INSERT_BATCH_SIZE = 50


class ChunkResult(BaseModel):
    text: str
    document_id: str
    chunk_index: int
    distance: float  # 1 - cosine similarity


def add_chunks(
    db: Client,
    user_id: str,
    document_id: str,
    chunks: list[Chunk],
    embeddings: list[list[float]],
) -> None:
    """Insert chunks with their embedding vectors.

    Raises:
        ValueError: If chunks and embeddings differ in length.
    """
    if len(chunks) != len(embeddings):
        raise ValueError("Chunks and embeddings arrays must have the same length")

    rows = [
        {
            "document_id": document_id,
            "user_id": user_id,
            "chunk_index": chunk.chunk_index,
            "text": chunk.text,
            "embedding": vector,
        }
        for chunk, vector in zip(chunks, embeddings)
    ]

    # Large documents are inserted in slices so one request stays small
    for i in range(0, len(rows), INSERT_BATCH_SIZE):
        db.table(CHUNKS_TABLE).insert(rows[i:i + INSERT_BATCH_SIZE]).execute()

    logger.info(f"✅ Inserted {len(rows)} chunks for document {document_id}")


def query_chunks(
    db: Client,
    user_id: str,
    query_embedding: list[float],
    document_id: str | None = None,
    n_results: int = 5,
) -> list[ChunkResult]:
    """Return the ``n_results`` chunks most similar to ``query_embedding``.

    Results are scoped to ``user_id`` and, when given, to one document.
    """
    try:
        result = db.rpc(
            MATCH_RPC,
            {
                "query_embedding": query_embedding,
                "match_count": n_results,
                "user_id_filter": user_id,
                "document_id_filter": document_id,
            },
        ).execute()
    except Exception as e:
        logger.warning(f"⚠️ RPC {MATCH_RPC} failed, falling back to in-process similarity: {e}")
        return query_chunks_fallback(db, user_id, query_embedding, document_id, n_results)

    if not result.data:
        return []

    return [
        ChunkResult(
            text=row["text"],
            document_id=row["document_id"],
            chunk_index=row["chunk_index"],
            distance=1 - row["similarity"],
        )
        for row in result.data
    ]


def query_chunks_fallback(
    db: Client,
    user_id: str,
    query_embedding: list[float],
    document_id: str | None = None,
    n_results: int = 5,
) -> list[ChunkResult]:
    """Rank up to ``3 * n_results`` candidate chunks by cosine similarity in-process."""
    query = (
        db.table(CHUNKS_TABLE)
        .select("text, document_id, chunk_index, embedding")
        .eq("user_id", user_id)
    )
    if document_id:
        query = query.eq("document_id", document_id)

    result = query.limit(n_results * 3).execute()
    if not result.data:
        return []

    query_vec = np.asarray(query_embedding, dtype=float)
    scored: list[tuple[float, ChunkResult]] = []

    for row in result.data:
        embedding = _parse_embedding(row.get("embedding"))
        if embedding is None:
            continue

        similarity = cosine_similarity(query_vec, embedding)
        scored.append((
            similarity,
            ChunkResult(
                text=row["text"],
                document_id=row["document_id"],
                chunk_index=row["chunk_index"],
                distance=1 - similarity,
            ),
        ))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [chunk for _, chunk in scored[:n_results]]


def cosine_similarity(a, b) -> float:
    """Cosine similarity of two vectors; 0.0 when either has zero norm or the sizes differ."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        return 0.0
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0
    return float(np.dot(a, b) / denom)


def _parse_embedding(value) -> np.ndarray | None:
    # PostgREST returns pgvector columns as text, e.g. "[0.1,0.2,...]"
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if not isinstance(value, list) or not value:
        return None
    return np.asarray(value, dtype=float)


def delete_document_chunks(db: Client, user_id: str, document_id: str) -> None:
    """Delete every chunk of a document owned by ``user_id``."""
    db.table(CHUNKS_TABLE).delete().eq("document_id", document_id).eq("user_id", user_id).execute()
