"""
RAG feature: context assembly for generation.

Generation endpoints want broad coverage of a document rather than the
closest match to one question, so they probe it with several synthetic
queries and merge the results.
"""

import logging
from dataclasses import dataclass

from supabase import Client

from studybuddy.features.rag.embedding import embed_text
from studybuddy.features.rag.vector_store import ChunkResult, query_chunks

logger = logging.getLogger(__name__)

GENERIC_QUERY = "study material content"


@dataclass(frozen=True)
class RetrievalPlan:
    """Which queries to run and how many chunks to ask for."""
    query_terms: tuple[str, ...]
    per_query: int
    min_chunks: int
    fallback_count: int
    fallback_query: str = GENERIC_QUERY


FLASHCARD_PLAN = RetrievalPlan(
    query_terms=(
        "key concepts and definitions",
        "important topics and themes",
        "main ideas and principles",
        "relationships and applications",
        "examples and case studies",
    ),
    per_query=10,
    min_chunks=20,
    fallback_count=30,
)

NOTES_PLAN = RetrievalPlan(
    query_terms=(
        "key concepts and main ideas",
        "important topics and themes",
        "definitions and explanations",
        "relationships and connections",
        "examples and applications",
    ),
    per_query=15,
    min_chunks=30,
    fallback_count=50,
)


async def retrieve(
    db: Client,
    user_id: str,
    query: str,
    document_id: str | None = None,
    n_results: int = 5,
) -> list[ChunkResult]:
    """Embed ``query`` and return the closest chunks."""
    query_embedding = await embed_text(query)
    return query_chunks(db, user_id, query_embedding, document_id, n_results)


async def gather_context(
    db: Client,
    user_id: str,
    document_id: str,
    plan: RetrievalPlan,
) -> list[ChunkResult]:
    """Run every query in ``plan`` and merge the results.

    Chunks are deduplicated by ``chunk_index``; the first occurrence wins,
    so the result keeps query order. If fewer than ``plan.min_chunks``
    distinct chunks came back, a generic query tops the set up.
    This is a coverage heuristic, it does not guarantee every chunk is seen.
    """
    collected: list[ChunkResult] = []
    seen: set[int] = set()

    def merge(results: list[ChunkResult]) -> None:
        for chunk in results:
            if chunk.chunk_index not in seen:
                seen.add(chunk.chunk_index)
                collected.append(chunk)

    for term in plan.query_terms:
        merge(await retrieve(db, user_id, term, document_id, plan.per_query))

    if len(collected) < plan.min_chunks:
        merge(await retrieve(db, user_id, plan.fallback_query, document_id, plan.fallback_count))

    logger.info(f"📚 Gathered {len(collected)} distinct chunks for document {document_id}")
    return collected


def build_context(chunks: list[ChunkResult]) -> str:
    """Join chunk texts into one prompt context block."""
    return "\n\n".join(chunk.text for chunk in chunks)
