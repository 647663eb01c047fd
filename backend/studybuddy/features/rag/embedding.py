"""
RAG feature: Embedding utility functions.
Wraps the configured embedding model for use across the app.
"""

import asyncio
import logging

from studybuddy.config import get_settings
from studybuddy.core.exceptions import EmbeddingError
from studybuddy.core.llm_provider import create_embeddings

logger = logging.getLogger(__name__)

# Singleton embedding model (lazy init)
_embeddings_model = None


def get_embeddings_model():
    """Get or create the shared embeddings model instance."""
    global _embeddings_model
    if _embeddings_model is None:
        _embeddings_model = create_embeddings()
    return _embeddings_model


async def embed_text(text: str) -> list[float]:
    """Generate embedding vector for a single text string.

    Args:
        text: The text to embed.

    Returns:
        A list of floats, truncated to EMBEDDING_DIMENSIONS.

    Raises:
        EmbeddingError: If the provider returns an empty vector.
    """
    settings = get_settings()
    model = get_embeddings_model()
    vector = await model.aembed_query(text)
    if not vector:
        raise EmbeddingError("empty or invalid response from embedding provider")
    return list(vector[:settings.EMBEDDING_DIMENSIONS])


async def embed_texts(texts: list[str], batch_size: int | None = None) -> list[list[float]]:
    """Generate embedding vectors for multiple texts.

    Texts are sent in batches; calls inside a batch run concurrently and
    the batches themselves run one after another so the provider is not
    flooded with requests.

    Args:
        texts: List of text strings to embed.
        batch_size: Calls per batch, defaults to EMBEDDING_BATCH_SIZE.

    Returns:
        List of embedding vectors, in the same order as ``texts``.
    """
    size = batch_size or get_settings().EMBEDDING_BATCH_SIZE
    total_batches = (len(texts) + size - 1) // size
    vectors: list[list[float]] = []

    for i in range(0, len(texts), size):
        batch = texts[i:i + size]
        logger.debug(f"🔄 Embedding batch {i // size + 1}/{total_batches}...")
        vectors.extend(await asyncio.gather(*(embed_text(t) for t in batch)))

    return vectors


async def check_embedding_connection() -> bool:
    """Return True if the embedding provider answers a test request."""
    try:
        await embed_text("test")
        return True
    except Exception as e:
        logger.warning(f"⚠️ Embedding provider check failed: {e}")
        return False
