"""
StudyBuddy - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in studybuddy/features/ has its own router and service.
  The rag feature holds the shared chunking / embedding / retrieval / generation code.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from studybuddy.config import get_settings
from studybuddy.core.exceptions import (
    AppBaseError,
    app_error_handler,
    http_exception_handler,
    unhandled_error_handler,
    validation_error_handler,
)

# ── Feature Routers ──────────────────────────────────────
from studybuddy.features.documents.router import router as documents_router
from studybuddy.features.chat.router import router as chat_router
from studybuddy.features.flashcards.router import router as flashcards_router
from studybuddy.features.mcqs.router import router as mcqs_router
from studybuddy.features.notes.router import router as notes_router
from studybuddy.features.user_notes.router import router as user_notes_router
from studybuddy.features.rag.embedding import check_embedding_connection


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    print(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")
    print(f"🤖 LLM Provider: {settings.LLM_PROVIDER} ({settings.LLM_MODEL})")
    print(f"🧮 Embeddings: {settings.EMBEDDING_PROVIDER} ({settings.EMBEDDING_MODEL}, {settings.EMBEDDING_DIMENSIONS} dims)")
    print(f"🔗 Supabase: {settings.SUPABASE_URL[:40]}...")
    yield
    print("👋 Shutting down...")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Study assistant: document Q&A, flashcards, quizzes and notes over your own material",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error bodies: always {"error": ...} ──────────────
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppBaseError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # ── Register Feature Routers ─────────────────────────
    app.include_router(documents_router, prefix="/api/documents", tags=["Documents"])
    app.include_router(chat_router, prefix="/api", tags=["Chat"])
    app.include_router(flashcards_router, prefix="/api", tags=["Flashcards"])
    app.include_router(mcqs_router, prefix="/api", tags=["MCQs"])
    app.include_router(notes_router, prefix="/api", tags=["Notes"])
    app.include_router(user_notes_router, prefix="/api", tags=["User Notes"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check(check_embedding: bool = False):
        body = {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }
        if check_embedding:
            body["embedding"] = await check_embedding_connection()
        return body

    return app


app = create_app()
