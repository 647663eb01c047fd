"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "studybuddy"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"  # comma-separated

    # ── Supabase ─────────────────────────────────────────
    SUPABASE_URL: str
    SUPABASE_KEY: str  # anon/public key
    SUPABASE_SERVICE_KEY: str = ""  # service_role key, preferred for server-side queries

    # ── Auth (Supabase-issued access tokens) ─────────────
    SUPABASE_JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    # ── LLM (Provider-Agnostic) ──────────────────────────
    LLM_PROVIDER: str = "deepseek"  # deepseek | openai | gemini | groq
    LLM_MODEL: str = "deepseek-chat"
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.deepseek.com/v1"  # only used by OpenAI-compatible providers
    LLM_TEMPERATURE: float = 0.7

    # ── Embedding ────────────────────────────────────────
    EMBEDDING_PROVIDER: str = "gemini"  # gemini | openai
    EMBEDDING_MODEL: str = "text-embedding-004"
    EMBEDDING_API_KEY: str = ""
    EMBEDDING_DIMENSIONS: int = 768
    EMBEDDING_BATCH_SIZE: int = 5  # concurrent embedding calls per batch

    # ── RAG ──────────────────────────────────────────────
    CHUNK_SIZE: int = 2000
    CHUNK_OVERLAP: int = 400
    MAX_UPLOAD_SIZE_MB: int = 25
    CHAT_HISTORY_WINDOW: int = 6  # last 3 exchanges
    CHAT_CONTEXT_CHUNKS: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
