"""
Provider-agnostic LLM factory.

Switch LLM provider by changing env vars (no code changes needed):
  LLM_PROVIDER=deepseek | openai | gemini | groq
  LLM_MODEL=deepseek-chat | gpt-4o-mini | gemini-2.0-flash | llama-3.1-70b-versatile
  LLM_API_KEY=your-key
"""

from langchain_core.language_models import BaseChatModel

from studybuddy.config import get_settings


def create_llm(temperature: float | None = None) -> BaseChatModel:
    """Create an LLM instance based on env configuration.

    Args:
        temperature: Per-call override; defaults to LLM_TEMPERATURE.

    Returns:
        BaseChatModel: A LangChain-compatible chat model.

    Raises:
        ValueError: If provider is not supported or no API key is configured.
    """
    settings = get_settings()
    if not settings.LLM_API_KEY:
        raise ValueError("LLM_API_KEY is required. Please set it in your .env file.")

    temp = settings.LLM_TEMPERATURE if temperature is None else temperature

    match settings.LLM_PROVIDER:
        case "deepseek":
            # DeepSeek speaks the OpenAI chat-completions protocol
            from langchain_openai import ChatOpenAI

            return ChatOpenAI(
                model=settings.LLM_MODEL,
                api_key=settings.LLM_API_KEY,
                base_url=settings.LLM_BASE_URL,
                temperature=temp,
            )

        case "openai":
            from langchain_openai import ChatOpenAI

            return ChatOpenAI(
                model=settings.LLM_MODEL,
                api_key=settings.LLM_API_KEY,
                temperature=temp,
            )

        case "gemini":
            from langchain_google_genai import ChatGoogleGenerativeAI

            return ChatGoogleGenerativeAI(
                model=settings.LLM_MODEL,
                google_api_key=settings.LLM_API_KEY,
                temperature=temp,
            )

        case "groq":
            from langchain_groq import ChatGroq

            return ChatGroq(
                model=settings.LLM_MODEL,
                api_key=settings.LLM_API_KEY,
                temperature=temp,
            )

        case _:
            raise ValueError(
                f"Unknown LLM provider: '{settings.LLM_PROVIDER}'. "
                f"Supported: deepseek, openai, gemini, groq"
            )


def create_embeddings():
    """Create an embedding model based on env configuration.

    Returns:
        Embeddings instance for vector generation.
    """
    settings = get_settings()
    api_key = settings.EMBEDDING_API_KEY or settings.LLM_API_KEY
    if not api_key:
        raise ValueError("EMBEDDING_API_KEY is required. Please set it in your .env file.")

    match settings.EMBEDDING_PROVIDER:
        case "gemini":
            from langchain_google_genai import GoogleGenerativeAIEmbeddings

            return GoogleGenerativeAIEmbeddings(
                model=f"models/{settings.EMBEDDING_MODEL}",
                google_api_key=api_key,
                task_type="retrieval_document",
            )

        case "openai":
            from langchain_openai import OpenAIEmbeddings

            return OpenAIEmbeddings(
                model=settings.EMBEDDING_MODEL,
                api_key=api_key,
            )

        case _:
            raise ValueError(
                f"Unknown embedding provider: '{settings.EMBEDDING_PROVIDER}'. "
                f"Supported: gemini, openai"
            )
