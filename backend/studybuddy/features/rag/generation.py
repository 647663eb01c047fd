"""
RAG feature: chat-completion wrapper and output parsing helpers.
"""

import json
import logging
import re

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from studybuddy.config import get_settings
from studybuddy.core.exceptions import GenerationParseError
from studybuddy.core.llm_provider import create_llm

logger = logging.getLogger(__name__)

# Greedy: from the first "[" to the last "]"
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def build_messages(
    prompt: str,
    system: str | None = None,
    history: list[dict] | None = None,
) -> list[BaseMessage]:
    """Assemble system prompt, recent history and the new prompt into LangChain messages.

    Only the last CHAT_HISTORY_WINDOW history entries are kept.
    """
    messages: list[BaseMessage] = []
    if system:
        messages.append(SystemMessage(content=system))

    if history:
        window = get_settings().CHAT_HISTORY_WINDOW
        for msg in history[-window:]:
            if msg["role"] == "assistant":
                messages.append(AIMessage(content=msg["content"]))
            else:
                messages.append(HumanMessage(content=msg["content"]))

    messages.append(HumanMessage(content=prompt))
    return messages


def extract_text(content) -> str:
    """Flatten LangChain message content (str or list of blocks) to plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                parts.append(item["text"])
            elif isinstance(item, str):
                parts.append(item)
        return "\n".join(parts)
    return str(content)


async def generate_chat(
    prompt: str,
    system: str | None = None,
    temperature: float = 0.7,
    history: list[dict] | None = None,
) -> str:
    """Run one chat completion and return the raw response text.

    Provider errors propagate to the caller.
    """
    llm = create_llm(temperature=temperature)
    response = await llm.ainvoke(build_messages(prompt, system, history))
    return extract_text(response.content)


def extract_json_array(text: str, what: str = "content") -> list:
    """Parse a JSON array out of free-form LLM output.

    Raises:
        GenerationParseError: If no valid JSON array can be decoded.
    """
    match = _JSON_ARRAY.search(text)
    candidate = match.group(0) if match else text
    try:
        data = json.loads(candidate)
    except ValueError as e:
        logger.error(f"❌ Could not parse generated {what}: {e}")
        raise GenerationParseError(what, str(e)) from e

    if not isinstance(data, list):
        raise GenerationParseError(what, "expected a JSON array")
    return data
