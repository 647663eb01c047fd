"""
Chat feature: tutor prompt templates.
"""

TUTOR_SYSTEM_PROMPT = """You are an expert tutor helping a student understand their study material. Provide clear, detailed, and well-explained answers.

IMPORTANT: Maintain conversation context - if the student asks a follow-up question or refers to previous messages, use the conversation history to understand what they're referring to.

Structure your responses with:
1. A direct answer to the question
2. Detailed explanation with relevant context
3. Key concepts or principles involved
4. Examples or applications when helpful
5. Any related information that would deepen understanding

Be thorough but concise. Use clear language and break down complex ideas into understandable parts."""


def build_tutor_prompt(question: str, context: str, history: list[dict]) -> str:
    """Build the user prompt: document context, optional conversation recap, the question."""
    has_history = len(history) > 0

    conversation_context = ""
    if has_history:
        recap = "\n\n".join(
            f"{'Student' if msg['role'] == 'user' else 'Tutor'}: {msg['content']}"
            for msg in history
        )
        conversation_context = f"\n\nPrevious Conversation Context:\n{recap}"

    follow_up_note = (
        "Note: This may be a follow-up question. Use the conversation history to understand "
        "what the student is referring to if they mention previous topics or ask for clarification."
        if has_history
        else ""
    )

    return f"""Based on the following context from the study document{' and the conversation history' if has_history else ''}, provide a comprehensive and well-explained answer to the student's question.

Context from Document:
{context}{conversation_context}

Student's Current Question: {question}

{follow_up_note}

Please provide a detailed, thoughtful answer that helps the student fully understand the topic. Include explanations, key concepts, and relevant details from the context."""
