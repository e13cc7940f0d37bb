"""
FitCoach - Completion Client.

Wraps the OpenAI SDK pointed at an OpenAI-compatible endpoint (Groq by
default). All completion calls go through here for consistency and
prompt logging.

No streaming and no retries: one request, one answer or one CompletionError.
"""

import logging

from openai import AsyncOpenAI, OpenAIError

from fitcoach.config import settings
from fitcoach.errors import CompletionError
from fitcoach.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Singleton client instance
_async_client: AsyncOpenAI | None = None


def get_raw_async_client() -> AsyncOpenAI:
    """
    Get the async OpenAI-compatible client.

    Uses singleton pattern to reuse connection.
    """
    global _async_client

    if _async_client is None:
        if not settings.completion_configured:
            raise CompletionError("GROQ_API_KEY is not configured")
        _async_client = AsyncOpenAI(
            api_key=settings.groq_api_key,
            base_url=settings.completion_base_url,
            max_retries=0,
        )

    return _async_client


async def call_llm_chat(
    *,
    messages: list[dict],
    node_name: str = "chat",
    max_tokens: int | None = None,
) -> str:
    """
    Make a plain-text chat completion call.

    Args:
        messages: Ordered role-tagged messages ({"role": ..., "content": ...})
        node_name: Feature name, used for prompt logging
        max_tokens: Optional output cap (falls back to COMPLETION_MAX_TOKENS)

    Returns:
        The generated text

    Raises:
        CompletionError: the call failed or the model returned no text
    """
    client = get_raw_async_client()
    model = settings.completion_model

    api_kwargs = {
        "model": model,
        "messages": messages,
    }
    max_tokens = max_tokens or settings.completion_max_tokens
    if max_tokens:
        api_kwargs["max_tokens"] = max_tokens

    try:
        completion = await client.chat.completions.create(**api_kwargs)
        content = completion.choices[0].message.content
    except OpenAIError as e:
        log_prompt(node=node_name, model=model, messages=messages, error=str(e))
        raise CompletionError(str(e)) from e

    if not content:
        log_prompt(node=node_name, model=model, messages=messages, error="empty response")
        raise CompletionError("Completion returned no text")

    log_prompt(node=node_name, model=model, messages=messages, response=content)
    logger.debug(f"{node_name}: {len(content)} chars from {model}")
    return content
