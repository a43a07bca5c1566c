"""
LLM client for answer synthesis.

One ChatOpenAI client per (model, temperature, max_tokens) combination,
kept in an lru_cache. Without an OpenAI key callers get LLMError
instead of a client, which synthesis turns into its fallback answer.
"""
from functools import lru_cache

from langchain_openai import ChatOpenAI

from philsearch.core.config import settings
from philsearch.core.exceptions import LLMError

DEFAULT_MODEL = "gpt-4o-mini"
# Answers are 2-4 paragraphs
DEFAULT_MAX_TOKENS = 512
REQUEST_TIMEOUT_SECONDS = 30.0


@lru_cache(maxsize=4)
def get_llm(
    model: str = DEFAULT_MODEL,
    temperature: float = 0.7,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> ChatOpenAI:
    """
    Get a cached chat client.

    Raises:
        LLMError: if OPENAI_API_KEY is not configured
    """
    api_key = settings.OPENAI_API_KEY
    if not api_key:
        raise LLMError("OPENAI_API_KEY is not configured")

    return ChatOpenAI(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=REQUEST_TIMEOUT_SECONDS,
        max_retries=1,
        api_key=api_key,
    )


def clear_llm_cache():
    """Drop cached clients, e.g. after the API key changed."""
    get_llm.cache_clear()
