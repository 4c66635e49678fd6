"""Shared OpenAI client for model calls."""

from functools import lru_cache

from openai import AsyncOpenAI

from app.core.config import get_settings


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """
    Get the process-wide AsyncOpenAI client (cached singleton).

    The client pools its HTTP connections and is safe to share across
    concurrent requests. Retries are disabled: one failed call is one
    failed request.

    Returns:
        AsyncOpenAI client configured from settings
    """
    settings = get_settings()

    kwargs: dict = {"api_key": settings.OPENAI_API_KEY, "max_retries": 0}
    if settings.OPENAI_TIMEOUT_SECONDS is not None:
        kwargs["timeout"] = settings.OPENAI_TIMEOUT_SECONDS

    return AsyncOpenAI(**kwargs)
