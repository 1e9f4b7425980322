"""LLM gateway using OpenAI gpt-4o-mini for incident classification.

Takes a system/user message pair and returns the raw completion text. The
text is not inspected here; provider and transport errors are converted to
TransportFailure and are not retried.
"""

import logging
from dataclasses import dataclass, field

import openai

from services.api.src.incident_api.config import settings
from services.api.src.incident_api.core.errors import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMResult:
    text: str
    model: str
    token_usage: dict = field(default_factory=dict)


def _client() -> openai.OpenAI:
    return openai.OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_seconds,
        max_retries=settings.openai_max_retries,
    )


def complete_with_usage(system_prompt: str, user_message: str) -> LLMResult:
    """Run one chat completion and return its text plus token usage."""
    if not settings.openai_api_key:
        logger.error("openai_api_key not set, cannot classify incident")
        raise TransportFailure("OPENAI_API_KEY is not configured")

    try:
        response = _client().chat.completions.create(
            model=settings.openai_model_text,
            temperature=settings.openai_temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        )
    except openai.OpenAIError as exc:
        logger.error("openai_call_failed", extra={
            "error_type": type(exc).__name__, "error": str(exc),
        })
        raise TransportFailure(f"{type(exc).__name__}: {exc}") from exc

    text = response.choices[0].message.content if response.choices else None
    if text is None:
        raise TransportFailure("provider returned no completion content")

    usage = {}
    if response.usage:
        usage = {
            "prompt_tokens": response.usage.prompt_tokens,
            "completion_tokens": response.usage.completion_tokens,
            "total_tokens": response.usage.total_tokens,
        }

    logger.debug("openai_call_complete", extra={
        "model": settings.openai_model_text, "token_usage": usage,
    })
    return LLMResult(text=text, model=settings.openai_model_text, token_usage=usage)


def complete(system_prompt: str, user_message: str) -> str:
    """Return the raw completion text for a system/user message pair."""
    return complete_with_usage(system_prompt, user_message).text
