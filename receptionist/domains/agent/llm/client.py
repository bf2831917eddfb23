from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from receptionist.config import Settings

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The generation backend was unreachable, rejected the request or returned nothing."""


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 1.0
    top_p: float = 0.95
    top_k: int = 64
    max_output_tokens: int = 8192
    response_format: str = "text"


@lru_cache
def get_client(settings: Settings) -> AsyncOpenAI:
    # One client per settings; no SDK-level retries, a failed call fails its stage once.
    return AsyncOpenAI(
        base_url=settings.openrouter_base_url,
        api_key=settings.openrouter_api_key,
        max_retries=0,
    )


def build_messages(system_instruction: str, history: list[dict], user_text: str) -> list[dict]:
    messages = [{"role": "system", "content": system_instruction}]
    messages.extend(history)
    messages.append({"role": "user", "content": user_text})
    return messages


async def chat_completion(
    client: AsyncOpenAI,
    model: str,
    messages: list[dict],
    config: GenerationConfig,
) -> ChatCompletion:
    logger.info("LLM request: model=%s messages=%d max_tokens=%d", model, len(messages), config.max_output_tokens)
    start = time.monotonic()

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_output_tokens,
            response_format={"type": config.response_format},
            extra_body={"top_k": config.top_k},
        )
    except Exception as exc:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.exception("LLM call failed: model=%s elapsed=%dms", model, elapsed_ms)
        raise GenerationError(f"LLM call failed: {exc}") from exc

    elapsed_ms = int((time.monotonic() - start) * 1000)
    usage = response.usage
    logger.info(
        "LLM response: model=%s elapsed=%dms prompt_tokens=%s completion_tokens=%s total_tokens=%s",
        model, elapsed_ms,
        usage.prompt_tokens if usage else "?",
        usage.completion_tokens if usage else "?",
        usage.total_tokens if usage else "?",
    )
    return response


def get_response_text(response: ChatCompletion) -> str | None:
    """Extract the text content from a ChatCompletion response."""
    if not response.choices:
        return None
    return response.choices[0].message.content
