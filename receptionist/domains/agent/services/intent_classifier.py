from __future__ import annotations

import logging

from openai import AsyncOpenAI

from receptionist.domains.agent.defaults import (
    CLASSIFICATION_INSTRUCTION,
    CLASSIFICATION_MAX_TOKENS,
    CLASSIFICATION_SEED,
    REQUEST_MARKERS,
)
from receptionist.domains.agent.llm.client import (
    GenerationConfig,
    build_messages,
    chat_completion,
    get_response_text,
)

logger = logging.getLogger(__name__)


def is_affirmative(reply: str | None) -> bool:
    """Reduce a classifier reply to a boolean using the request markers."""
    if not reply:
        return False
    lower = reply.lower()
    return any(marker in lower for marker in REQUEST_MARKERS)


class IntentClassifier:
    """Asks the backend whether a message is an actionable request.

    The answer is a heuristic gate; the backend is not deterministic.
    Backend failures raise GenerationError and are left to the caller.
    """

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self.client = client
        self.model = model
        self.config = GenerationConfig(max_output_tokens=CLASSIFICATION_MAX_TOKENS)

    async def is_request(self, text: str) -> bool:
        messages = build_messages(CLASSIFICATION_INSTRUCTION, list(CLASSIFICATION_SEED), text)
        response = await chat_completion(self.client, self.model, messages, self.config)
        reply = get_response_text(response)
        result = is_affirmative(reply)
        logger.info("Classification: is_request=%s reply=%r", result, (reply or "")[:80])
        return result
