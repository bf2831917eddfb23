from __future__ import annotations

import logging

from openai import AsyncOpenAI

from receptionist.domains.agent.defaults import (
    LIVE_TURN_TEMPLATE,
    PERSONA_EXAMPLES,
    PERSONA_INSTRUCTION,
    REPLY_MAX_TOKENS,
)
from receptionist.domains.agent.llm.client import (
    GenerationConfig,
    GenerationError,
    build_messages,
    chat_completion,
    get_response_text,
)
from receptionist.domains.pipeline.contracts import ConversationTurn

logger = logging.getLogger(__name__)


class ResponseGenerator:
    """Generates the receptionist's reply for one live message.

    Every call starts from scratch: persona instruction, persona examples,
    the reconstructed history and finally the live turn. Nothing is kept
    between calls.
    """

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self.client = client
        self.model = model
        self.config = GenerationConfig(max_output_tokens=REPLY_MAX_TOKENS)

    async def generate(
        self,
        contact_name: str,
        text: str,
        history: list[ConversationTurn],
    ) -> str:
        context = list(PERSONA_EXAMPLES)
        context.extend({"role": turn.role.value, "content": turn.text} for turn in history)
        live = LIVE_TURN_TEMPLATE.format(contact_name=contact_name, text=text)

        messages = build_messages(PERSONA_INSTRUCTION, context, live)
        response = await chat_completion(self.client, self.model, messages, self.config)

        reply = get_response_text(response)
        if not reply or not reply.strip():
            raise GenerationError("LLM returned an empty reply")
        logger.info("Reply generated: contact=%s history=%d chars=%d", contact_name, len(history), len(reply))
        return reply
