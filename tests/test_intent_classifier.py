"""Tests for intent classification."""

from unittest.mock import AsyncMock

import pytest

from receptionist.domains.agent.defaults import CLASSIFICATION_INSTRUCTION
from receptionist.domains.agent.llm.client import GenerationError
from receptionist.domains.agent.services.intent_classifier import IntentClassifier, is_affirmative

from .helpers import completion


class TestIsAffirmative:
    @pytest.mark.parametrize(
        "reply",
        ["Sim, é uma solicitação.", "SIM", "Isso é um pedido", "Trata-se de uma SOLICITAÇÃO"],
    )
    def test_markers_are_requests(self, reply):
        assert is_affirmative(reply) is True

    @pytest.mark.parametrize("reply", ["Não é.", "Apenas um cumprimento", "", None])
    def test_other_replies_are_not_requests(self, reply):
        assert is_affirmative(reply) is False


class TestIntentClassifier:
    @pytest.mark.asyncio
    async def test_affirmative_backend_reply(self, llm_client):
        llm_client.chat.completions.create.return_value = completion("Sim, é uma solicitação.")
        classifier = IntentClassifier(llm_client, "test-model")

        assert await classifier.is_request("Pode agendar uma reunião?") is True

    @pytest.mark.asyncio
    async def test_negative_backend_reply(self, llm_client):
        llm_client.chat.completions.create.return_value = completion("Não é.")
        classifier = IntentClassifier(llm_client, "test-model")

        assert await classifier.is_request("Bom dia!") is False

    @pytest.mark.asyncio
    async def test_sends_instruction_seed_and_text(self, llm_client):
        classifier = IntentClassifier(llm_client, "test-model")

        await classifier.is_request("Pode agendar uma reunião?")

        kwargs = llm_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 1024
        assert kwargs["extra_body"] == {"top_k": 64}
        assert kwargs["messages"] == [
            {"role": "system", "content": CLASSIFICATION_INSTRUCTION},
            {"role": "user", "content": "Esta é uma solicitação?"},
            {"role": "user", "content": "Pode agendar uma reunião?"},
        ]

    @pytest.mark.asyncio
    async def test_backend_failure_raises_generation_error(self, llm_client):
        llm_client.chat.completions.create = AsyncMock(side_effect=RuntimeError("backend down"))
        classifier = IntentClassifier(llm_client, "test-model")

        with pytest.raises(GenerationError, match="backend down"):
            await classifier.is_request("Oi")
