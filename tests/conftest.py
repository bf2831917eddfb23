"""Shared pytest fixtures for the receptionist tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("TRELLO_KEY", "trello-key")
os.environ.setdefault("TRELLO_TOKEN", "trello-token")
os.environ.setdefault("TRELLO_LIST_ID", "list-1")
os.environ.setdefault("WPPCONNECT_TOKEN", "wpp-token")

from receptionist.config import Settings  # noqa: E402
from receptionist.domains.pipeline.contracts import InboundMessage, MessageType  # noqa: E402

from .helpers import completion  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openrouter_api_key="test-key",
        trello_key="trello-key",
        trello_token="trello-token",
        trello_list_id="list-1",
        wppconnect_base_url="http://wpp.test",
        wppconnect_session="sess",
        wppconnect_token="wpp-token",
        bot_display_name="Gemini",
        assistant_name="Gemini",
    )


@pytest.fixture
def make_inbound():
    def _make(**overrides) -> InboundMessage:
        fields = {
            "id": "MSG1",
            "conversation_id": "5511999990000@c.us",
            "sender_id": "5511999990000@c.us",
            "sender_display_name": "Ana",
            "body": "Preciso remarcar a reunião de amanhã",
            "is_group": False,
            "type": MessageType.chat,
        }
        fields.update(overrides)
        return InboundMessage(**fields)

    return _make


@pytest.fixture
def llm_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion("Olá!"))
    return client
