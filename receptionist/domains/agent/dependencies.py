from __future__ import annotations

from fastapi import Depends
from openai import AsyncOpenAI

from receptionist.config import Settings
from receptionist.dependencies import get_settings
from receptionist.domains.agent.llm.client import get_client
from receptionist.domains.agent.services.intent_classifier import IntentClassifier
from receptionist.domains.agent.services.response_generator import ResponseGenerator


async def get_llm_client(settings: Settings = Depends(get_settings)) -> AsyncOpenAI:
    return get_client(settings)


async def get_response_generator(
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_llm_client),
) -> ResponseGenerator:
    return ResponseGenerator(client, settings.openrouter_default_model)


async def get_intent_classifier(
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_llm_client),
) -> IntentClassifier:
    return IntentClassifier(client, settings.openrouter_default_model)
