from __future__ import annotations

from fastapi import Depends

from receptionist.config import Settings
from receptionist.dependencies import get_settings
from receptionist.domains.agent.dependencies import get_intent_classifier, get_response_generator
from receptionist.domains.agent.services.intent_classifier import IntentClassifier
from receptionist.domains.agent.services.response_generator import ResponseGenerator
from receptionist.domains.pipeline.service import MessageDispatcher
from receptionist.domains.tasks.dependencies import get_trello_service
from receptionist.domains.tasks.services.trello_service import TrelloService
from receptionist.domains.whatsapp.dependencies import get_wppconnect_service
from receptionist.domains.whatsapp.services.wppconnect_service import WppConnectService


async def get_dispatcher(
    settings: Settings = Depends(get_settings),
    session: WppConnectService = Depends(get_wppconnect_service),
    generator: ResponseGenerator = Depends(get_response_generator),
    classifier: IntentClassifier = Depends(get_intent_classifier),
    task_filer: TrelloService = Depends(get_trello_service),
) -> MessageDispatcher:
    return MessageDispatcher(
        settings=settings,
        session=session,
        generator=generator,
        classifier=classifier,
        task_filer=task_filer,
    )
