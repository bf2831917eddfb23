from __future__ import annotations

from fastapi import Depends

from receptionist.config import Settings
from receptionist.dependencies import get_settings
from receptionist.domains.tasks.services.trello_service import TrelloService


async def get_trello_service(settings: Settings = Depends(get_settings)) -> TrelloService:
    return TrelloService(settings)
