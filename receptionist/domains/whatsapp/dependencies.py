from __future__ import annotations

from fastapi import Depends

from receptionist.config import Settings
from receptionist.dependencies import get_settings
from receptionist.domains.whatsapp.services.wppconnect_service import WppConnectService


async def get_wppconnect_service(settings: Settings = Depends(get_settings)) -> WppConnectService:
    return WppConnectService(settings)
