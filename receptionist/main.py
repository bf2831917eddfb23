import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from receptionist.dependencies import get_settings
from receptionist.domains.whatsapp.handlers import whatsapp_webhook_router
from receptionist.domains.whatsapp.services.wppconnect_service import WppConnectService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    logger.info("Settings loaded: %s", settings.redacted())
    if settings.wppconnect_auto_start:
        # Transport failures at startup are fatal.
        await WppConnectService(settings).start_session(settings.webhook_public_url)
    yield
    logger.info("Shutting down")


app = FastAPI(title="Receptionist", version="0.1.0", lifespan=lifespan)
app.include_router(whatsapp_webhook_router)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
