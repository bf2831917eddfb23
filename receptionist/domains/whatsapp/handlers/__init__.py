from receptionist.domains.whatsapp.handlers.webhook import router as webhook_router

__all__ = ["whatsapp_webhook_router"]

whatsapp_webhook_router = webhook_router
