from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from receptionist.domains.pipeline.contracts import InboundMessage
from receptionist.domains.pipeline.dependencies import get_dispatcher
from receptionist.domains.pipeline.service import MessageDispatcher
from receptionist.domains.whatsapp.adapter import MESSAGE_EVENT, InvalidPayloadError, normalize_inbound
from receptionist.domains.whatsapp.schemas import WebhookAck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"])


async def run_pipeline(dispatcher: MessageDispatcher, inbound: InboundMessage) -> None:
    try:
        await dispatcher.handle_inbound(inbound)
    except Exception:
        logger.exception("Pipeline failed: conversation=%s msg=%s", inbound.conversation_id, inbound.id)


@router.post("", response_model=WebhookAck)
async def receive_event(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: MessageDispatcher = Depends(get_dispatcher),
) -> WebhookAck:
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return WebhookAck(status="invalid")

    if not isinstance(body, dict):
        return WebhookAck(status="ignored")

    event = body.get("event")
    if event != MESSAGE_EVENT:
        logger.debug("Webhook event %s ignored", event)
        return WebhookAck(status="ignored")

    if body.get("fromMe"):
        logger.debug("Own message %s ignored", body.get("id"))
        return WebhookAck(status="ignored")

    try:
        inbound = normalize_inbound(body)
    except InvalidPayloadError as exc:
        logger.warning("Invalid wppconnect payload: %s", exc)
        return WebhookAck(status="invalid")

    logger.info("Received msg=%s from conversation=%s", inbound.id, inbound.conversation_id)
    background_tasks.add_task(run_pipeline, dispatcher, inbound)
    return WebhookAck(status="accepted")
