"""wppconnect-server adapter - validate and normalize message payloads."""

from __future__ import annotations

from typing import Any

from receptionist.domains.agent.defaults import DEFAULT_CONTACT_NAME
from receptionist.domains.pipeline.contracts import InboundMessage, MessageType, TranscriptEntry

MESSAGE_EVENT = "onmessage"


class InvalidPayloadError(Exception):
    """Raised when a wppconnect payload has an invalid shape."""


def _serialized_id(value: Any) -> str:
    # wppconnect reports ids either as a plain string or as {"_serialized": "..."}
    if isinstance(value, dict):
        value = value.get("_serialized")
    return value if isinstance(value, str) else ""


def contact_display_name(sender: dict[str, Any] | None, fallback: str = DEFAULT_CONTACT_NAME) -> str:
    """Best available display name of a sender: pushname, verified name, formatted name."""
    sender = sender or {}
    for key in ("pushname", "verifiedName", "formattedName"):
        value = sender.get(key)
        if value:
            return value
    return fallback


def phone_from_chat_id(chat_id: str) -> str:
    return chat_id.split("@", 1)[0]


def normalize_inbound(payload: dict[str, Any]) -> InboundMessage:
    """Normalize an `onmessage` webhook event.

    Raises:
        InvalidPayloadError: If the message id or chat id is missing.
    """
    message_id = _serialized_id(payload.get("id"))
    if not message_id:
        raise InvalidPayloadError("missing or invalid message id")

    conversation_id = _serialized_id(payload.get("chatId")) or _serialized_id(payload.get("from"))
    if not conversation_id:
        raise InvalidPayloadError("missing chat id")

    sender = payload.get("sender") or {}
    sender_id = _serialized_id(sender.get("id")) or _serialized_id(payload.get("author")) or conversation_id

    msg_type = MessageType.chat if payload.get("type") == "chat" else MessageType.other

    return InboundMessage(
        id=message_id,
        conversation_id=conversation_id,
        sender_id=sender_id,
        sender_display_name=contact_display_name(sender, payload.get("notifyName") or DEFAULT_CONTACT_NAME),
        body=payload.get("body") or "",
        is_group=bool(payload.get("isGroupMsg")) or conversation_id.endswith("@g.us"),
        type=msg_type,
    )


def normalize_transcript(records: list[dict[str, Any]]) -> list[TranscriptEntry]:
    """Map stored chat messages to transcript entries, keeping transport order.

    Duplicates and blank bodies are left in place; deduplication is a separate step.
    """
    entries: list[TranscriptEntry] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        from_me = record.get("fromMe")
        body = record.get("body")
        entries.append(
            TranscriptEntry(
                id=_serialized_id(record.get("id")),
                sender_display_name=contact_display_name(record.get("sender"), record.get("notifyName") or ""),
                body=body if isinstance(body, str) else "",
                from_me=from_me if isinstance(from_me, bool) else None,
            )
        )
    return entries
