from __future__ import annotations

from receptionist.domains.pipeline.contracts import InboundMessage, MessageType


def check_group_message(inbound: InboundMessage) -> bool:
    return inbound.is_group


def check_non_chat_type(inbound: InboundMessage) -> bool:
    return inbound.type != MessageType.chat


def rejection_reason(inbound: InboundMessage, require_chat_type: bool = True) -> str | None:
    """Why an inbound message must not enter the pipeline, or None if it may."""
    if check_group_message(inbound):
        return "group message"
    if require_chat_type and check_non_chat_type(inbound):
        return f"unsupported type {inbound.type.value}"
    if not inbound.body.strip():
        return "empty body"
    return None
