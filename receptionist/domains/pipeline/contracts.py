from __future__ import annotations

import enum
from dataclasses import dataclass


class MessageType(str, enum.Enum):
    chat = "chat"
    other = "other"


class TurnRole(str, enum.Enum):
    user = "user"
    assistant = "assistant"


class DispatchStage(str, enum.Enum):
    filtering = "filtering"
    building_context = "building-context"
    generating_reply = "generating-reply"
    replying = "replying"
    classifying = "classifying"
    filing_task = "filing-task"


@dataclass(frozen=True)
class InboundMessage:
    id: str
    conversation_id: str
    sender_id: str
    sender_display_name: str
    body: str
    is_group: bool
    type: MessageType


@dataclass(frozen=True)
class TranscriptEntry:
    id: str
    sender_display_name: str
    body: str
    # Transport's own "sent by this session" flag; None when it is not reported.
    from_me: bool | None = None


@dataclass(frozen=True)
class ConversationTurn:
    role: TurnRole
    text: str


@dataclass(frozen=True)
class TaskRecord:
    title: str
    description: str


@dataclass(frozen=True)
class ReplyOutcome:
    """Result of the reply phase. `text` is the raw generated reply."""

    sent: bool
    text: str | None = None
    failed_stage: DispatchStage | None = None
    error: str | None = None


@dataclass(frozen=True)
class TaskOutcome:
    """Result of the classify/file phase."""

    is_request: bool
    filed: bool = False
    failed_stage: DispatchStage | None = None
    error: str | None = None


@dataclass(frozen=True)
class DispatchResult:
    message_id: str
    conversation_id: str
    final_stage: DispatchStage
    skipped_reason: str | None = None
    reply: ReplyOutcome | None = None
    task: TaskOutcome | None = None
