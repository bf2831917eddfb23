from __future__ import annotations

import logging
from typing import Protocol

from receptionist.config import Settings
from receptionist.domains.messaging.transcript import build_history, deduplicate
from receptionist.domains.pipeline.contracts import (
    ConversationTurn,
    DispatchResult,
    DispatchStage,
    InboundMessage,
    ReplyOutcome,
    TaskOutcome,
    TaskRecord,
    TranscriptEntry,
)
from receptionist.domains.pipeline.guardrails import rejection_reason
from receptionist.domains.tasks.services.trello_service import build_task_record

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    async def fetch_transcript(self, conversation_id: str) -> list[TranscriptEntry]: ...
    async def send_text(self, conversation_id: str, text: str) -> None: ...


class ClassifierProtocol(Protocol):
    async def is_request(self, text: str) -> bool: ...


class GeneratorProtocol(Protocol):
    async def generate(self, contact_name: str, text: str, history: list[ConversationTurn]) -> str: ...


class TaskFilerProtocol(Protocol):
    async def create_card(self, record: TaskRecord) -> None: ...


class MessageDispatcher:
    """Runs one inbound message through the pipeline.

    Two phases, strictly in order: the reply phase (context, generation,
    send) and the task phase (classification, filing). The task phase only
    runs once a reply has been sent, and nothing it does can affect that
    reply. Holds no state across calls, so concurrent events are safe.
    """

    def __init__(
        self,
        settings: Settings,
        session: SessionProtocol,
        generator: GeneratorProtocol,
        classifier: ClassifierProtocol,
        task_filer: TaskFilerProtocol,
    ) -> None:
        self.settings = settings
        self.session = session
        self.generator = generator
        self.classifier = classifier
        self.task_filer = task_filer

    async def handle_inbound(self, inbound: InboundMessage) -> DispatchResult:
        logger.info(
            "Pipeline start: conversation=%s msg=%s type=%s group=%s",
            inbound.conversation_id, inbound.id, inbound.type.value, inbound.is_group,
        )

        # 1. Filtering
        reason = rejection_reason(inbound, require_chat_type=self.settings.history_enabled)
        if reason is not None:
            logger.info("Stage %s - conversation=%s msg=%s: skipped (%s)",
                        DispatchStage.filtering.value, inbound.conversation_id, inbound.id, reason)
            return DispatchResult(
                message_id=inbound.id,
                conversation_id=inbound.conversation_id,
                final_stage=DispatchStage.filtering,
                skipped_reason=reason,
            )

        # 2. Reply phase
        reply = await self._reply_phase(inbound)
        if not reply.sent:
            return DispatchResult(
                message_id=inbound.id,
                conversation_id=inbound.conversation_id,
                final_stage=reply.failed_stage or DispatchStage.generating_reply,
                reply=reply,
            )

        # 3. Task phase
        task = await self._task_phase(inbound, reply.text or "")
        final_stage = DispatchStage.filing_task if task.is_request else DispatchStage.classifying
        logger.info(
            "Pipeline done: conversation=%s msg=%s is_request=%s task_filed=%s",
            inbound.conversation_id, inbound.id, task.is_request, task.filed,
        )
        return DispatchResult(
            message_id=inbound.id,
            conversation_id=inbound.conversation_id,
            final_stage=final_stage,
            reply=reply,
            task=task,
        )

    # ── Reply phase ───────────────────────────────────────────────────────

    async def _reply_phase(self, inbound: InboundMessage) -> ReplyOutcome:
        history: list[ConversationTurn] = []
        if self.settings.history_enabled:
            history = await self._build_context(inbound)

        stage = DispatchStage.generating_reply
        try:
            text = await self.generator.generate(inbound.sender_display_name, inbound.body, history)
        except Exception as exc:
            self._log_failure(stage, inbound)
            return ReplyOutcome(sent=False, failed_stage=stage, error=str(exc))

        stage = DispatchStage.replying
        try:
            await self.session.send_text(inbound.conversation_id, f"{self.settings.reply_attribution}{text}")
        except Exception as exc:
            self._log_failure(stage, inbound)
            return ReplyOutcome(sent=False, text=text, failed_stage=stage, error=str(exc))

        logger.info("Stage %s - conversation=%s msg=%s: reply sent", stage.value, inbound.conversation_id, inbound.id)
        return ReplyOutcome(sent=True, text=text)

    async def _build_context(self, inbound: InboundMessage) -> list[ConversationTurn]:
        stage = DispatchStage.building_context
        try:
            entries = await self.session.fetch_transcript(inbound.conversation_id)
        except Exception:
            logger.warning(
                "Stage %s - conversation=%s msg=%s: transcript unavailable, replying without history",
                stage.value, inbound.conversation_id, inbound.id, exc_info=True,
            )
            return []

        cleaned = deduplicate(entries)
        history = build_history(cleaned, self.settings.bot_display_name)
        logger.info(
            "Stage %s - conversation=%s msg=%s: transcript=%d cleaned=%d history=%d",
            stage.value, inbound.conversation_id, inbound.id, len(entries), len(cleaned), len(history),
        )
        return history

    # ── Task phase ────────────────────────────────────────────────────────

    async def _task_phase(self, inbound: InboundMessage, reply_text: str) -> TaskOutcome:
        stage = DispatchStage.classifying
        try:
            is_request = await self.classifier.is_request(inbound.body)
        except Exception as exc:
            # A failed classification counts as "not a request".
            self._log_failure(stage, inbound)
            return TaskOutcome(is_request=False, failed_stage=stage, error=str(exc))

        if not is_request:
            logger.info("Stage %s - conversation=%s msg=%s: not a request",
                        stage.value, inbound.conversation_id, inbound.id)
            return TaskOutcome(is_request=False)

        stage = DispatchStage.filing_task
        record = build_task_record(
            inbound.sender_display_name, inbound.body, reply_text, self.settings.assistant_name,
        )
        try:
            await self.task_filer.create_card(record)
        except Exception as exc:
            self._log_failure(stage, inbound)
            return TaskOutcome(is_request=True, filed=False, failed_stage=stage, error=str(exc))

        logger.info("Stage %s - conversation=%s msg=%s: task filed", stage.value, inbound.conversation_id, inbound.id)
        return TaskOutcome(is_request=True, filed=True)

    @staticmethod
    def _log_failure(stage: DispatchStage, inbound: InboundMessage) -> None:
        logger.exception(
            "Stage %s failed: conversation=%s msg=%s",
            stage.value, inbound.conversation_id, inbound.id,
        )
