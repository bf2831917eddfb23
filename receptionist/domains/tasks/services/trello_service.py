from __future__ import annotations

import logging

import httpx

from receptionist.config import Settings
from receptionist.domains.pipeline.contracts import TaskRecord

logger = logging.getLogger(__name__)

TITLE_TEMPLATE = "Nova Solicitação de {contact_name}"
DESCRIPTION_TEMPLATE = (
    "**Mensagem Recebida:**\n{body}\n\n"
    "**Resposta do {assistant_name}:**\n{reply}"
)


class TaskBoardError(Exception):
    """The task board rejected or failed a card creation."""


def build_task_record(contact_name: str, body: str, reply: str, assistant_name: str = "Gemini") -> TaskRecord:
    return TaskRecord(
        title=TITLE_TEMPLATE.format(contact_name=contact_name),
        description=DESCRIPTION_TEMPLATE.format(body=body, reply=reply, assistant_name=assistant_name),
    )


class TrelloService:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    async def create_card(self, record: TaskRecord) -> None:
        """Create one card on the configured list. Not idempotent."""
        url = f"{self.settings.trello_api_base}/cards"
        params = {
            "key": self.settings.trello_key,
            "token": self.settings.trello_token,
            "idList": self.settings.trello_list_id,
            "name": record.title,
            "desc": record.description,
        }

        async with httpx.AsyncClient(transport=self._transport, timeout=self.settings.http_timeout_seconds) as client:
            try:
                resp = await client.post(url, params=params)
            except httpx.HTTPError as exc:
                raise TaskBoardError(f"Trello request failed: {exc}") from exc

        if resp.status_code >= 300:
            logger.error("Trello card creation failed (%s): %s", resp.status_code, resp.text)
            raise TaskBoardError(f"Trello returned {resp.status_code}")
        logger.info("Trello card created on list %s: %s", self.settings.trello_list_id, record.title)
