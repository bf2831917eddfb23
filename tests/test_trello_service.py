"""Tests for Trello task filing."""

import httpx
import pytest

from receptionist.domains.pipeline.contracts import TaskRecord
from receptionist.domains.tasks.services.trello_service import (
    TaskBoardError,
    TrelloService,
    build_task_record,
)


def test_build_task_record():
    record = build_task_record("Ana", "Preciso de um orçamento", "Vou avisar o Fábio.")

    assert record.title == "Nova Solicitação de Ana"
    assert record.description == (
        "**Mensagem Recebida:**\nPreciso de um orçamento\n\n"
        "**Resposta do Gemini:**\nVou avisar o Fábio."
    )


@pytest.mark.asyncio
async def test_create_card_makes_one_post(settings):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"id": "card-1"})

    service = TrelloService(settings, transport=httpx.MockTransport(handler))
    await service.create_card(TaskRecord(title="Nova Solicitação de Ana", description="desc"))

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/1/cards"
    assert request.url.params["key"] == "trello-key"
    assert request.url.params["token"] == "trello-token"
    assert request.url.params["idList"] == "list-1"
    assert request.url.params["name"] == "Nova Solicitação de Ana"
    assert request.url.params["desc"] == "desc"


@pytest.mark.asyncio
async def test_create_card_error_status_raises(settings):
    service = TrelloService(settings, transport=httpx.MockTransport(lambda r: httpx.Response(401, text="invalid key")))

    with pytest.raises(TaskBoardError, match="401"):
        await service.create_card(TaskRecord(title="t", description="d"))


@pytest.mark.asyncio
async def test_create_card_network_error_raises(settings):
    def handler(request):
        raise httpx.ConnectTimeout("timeout", request=request)

    service = TrelloService(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(TaskBoardError):
        await service.create_card(TaskRecord(title="t", description="d"))
