from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class WebhookAck(BaseModel):
    status: Literal["accepted", "ignored", "invalid"]
