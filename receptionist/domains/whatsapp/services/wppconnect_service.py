from __future__ import annotations

import logging

import httpx

from receptionist.config import Settings
from receptionist.domains.pipeline.contracts import TranscriptEntry
from receptionist.domains.whatsapp.adapter import normalize_transcript, phone_from_chat_id

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """A wppconnect-server call failed."""


class TranscriptError(SessionError):
    """The stored transcript of a chat could not be fetched."""


class WppConnectService:
    """Thin client for the wppconnect-server REST API of one session."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    # ── Session ───────────────────────────────────────────────────────────

    async def start_session(self, webhook_url: str = "") -> dict:
        """Start (or resume) the session and register the webhook."""
        payload = {"webhook": webhook_url, "waitQrCode": False}
        async with self._client() as client:
            try:
                resp = await client.post(self._url("start-session"), json=payload)
            except httpx.HTTPError as exc:
                raise SessionError(f"start-session failed: {exc}") from exc
        if resp.status_code >= 300:
            logger.error("wppconnect start-session failed (%s): %s", resp.status_code, resp.text)
            raise SessionError(f"start-session returned {resp.status_code}")
        data = resp.json()
        logger.info("wppconnect session %s: status=%s", self.settings.wppconnect_session, data.get("status"))
        return data

    # ── Transcript ────────────────────────────────────────────────────────

    async def fetch_transcript(self, conversation_id: str) -> list[TranscriptEntry]:
        phone = phone_from_chat_id(conversation_id)
        params = {"isGroup": "false", "includeMe": "true", "includeNotifications": "false"}
        async with self._client() as client:
            try:
                resp = await client.get(self._url(f"all-messages-in-chat/{phone}"), params=params)
            except httpx.HTTPError as exc:
                raise TranscriptError(f"transcript fetch failed: {exc}") from exc

        if resp.status_code != 200:
            logger.error("wppconnect transcript fetch failed (%s): %s", resp.status_code, resp.text)
            raise TranscriptError(f"all-messages-in-chat returned {resp.status_code}")

        records = resp.json().get("response") or []
        if not isinstance(records, list):
            raise TranscriptError("unexpected transcript payload")
        return normalize_transcript(records)

    # ── Outbound delivery ─────────────────────────────────────────────────

    async def send_text(self, conversation_id: str, text: str) -> None:
        payload = {
            "phone": phone_from_chat_id(conversation_id),
            "message": text,
            "isGroup": False,
        }
        async with self._client() as client:
            try:
                resp = await client.post(self._url("send-message"), json=payload)
            except httpx.HTTPError as exc:
                raise SessionError(f"send-message failed: {exc}") from exc
        if resp.status_code >= 300:
            logger.error("wppconnect send failed (%s): %s", resp.status_code, resp.text)
            raise SessionError(f"send-message returned {resp.status_code}")

    # ── Internal helpers ───────────────────────────────────────────────────

    def _url(self, path: str) -> str:
        base = self.settings.wppconnect_base_url.rstrip("/")
        return f"{base}/api/{self.settings.wppconnect_session}/{path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.http_timeout_seconds,
            headers=self._auth_headers(),
        )

    def _auth_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.settings.wppconnect_token}",
            "Content-Type": "application/json",
        }
