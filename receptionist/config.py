from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Raised when settings are missing from the environment or malformed."""


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    # Generation backend (OpenAI-compatible, OpenRouter by default)
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_default_model: str = "google/gemini-flash-1.5"

    # Trello
    trello_key: str = ""
    trello_token: str = ""
    trello_list_id: str = ""
    trello_api_base: str = "https://api.trello.com/1"

    # wppconnect-server
    wppconnect_base_url: str = "http://localhost:21465"
    wppconnect_session: str = "receptionist"
    wppconnect_token: str = ""
    wppconnect_auto_start: bool = False
    webhook_public_url: str = ""

    # Pipeline behaviour
    bot_display_name: str = "Gemini"
    assistant_name: str = "Gemini"
    reply_attribution: str = ""
    history_enabled: bool = True

    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    REQUIRED = (
        "openrouter_api_key",
        "trello_key",
        "trello_token",
        "trello_list_id",
        "wppconnect_token",
    )

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", cls.openrouter_base_url),
            openrouter_default_model=os.getenv("OPENROUTER_DEFAULT_MODEL", cls.openrouter_default_model),
            trello_key=os.getenv("TRELLO_KEY", ""),
            trello_token=os.getenv("TRELLO_TOKEN", ""),
            trello_list_id=os.getenv("TRELLO_LIST_ID", ""),
            trello_api_base=os.getenv("TRELLO_API_BASE", cls.trello_api_base),
            wppconnect_base_url=os.getenv("WPPCONNECT_BASE_URL", cls.wppconnect_base_url),
            wppconnect_session=os.getenv("WPPCONNECT_SESSION", cls.wppconnect_session),
            wppconnect_token=os.getenv("WPPCONNECT_TOKEN", ""),
            wppconnect_auto_start=_env_bool("WPPCONNECT_AUTO_START", "false"),
            webhook_public_url=os.getenv("WEBHOOK_PUBLIC_URL", ""),
            bot_display_name=os.getenv("BOT_DISPLAY_NAME", cls.bot_display_name),
            assistant_name=os.getenv("ASSISTANT_NAME", cls.assistant_name),
            reply_attribution=os.getenv("REPLY_ATTRIBUTION", ""),
            history_enabled=_env_bool("HISTORY_ENABLED", "true"),
            http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS", "30"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def missing(self) -> list[str]:
        return [name for name in self.REQUIRED if not getattr(self, name)]

    def validate(self) -> Settings:
        missing = self.missing()
        if missing:
            raise ConfigError(
                "Missing required settings: " + ", ".join(name.upper() for name in missing)
            )
        if self.http_timeout_seconds <= 0:
            raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be positive, got {self.http_timeout_seconds}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"LOG_LEVEL {self.log_level!r} is not a logging level")
        return self

    def redacted(self) -> dict[str, object]:
        """Settings as a dict with secrets masked, for startup logging."""
        out: dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in self.REQUIRED and value:
                value = f"{str(value)[:4]}***"
            out[f.name] = value
        return out
