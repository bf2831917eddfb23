from __future__ import annotations

from collections.abc import Iterable

from receptionist.domains.pipeline.contracts import ConversationTurn, TranscriptEntry, TurnRole


def deduplicate(entries: Iterable[TranscriptEntry]) -> list[TranscriptEntry]:
    """Drop repeated ids, missing ids and blank bodies, keeping first-seen order."""
    seen: set[str] = set()
    cleaned: list[TranscriptEntry] = []
    for entry in entries:
        if not entry.id or entry.id in seen:
            continue
        if not entry.body or not entry.body.strip():
            continue
        seen.add(entry.id)
        cleaned.append(entry)
    return cleaned


def is_own_message(entry: TranscriptEntry, own_display_name: str) -> bool:
    if entry.from_me is not None:
        return entry.from_me
    # Fallback when the transport does not tag its own messages.
    return entry.sender_display_name == own_display_name


def build_history(entries: list[TranscriptEntry], own_display_name: str) -> list[ConversationTurn]:
    """Turn a cleaned transcript into role-tagged context.

    The last entry is the live message and is left out of the history.
    """
    return [
        ConversationTurn(
            role=TurnRole.assistant if is_own_message(entry, own_display_name) else TurnRole.user,
            text=entry.body,
        )
        for entry in entries[:-1]
    ]
