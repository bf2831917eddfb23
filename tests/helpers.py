"""Shared test helper functions (not fixtures)."""

from __future__ import annotations

from types import SimpleNamespace


def completion(content):
    """A minimal stand-in for an openai ChatCompletion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15),
    )
