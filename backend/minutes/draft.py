from __future__ import annotations

"""
Draft meeting minutes from a transcript and agenda.

Design intent:
- Build prompts here, delegate the vendor call to an injected client.
- Derive action items from the returned markdown so the UI and export share them.
"""

from dataclasses import dataclass
from typing import Protocol

from backend.minutes.action_items import extract_action_items
from backend.minutes.models import ActionItem, Agenda
from backend.minutes.prompts import build_system_prompt, build_user_prompt


class MinutesCompletionClient(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str) -> str: ...


@dataclass(frozen=True)
class MinutesDraft:
    minutes: str
    action_items: list[ActionItem]


async def draft_minutes(
    client: MinutesCompletionClient,
    transcript: str,
    agenda: Agenda | None,
    *,
    org_name: str,
    default_location: str,
) -> MinutesDraft:
    minutes = await client.complete(
        build_system_prompt(org_name),
        build_user_prompt(transcript, agenda, default_location=default_location),
    )
    return MinutesDraft(minutes=minutes, action_items=extract_action_items(minutes))
