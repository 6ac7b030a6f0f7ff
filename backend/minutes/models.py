from __future__ import annotations

"""
Typed agenda and action-item contracts shared by the minutes and export endpoints.

Design intent:
- Accept the camelCase JSON the web client sends and emit the same shape back.
- Keep meeting-type labels and fallbacks in one place for prompts and documents.
"""

from pydantic import BaseModel, ConfigDict, Field

MEETING_TYPE_NAMES: dict[str, str] = {
    "member": "General Membership Meeting",
    "board": "Board of Directors Meeting",
    "committee": "Committee Meeting",
    "special": "Special Meeting",
}
DEFAULT_MEETING_TYPE_LABEL = "Meeting"
DEFAULT_MEETING_DATE = "Unknown Date"
UNASSIGNED = "Unassigned"


class AgendaSubItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""


class AgendaItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    is_vote: bool = Field(default=False, alias="isVote")
    sub_items: list[AgendaSubItem] = Field(default_factory=list, alias="subItems")


class Agenda(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    date: str | None = None
    location: str | None = None
    items: list[AgendaItem] = Field(default_factory=list)


class ActionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    assignee: str = UNASSIGNED
    task: str
    due_date: str | None = Field(default=None, alias="dueDate")


def meeting_type_label(meeting_type: str | None) -> str:
    key = str(meeting_type or "").strip().lower()
    return MEETING_TYPE_NAMES.get(key, DEFAULT_MEETING_TYPE_LABEL)


def meeting_date(agenda: Agenda | None) -> str:
    if agenda is None:
        return DEFAULT_MEETING_DATE
    return str(agenda.date or "").strip() or DEFAULT_MEETING_DATE


def meeting_location(agenda: Agenda | None, default_location: str) -> str:
    if agenda is None:
        return default_location
    return str(agenda.location or "").strip() or default_location
