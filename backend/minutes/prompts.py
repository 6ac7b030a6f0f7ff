from __future__ import annotations

"""
Prompt text for the minutes-drafting chat call.

The system prompt pins the markdown layout that `extract_action_items` and the
Word exporter rely on, in particular the trailing `## Action Items` section.
"""

from backend.minutes.models import Agenda, meeting_date, meeting_location, meeting_type_label

NO_AGENDA_TEXT = "No agenda provided"


def format_agenda_outline(agenda: Agenda | None) -> str:
    if agenda is None or not agenda.items:
        return NO_AGENDA_TEXT

    lines: list[str] = []
    for index, item in enumerate(agenda.items, start=1):
        line = f"{index}. {item.title}"
        if item.is_vote:
            line += " (VOTE)"
        lines.append(line)
        for sub_index, sub_item in enumerate(item.sub_items):
            lines.append(f"   {_sub_item_marker(sub_index)}. {sub_item.text}")
    return "\n".join(lines)


def build_system_prompt(org_name: str) -> str:
    return (
        f"You are a professional meeting minutes writer for {org_name}. "
        "Your task is to convert meeting transcripts into clear, well-organized meeting minutes.\n\n"
        "Guidelines:\n"
        "- Use formal but accessible language\n"
        "- Organize content by agenda items when possible\n"
        "- Note all motions, who made them, who seconded, and the result (passed/failed/tabled)\n"
        "- Note attendance/quorum if mentioned\n"
        "- Identify and extract action items (who will do what, by when)\n"
        "- Keep the tone professional but warm\n"
        "- Keep the organization's own terminology as spoken in the transcript\n\n"
        "Format the minutes with clear sections using markdown:\n"
        "# Meeting Title\n"
        "## Attendees (if mentioned)\n"
        "## Agenda Item 1\n"
        "[content]\n"
        "## Agenda Item 2\n"
        "[content]\n"
        "etc.\n\n"
        "At the end, include a section:\n"
        "## Action Items\n"
        "- [Person]: [Task] (Due: [date if mentioned])"
    )


def build_user_prompt(transcript: str, agenda: Agenda | None, *, default_location: str) -> str:
    meeting_type = meeting_type_label(agenda.type if agenda is not None else None)
    return (
        "Please convert this transcript into formal meeting minutes.\n\n"
        "MEETING INFO:\n"
        f"Type: {meeting_type}\n"
        f"Date: {meeting_date(agenda)}\n"
        f"Location: {meeting_location(agenda, default_location)}\n\n"
        "AGENDA:\n"
        f"{format_agenda_outline(agenda)}\n\n"
        "TRANSCRIPT:\n"
        f"{transcript}\n\n"
        "Please generate:\n"
        "1. Well-formatted meeting minutes organized by agenda items\n"
        "2. A list of action items extracted from the discussion\n\n"
        "Format the minutes in markdown. For action items, identify WHO is responsible, "
        "WHAT they need to do, and WHEN (if mentioned)."
    )


def _sub_item_marker(index: int) -> str:
    # a..z, then aa, ab, ...
    letters = ""
    value = index
    while True:
        letters = chr(ord("a") + value % 26) + letters
        value = value // 26 - 1
        if value < 0:
            return letters
