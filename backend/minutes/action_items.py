from __future__ import annotations

"""
Extract structured action items from drafted minutes markdown.

Expected section shape (as requested by the system prompt):

    ## Action Items
    - Jane Doe: Book the hall (Due: March 3)
    - Review the budget

Design intent:
- Scan line by line; a heading titled "Action Items" opens the section and the
  next heading closes it.
- Never fail: lines that do not look like bullets are ignored.
"""

from backend.minutes.models import UNASSIGNED, ActionItem

ACTION_ITEMS_HEADING = "action items"
_BULLET_MARKERS = ("- ", "• ", "* ")
_DUE_OPEN = "(due"


def extract_action_items(markdown: str) -> list[ActionItem]:
    items: list[ActionItem] = []
    in_section = False
    for raw_line in str(markdown or "").splitlines():
        line = raw_line.strip()
        heading = _heading_text(line)
        if heading is not None:
            in_section = heading.strip("*_ ").rstrip(":").strip().lower() == ACTION_ITEMS_HEADING
            continue
        if not in_section:
            continue
        bullet = _bullet_text(line)
        if bullet:
            items.append(parse_action_item(bullet))
    return items


def parse_action_item(text: str) -> ActionItem:
    """Parse `Assignee: Task (Due: date)`; without a colon the item is unassigned."""

    assignee_raw, sep, task_raw = text.partition(":")
    if _DUE_OPEN in assignee_raw.lower():
        # the only colon belongs to "(Due: ...)"
        sep = ""
    if not sep or not assignee_raw.strip() or not task_raw.strip():
        task, due_date = _split_due_date(text.strip())
        return ActionItem(assignee=UNASSIGNED, task=task, due_date=due_date)

    assignee = assignee_raw.strip().strip("*_").strip() or UNASSIGNED
    task, due_date = _split_due_date(task_raw.strip().lstrip("*_").strip())
    return ActionItem(assignee=assignee, task=task, due_date=due_date)


def _split_due_date(task: str) -> tuple[str, str | None]:
    lowered = task.lower()
    start = lowered.find(_DUE_OPEN)
    while start != -1:
        close = task.find(")", start)
        if close == -1:
            break
        inner = task[start + len(_DUE_OPEN):close]
        # "(Due: x)" or "(Due x)", but not "(Duet ...)"
        if inner[:1] in (":", " "):
            due_date = inner.lstrip(":").strip()
            remainder = (task[:start].rstrip() + " " + task[close + 1:].lstrip()).strip()
            if due_date:
                return remainder, due_date
        start = lowered.find(_DUE_OPEN, start + 1)
    return task, None


def _heading_text(line: str) -> str | None:
    level = 0
    while level < len(line) and line[level] == "#":
        level += 1
    if level == 0 or level > 3:
        return None
    rest = line[level:]
    if rest and not rest[0].isspace():
        return None
    return rest.strip()


def _bullet_text(line: str) -> str:
    for marker in _BULLET_MARKERS:
        if line.startswith(marker):
            return line[len(marker):].strip()
    return ""
