from backend.minutes.action_items import extract_action_items, parse_action_item
from backend.minutes.models import ActionItem

MINUTES = """# Board of Directors Meeting

## Treasurer's Report
- Balance reviewed: no concerns
- Follow-up items noted

## Action Items
- Maria Lopez: Update the consignment contracts (Due: March 15)
- **Tom**: Order new display lights (due April 1)
- Review the jurying calendar
• Dana: Send the newsletter

## Adjournment
- Someone: Not an action item
"""


def test_extract_action_items_reads_only_action_section() -> None:
    items = extract_action_items(MINUTES)

    assert items == [
        ActionItem(assignee="Maria Lopez", task="Update the consignment contracts", due_date="March 15"),
        ActionItem(assignee="Tom", task="Order new display lights", due_date="April 1"),
        ActionItem(assignee="Unassigned", task="Review the jurying calendar", due_date=None),
        ActionItem(assignee="Dana", task="Send the newsletter", due_date=None),
    ]


def test_extract_action_items_without_section_returns_empty() -> None:
    assert extract_action_items("# Minutes\n- Alice: did a thing\n") == []
    assert extract_action_items("") == []


def test_extract_action_items_section_heading_variants() -> None:
    markdown = "### ACTION ITEMS:\n- Lee: Book the hall\n# Next\n- Kim: ignored\n"
    items = extract_action_items(markdown)
    assert [item.assignee for item in items] == ["Lee"]


def test_parse_action_item_due_date_without_assignee() -> None:
    item = parse_action_item("Renew the insurance policy (Due: June 1)")
    assert item.assignee == "Unassigned"
    assert item.task == "Renew the insurance policy"
    assert item.due_date == "June 1"


def test_parse_action_item_keeps_non_due_parentheses() -> None:
    item = parse_action_item("Sam: Call the printer (ask about paper) (Due: Friday)")
    assert item.assignee == "Sam"
    assert item.task == "Call the printer (ask about paper)"
    assert item.due_date == "Friday"


def test_action_item_serializes_with_camel_case_due_date() -> None:
    item = ActionItem(assignee="Ana", task="Hang show", due_date="May 2")
    assert item.model_dump(by_alias=True) == {"assignee": "Ana", "task": "Hang show", "dueDate": "May 2"}


def test_extract_action_items_ignores_deeper_heading_levels() -> None:
    assert extract_action_items("#### Action Items\n- Lee: Book the hall\n") == []
    markdown = "## Action Items\n- Lee: Book the hall\n#### Follow-up\n- Kim: Call the framer\n"
    assert [item.assignee for item in extract_action_items(markdown)] == ["Lee", "Kim"]
