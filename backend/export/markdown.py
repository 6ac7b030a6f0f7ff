from __future__ import annotations

"""
Tokenizer for the markdown subset produced by the minutes prompt.

Block grammar (one block per input line, after trimming):
    blank      = ""
    heading    = "#"{1,3} " " text
    bullet     = ("- " | "• ") text
    numbered   = digit+ "." whitespace text      (number kept in text)
    paragraph  = anything else

Inline grammar:
    bold       = "**" text "**"
    italic     = "*" text "*" | "_" text "_"
Unmatched markers are kept as literal text.
"""

from dataclasses import dataclass
from typing import Literal

BlockKind = Literal["blank", "heading", "bullet", "numbered", "paragraph"]

_HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))
_BULLET_PREFIXES = ("- ", "• ")


@dataclass(frozen=True)
class MarkdownBlock:
    kind: BlockKind
    text: str = ""
    level: int = 0


@dataclass(frozen=True)
class InlineSpan:
    text: str
    bold: bool = False
    italic: bool = False


def parse_markdown_blocks(markdown: str) -> list[MarkdownBlock]:
    return [_parse_line(line.strip()) for line in str(markdown or "").split("\n")]


def parse_inline_spans(text: str) -> list[InlineSpan]:
    spans: list[InlineSpan] = []
    plain: list[str] = []

    def flush() -> None:
        if plain:
            spans.append(InlineSpan(text="".join(plain)))
            plain.clear()

    cursor = 0
    length = len(text)
    while cursor < length:
        if text.startswith("**", cursor):
            close = text.find("**", cursor + 2)
            if close != -1:
                flush()
                if close > cursor + 2:
                    spans.append(InlineSpan(text=text[cursor + 2:close], bold=True))
                cursor = close + 2
                continue
            plain.append("**")
            cursor += 2
            continue

        char = text[cursor]
        if char in "*_":
            close = text.find(char, cursor + 1)
            if close != -1:
                flush()
                if close > cursor + 1:
                    spans.append(InlineSpan(text=text[cursor + 1:close], italic=True))
                cursor = close + 1
                continue

        plain.append(char)
        cursor += 1

    flush()
    return spans


def _parse_line(line: str) -> MarkdownBlock:
    if not line:
        return MarkdownBlock(kind="blank")

    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return MarkdownBlock(kind="heading", text=line[len(prefix):].strip(), level=level)

    for prefix in _BULLET_PREFIXES:
        if line.startswith(prefix):
            return MarkdownBlock(kind="bullet", text=line[len(prefix):].strip())

    if _is_numbered(line):
        return MarkdownBlock(kind="numbered", text=line)

    return MarkdownBlock(kind="paragraph", text=line)


def _is_numbered(line: str) -> bool:
    digits = 0
    while digits < len(line) and line[digits].isdigit():
        digits += 1
    if digits == 0 or digits + 1 >= len(line):
        return False
    return line[digits] == "." and line[digits + 1].isspace()
