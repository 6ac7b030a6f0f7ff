from backend.export.markdown import InlineSpan, MarkdownBlock, parse_inline_spans, parse_markdown_blocks


def test_parse_markdown_blocks_classifies_each_line() -> None:
    markdown = "# Title\n\n## Section\n### Detail\n- bullet one\n  • bullet two\n3. third item\n2025 was busy\nplain text"

    blocks = parse_markdown_blocks(markdown)

    assert blocks == [
        MarkdownBlock(kind="heading", text="Title", level=1),
        MarkdownBlock(kind="blank"),
        MarkdownBlock(kind="heading", text="Section", level=2),
        MarkdownBlock(kind="heading", text="Detail", level=3),
        MarkdownBlock(kind="bullet", text="bullet one"),
        MarkdownBlock(kind="bullet", text="bullet two"),
        MarkdownBlock(kind="numbered", text="3. third item"),
        MarkdownBlock(kind="paragraph", text="2025 was busy"),
        MarkdownBlock(kind="paragraph", text="plain text"),
    ]


def test_parse_markdown_blocks_deeper_headings_are_paragraphs() -> None:
    assert parse_markdown_blocks("#### Too deep") == [MarkdownBlock(kind="paragraph", text="#### Too deep")]
    assert parse_markdown_blocks("#NoSpace") == [MarkdownBlock(kind="paragraph", text="#NoSpace")]


def test_parse_inline_spans_bold_and_italic() -> None:
    spans = parse_inline_spans("Motion by **Ana**, seconded by *Lee* and _passed_.")
    assert spans == [
        InlineSpan(text="Motion by "),
        InlineSpan(text="Ana", bold=True),
        InlineSpan(text=", seconded by "),
        InlineSpan(text="Lee", italic=True),
        InlineSpan(text=" and "),
        InlineSpan(text="passed", italic=True),
        InlineSpan(text="."),
    ]


def test_parse_inline_spans_unmatched_markers_stay_literal() -> None:
    assert parse_inline_spans("5 ** 2 and a * b") == [InlineSpan(text="5 ** 2 and a * b")]
    assert parse_inline_spans("") == []
    assert parse_inline_spans("****") == []
