from __future__ import annotations

"""
Tokenize parameterized header values such as Content-Type and Content-Disposition.

Grammar (RFC 7231 / RFC 6266 subset):
    value     = token *( ";" param )
    param     = name "=" ( token | quoted-string )
    quoted    = DQUOTE *( qdtext | "\\" CHAR ) DQUOTE

Design intent:
- Replace ad-hoc regex matching with a small explicit scanner.
- Be lenient: malformed params are skipped instead of failing the whole header.
"""

from typing import Iterator

MULTIPART_FORM_DATA = "multipart/form-data"


def parse_header_value(value: str | None) -> tuple[str, dict[str, str]]:
    """
    Split a header value into its leading token and parameters.

    The token and parameter names are lower-cased; parameter values keep their
    case with surrounding quotes removed and backslash escapes resolved.
    """

    source = str(value or "")
    head, cursor = _read_until(source, 0, ";")
    params: dict[str, str] = {}
    for name, param_value in _iter_params(source, cursor):
        if name not in params:
            params[name] = param_value
    return head.strip().lower(), params


def extract_boundary(content_type: str | None) -> str | None:
    media_type, params = parse_header_value(content_type)
    if media_type != MULTIPART_FORM_DATA:
        return None
    boundary = params.get("boundary", "").strip().strip('"').strip()
    return boundary or None


def parse_header_lines(block: str) -> dict[str, str]:
    """
    Parse `key: value` header lines into a dict keyed by lower-cased name.

    Lines without a colon are ignored. The first occurrence of a name wins.
    """

    headers: dict[str, str] = {}
    for raw_line in block.split("\r\n"):
        line = raw_line.strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        name = key.strip().lower()
        if name and name not in headers:
            headers[name] = value.strip()
    return headers


def _iter_params(source: str, cursor: int) -> Iterator[tuple[str, str]]:
    length = len(source)
    while cursor < length:
        # cursor sits on ";" or at the end of the previous param
        if source[cursor] == ";":
            cursor += 1
        cursor = _skip_spaces(source, cursor)
        if cursor >= length:
            return

        name, cursor = _read_until(source, cursor, "=;")
        name = name.strip().lower()
        if cursor >= length or source[cursor] == ";":
            # bare attribute without value
            continue

        cursor = _skip_spaces(source, cursor + 1)
        if cursor < length and source[cursor] == '"':
            param_value, cursor = _read_quoted(source, cursor + 1)
            _, cursor = _read_until(source, cursor, ";")
        else:
            param_value, cursor = _read_until(source, cursor, ";")
            param_value = param_value.strip()

        if name:
            yield name, param_value


def _read_until(source: str, cursor: int, stops: str) -> tuple[str, int]:
    start = cursor
    while cursor < len(source) and source[cursor] not in stops:
        cursor += 1
    return source[start:cursor], cursor


def _read_quoted(source: str, cursor: int) -> tuple[str, int]:
    chars: list[str] = []
    length = len(source)
    while cursor < length:
        char = source[cursor]
        if char == "\\" and cursor + 1 < length:
            chars.append(source[cursor + 1])
            cursor += 2
            continue
        if char == '"':
            return "".join(chars), cursor + 1
        chars.append(char)
        cursor += 1
    # unterminated quote: take the rest
    return "".join(chars), cursor


def _skip_spaces(source: str, cursor: int) -> int:
    while cursor < len(source) and source[cursor] in " \t":
        cursor += 1
    return cursor
