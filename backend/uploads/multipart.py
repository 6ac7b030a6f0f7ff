from __future__ import annotations

"""
Byte-safe multipart/form-data parser.

Design intent:
- Operate on raw `bytes` end to end; only the per-part header block is decoded.
- Skip malformed segments instead of failing the whole request.
- Stay a pure function of (buffer, boundary) so it is trivially testable.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from backend.uploads.headers import parse_header_lines, parse_header_value

logger = logging.getLogger(__name__)

_CRLF = b"\r\n"
_HEADER_SEPARATOR = b"\r\n\r\n"
_CLOSE_MARKER = b"--"


@dataclass(frozen=True)
class MultipartPart:
    name: str
    filename: str | None
    content_type: str | None
    data: bytes


def parse_multipart(buffer: bytes, boundary: str) -> list[MultipartPart]:
    """
    Split a fully buffered multipart body into named parts, in source order.

    `boundary` is the bare token from the Content-Type header (no leading
    `--`, no quotes). A boundary that never occurs yields an empty list.
    """

    if not boundary:
        return []
    delimiter = _CLOSE_MARKER + boundary.encode("utf-8")
    parts: list[MultipartPart] = []
    start = buffer.find(delimiter)
    index = 0
    while start != -1:
        segment_start = start + len(delimiter)
        if buffer.startswith(_CLOSE_MARKER, segment_start):
            break
        end = buffer.find(delimiter, segment_start)
        if end == -1:
            break

        part = _parse_segment(buffer, segment_start, end, index=index)
        if part is not None:
            parts.append(part)
        index += 1
        start = end

    return parts


def first_part_named(
    parts: Sequence[MultipartPart],
    name: str,
    *,
    require_data: bool = True,
) -> MultipartPart | None:
    for part in parts:
        if part.name != name:
            continue
        if require_data and not part.data:
            continue
        return part
    return None


def _parse_segment(buffer: bytes, start: int, end: int, *, index: int) -> MultipartPart | None:
    separator_at = buffer.find(_HEADER_SEPARATOR, start, end)
    if separator_at == -1:
        if not buffer[start:end].strip():
            return None
        logger.warning("multipart_segment_skipped index=%s reason=no_header_separator", index)
        return None

    # Header text is small and ASCII in practice; payload bytes are never decoded.
    header_block = buffer[start:separator_at].decode("utf-8", errors="replace")
    headers = parse_header_lines(header_block)

    _, disposition = parse_header_value(headers.get("content-disposition"))
    name = disposition.get("name", "")
    if not name:
        logger.warning("multipart_segment_skipped index=%s reason=missing_name", index)
        return None

    payload_start = separator_at + len(_HEADER_SEPARATOR)
    payload_end = end
    if buffer.endswith(_CRLF, payload_start, payload_end):
        payload_end -= len(_CRLF)
    data = buffer[payload_start:payload_end]

    content_type = headers.get("content-type", "").strip()
    return MultipartPart(
        name=name,
        filename=disposition.get("filename") or None,
        content_type=content_type or None,
        data=data,
    )
