from __future__ import annotations

"""
Vendor API failure contract shared by the transcription and chat clients.

Design intent:
- Carry the vendor's HTTP status and message through to the client response.
- Fall back to a caller-provided generic message when the vendor gives none.
"""

from typing import Any

import httpx


class VendorAPIError(RuntimeError):
    """Raised when a third-party API call fails or returns an unusable payload."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = int(status_code)
        self.message = message


def vendor_error_from_response(response: httpx.Response, fallback: str) -> VendorAPIError:
    return VendorAPIError(response.status_code, _extract_error_message(response) or fallback)


def _extract_error_message(response: httpx.Response) -> str:
    try:
        payload: Any = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = str(error.get("message") or "").strip()
            if message:
                return message
        elif isinstance(error, str) and error.strip():
            return error.strip()

    return str(response.reason_phrase or "").strip()
