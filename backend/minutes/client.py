from __future__ import annotations

"""
Async client for the hosted chat-completions endpoint used to draft minutes.
"""

import logging
from typing import Any

import httpx

from backend.internal_core.errors import VendorAPIError, vendor_error_from_response

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Minutes generation failed"


class ChatMinutesClient:
    """
    Thin wrapper over `POST {base_url}/chat/completions`.

    Args:
        api_key: Bearer token for the vendor API.
        base_url: API root, e.g. `https://api.openai.com/v1`.
        model: Chat model name.
        temperature: Sampling temperature.
        max_tokens: Completion token cap.
        timeout_seconds: Per-request timeout.
        transport: Optional httpx transport (tests inject `httpx.MockTransport`).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 4000,
        timeout_seconds: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout_seconds
        self._transport = transport

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        body = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        async with httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._url, json=body)
            except httpx.HTTPError as exc:
                logger.error("chat_request_failed url=%s error=%s", self._url, exc)
                raise VendorAPIError(500, GENERATION_FAILED) from exc

        if response.is_error:
            error = vendor_error_from_response(response, GENERATION_FAILED)
            logger.error("chat_vendor_error status=%s message=%s", error.status_code, error.message)
            raise error

        content = _first_message_content(response)
        if content is None:
            logger.error("chat_vendor_error status=%s message=missing_choices", response.status_code)
            raise VendorAPIError(500, GENERATION_FAILED)

        logger.info("chat_completed model=%s content_chars=%s", self._model, len(content))
        return content


def _first_message_content(response: httpx.Response) -> str | None:
    try:
        payload: Any = response.json()
    except ValueError:
        return None
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None
