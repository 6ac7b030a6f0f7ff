from __future__ import annotations

"""
Async client for the hosted audio transcription endpoint.

Sends the audio as a multipart upload with `response_format=text` so the
vendor returns the plain transcript. Nothing is retried.
"""

import logging
from pathlib import Path

import httpx

from backend.internal_core.errors import VendorAPIError, vendor_error_from_response
from backend.uploads.multipart import MultipartPart

logger = logging.getLogger(__name__)

AUDIO_SUFFIX_MIME_TYPES: dict[str, str] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".mpeg": "audio/mpeg",
    ".mpga": "audio/mpeg",
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".mp4": "audio/mp4",
    ".flac": "audio/flac",
}
DEFAULT_AUDIO_FILENAME = "audio.wav"
DEFAULT_AUDIO_MIME_TYPE = "audio/wav"


def transcription_filename(part: MultipartPart) -> tuple[str, str]:
    """Return the (filename, content type) hint sent to the vendor for an upload."""

    suffix = Path(part.filename or "").suffix.lower()
    if suffix not in AUDIO_SUFFIX_MIME_TYPES:
        return DEFAULT_AUDIO_FILENAME, DEFAULT_AUDIO_MIME_TYPE
    declared = (part.content_type or "").strip()
    mime_type = declared if declared.lower().startswith("audio/") else AUDIO_SUFFIX_MIME_TYPES[suffix]
    return f"audio{suffix}", mime_type


class WhisperTranscriptionClient:
    """
    Thin wrapper over `POST {base_url}/audio/transcriptions`.

    Args:
        api_key: Bearer token for the vendor API.
        base_url: API root, e.g. `https://api.openai.com/v1`.
        model: Transcription model name.
        timeout_seconds: Per-request timeout.
        transport: Optional httpx transport (tests inject `httpx.MockTransport`).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "whisper-1",
        timeout_seconds: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/audio/transcriptions"
        self._model = model
        self._timeout = timeout_seconds
        self._transport = transport

    async def transcribe(
        self,
        audio: bytes,
        *,
        filename: str = DEFAULT_AUDIO_FILENAME,
        content_type: str = DEFAULT_AUDIO_MIME_TYPE,
        language: str = "en",
    ) -> str:
        data = {"model": self._model, "response_format": "text"}
        if language:
            data["language"] = language
        files = {"file": (filename, audio, content_type)}

        async with httpx.AsyncClient(
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._url, data=data, files=files)
            except httpx.HTTPError as exc:
                logger.error("transcription_request_failed url=%s error=%s", self._url, exc)
                raise VendorAPIError(500, "Transcription failed") from exc

        if response.is_error:
            error = vendor_error_from_response(response, "Transcription failed")
            logger.error(
                "transcription_vendor_error status=%s message=%s",
                error.status_code,
                error.message,
            )
            raise error

        transcript = response.text.strip()
        logger.info(
            "transcription_completed audio_bytes=%s transcript_chars=%s",
            len(audio),
            len(transcript),
        )
        return transcript
