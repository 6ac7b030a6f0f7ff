from __future__ import annotations

"""
HTTP surface for the meeting-minutes backend.

Design intent:
- Keep handlers thin: validate, reshape, delegate to transcription/minutes/export modules.
- Inject configuration and vendor clients at construction time via `create_app`.
- Map failures to 400 (client input), 500 (configuration/unhandled) or the vendor's status.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from backend.export.word import DOCX_MEDIA_TYPE, build_minutes_document, export_filename
from backend.internal_core.config import AppConfig, load_config
from backend.internal_core.errors import VendorAPIError
from backend.minutes.client import ChatMinutesClient
from backend.minutes.draft import draft_minutes
from backend.minutes.models import ActionItem, Agenda, meeting_date
from backend.transcription.client import WhisperTranscriptionClient, transcription_filename
from backend.uploads.headers import extract_boundary
from backend.uploads.multipart import first_part_named, parse_multipart

logger = logging.getLogger(__name__)

AUDIO_FIELD = "audio"
LANGUAGE_FIELD = "language"
MISSING_CREDENTIALS = "OpenAI API key not configured"


class TranscribeResponse(BaseModel):
    transcript: str
    filename: str


class GenerateMinutesRequest(BaseModel):
    transcript: str | None = None
    agenda: Agenda | None = None


class GenerateMinutesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    minutes: str
    action_items: list[ActionItem] = Field(default_factory=list, alias="actionItems")


class ExportWordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    minutes: str | None = None
    agenda: Agenda | None = None
    action_items: list[ActionItem] = Field(default_factory=list, alias="actionItems")


def create_app(config: AppConfig | None = None) -> FastAPI:
    cfg = config if config is not None else load_config()

    app = FastAPI(title="meeting minutes backend")
    app.state.config = cfg
    app.state.transcription_client = WhisperTranscriptionClient(
        cfg.OPENAI_API_KEY,
        base_url=cfg.OPENAI_BASE_URL,
        model=cfg.MINUTES_TRANSCRIBE_MODEL,
        timeout_seconds=cfg.MINUTES_VENDOR_TIMEOUT_SECONDS,
    )
    app.state.minutes_client = ChatMinutesClient(
        cfg.OPENAI_API_KEY,
        base_url=cfg.OPENAI_BASE_URL,
        model=cfg.MINUTES_CHAT_MODEL,
        temperature=cfg.MINUTES_CHAT_TEMPERATURE,
        max_tokens=cfg.MINUTES_CHAT_MAX_TOKENS,
        timeout_seconds=cfg.MINUTES_VENDOR_TIMEOUT_SECONDS,
    )

    logging.getLogger("backend").setLevel(cfg.MINUTES_LOG_LEVEL.upper())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.MINUTES_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.add_api_route("/healthz", healthz, methods=["GET"])
    app.add_api_route(
        "/api/transcribe",
        transcribe,
        methods=["POST"],
        response_model=TranscribeResponse,
    )
    app.add_api_route(
        "/api/generate-minutes",
        generate_minutes,
        methods=["POST"],
        response_model=GenerateMinutesResponse,
    )
    app.add_api_route("/api/export-word", export_word, methods=["POST"])
    return app


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("request_validation_failed path=%s errors=%s", request.url.path, len(errors))
    first = errors[0] if errors else {}
    location = ".".join(str(item) for item in first.get("loc", ()) if item != "body")
    message = str(first.get("msg") or "Invalid request body")
    detail = f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"
    return JSONResponse(status_code=400, content={"detail": detail})


def _config(request: Request) -> AppConfig:
    return request.app.state.config


def _require_credentials(cfg: AppConfig, *, endpoint: str) -> None:
    if not cfg.has_vendor_credentials:
        logger.error("vendor_credentials_missing endpoint=%s", endpoint)
        raise HTTPException(status_code=500, detail=MISSING_CREDENTIALS)


def _vendor_http_error(exc: VendorAPIError, *, endpoint: str) -> HTTPException:
    logger.warning(
        "vendor_call_failed endpoint=%s status=%s message=%s",
        endpoint,
        exc.status_code,
        exc.message,
    )
    return HTTPException(status_code=exc.status_code, detail=exc.message)


async def healthz() -> dict[str, str]:
    return {"status": "ok"}


async def transcribe(request: Request) -> TranscribeResponse | JSONResponse:
    cfg = _config(request)
    _require_credentials(cfg, endpoint="transcribe")

    boundary = extract_boundary(request.headers.get("content-type"))
    if not boundary:
        raise HTTPException(status_code=400, detail="No multipart boundary found")

    declared_length = request.headers.get("content-length", "")
    if declared_length.isdigit() and int(declared_length) > cfg.MINUTES_MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=_upload_limit_detail(cfg))

    body = await request.body()
    if len(body) > cfg.MINUTES_MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=_upload_limit_detail(cfg))

    parts = parse_multipart(body, boundary)
    audio_part = first_part_named(parts, AUDIO_FIELD)
    if audio_part is None:
        parts_found = [{"name": part.name, "size": len(part.data)} for part in parts]
        logger.warning("transcribe_audio_missing body_bytes=%s parts_found=%s", len(body), parts_found)
        return JSONResponse(
            status_code=400,
            content={"detail": "No audio file found", "partsFound": parts_found},
        )

    language = cfg.MINUTES_TRANSCRIBE_LANGUAGE
    language_part = first_part_named(parts, LANGUAGE_FIELD)
    if language_part is not None:
        requested = language_part.data.decode("utf-8", errors="ignore").strip()
        if requested:
            language = requested

    filename, content_type = transcription_filename(audio_part)
    logger.info(
        "transcribe_request audio_bytes=%s upload_filename=%s vendor_filename=%s language=%s",
        len(audio_part.data),
        audio_part.filename,
        filename,
        language,
    )

    try:
        transcript = await request.app.state.transcription_client.transcribe(
            audio_part.data,
            filename=filename,
            content_type=content_type,
            language=language,
        )
    except VendorAPIError as exc:
        raise _vendor_http_error(exc, endpoint="transcribe") from exc
    except Exception as exc:
        logger.exception("transcribe_unhandled_error")
        raise HTTPException(status_code=500, detail=str(exc) or "Internal server error") from exc

    return TranscribeResponse(transcript=transcript, filename=filename)


async def generate_minutes(payload: GenerateMinutesRequest, request: Request) -> GenerateMinutesResponse:
    cfg = _config(request)
    _require_credentials(cfg, endpoint="generate_minutes")

    transcript = str(payload.transcript or "").strip()
    if not transcript:
        raise HTTPException(status_code=400, detail="No transcript provided")

    try:
        draft = await draft_minutes(
            request.app.state.minutes_client,
            transcript,
            payload.agenda,
            org_name=cfg.MINUTES_ORG_NAME,
            default_location=cfg.MINUTES_DEFAULT_LOCATION,
        )
    except VendorAPIError as exc:
        raise _vendor_http_error(exc, endpoint="generate_minutes") from exc
    except Exception as exc:
        logger.exception("generate_minutes_unhandled_error")
        raise HTTPException(status_code=500, detail=str(exc) or "Internal server error") from exc

    logger.info(
        "minutes_generated transcript_chars=%s minutes_chars=%s action_items=%s",
        len(transcript),
        len(draft.minutes),
        len(draft.action_items),
    )
    return GenerateMinutesResponse(minutes=draft.minutes, action_items=draft.action_items)


async def export_word(payload: ExportWordRequest, request: Request) -> Response:
    cfg = _config(request)

    minutes = str(payload.minutes or "")
    if not minutes.strip():
        raise HTTPException(status_code=400, detail="No minutes provided")

    try:
        document = build_minutes_document(
            minutes,
            payload.agenda,
            payload.action_items,
            org_name=cfg.MINUTES_ORG_NAME,
            org_short_name=cfg.MINUTES_ORG_SHORT_NAME,
            default_location=cfg.MINUTES_DEFAULT_LOCATION,
        )
    except Exception as exc:
        logger.exception("export_word_failed")
        raise HTTPException(status_code=500, detail=str(exc) or "Export failed") from exc

    filename = export_filename(cfg.MINUTES_ORG_SHORT_NAME, meeting_date(payload.agenda))
    logger.info("export_word_completed bytes=%s filename=%s", len(document), filename)
    return Response(
        content=document,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _upload_limit_detail(cfg: AppConfig) -> str:
    limit_mb = cfg.MINUTES_MAX_UPLOAD_BYTES / (1024 * 1024)
    return f"Uploaded file exceeds {limit_mb:g}MB limit."


app = create_app()
