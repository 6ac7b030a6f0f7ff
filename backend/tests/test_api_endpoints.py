import io

from docx import Document
from fastapi.testclient import TestClient

from backend.api.main import create_app
from backend.internal_core.config import AppConfig
from backend.minutes.models import ActionItem

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FakeTranscriptionClient:
    def __init__(self, transcript: str = "Meeting called to order.") -> None:
        self.transcript = transcript
        self.calls: list[dict] = []

    async def transcribe(self, audio: bytes, *, filename: str, content_type: str, language: str) -> str:
        self.calls.append(
            {"audio": audio, "filename": filename, "content_type": content_type, "language": language}
        )
        return self.transcript


class FakeMinutesClient:
    def __init__(self, minutes: str) -> None:
        self.minutes = minutes
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.minutes


def _client(**overrides) -> TestClient:
    config = AppConfig(OPENAI_API_KEY="sk-test", **overrides)
    return TestClient(create_app(config))


def test_healthz() -> None:
    response = _client().get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_transcribe_forwards_audio_bytes_unchanged() -> None:
    client = _client()
    fake = FakeTranscriptionClient("Hello board.")
    client.app.state.transcription_client = fake
    audio = bytes(range(256)) + b"\r\n--not-a-boundary\r\n" + b"\x80\x81\xfe\xff"

    response = client.post(
        "/api/transcribe",
        files={"audio": ("clip.webm", audio, "audio/webm")},
        data={"title": "Board Meeting"},
    )

    assert response.status_code == 200
    assert response.json() == {"transcript": "Hello board.", "filename": "audio.webm"}
    assert fake.calls[0]["audio"] == audio
    assert fake.calls[0]["content_type"] == "audio/webm"
    assert fake.calls[0]["language"] == "en"


def test_transcribe_raw_body_with_quoted_boundary_and_language_field() -> None:
    client = _client()
    fake = FakeTranscriptionClient()
    client.app.state.transcription_client = fake
    body = (
        b"--XYZ\r\n"
        b'Content-Disposition: form-data; name="language"\r\n\r\n'
        b"es\r\n"
        b"--XYZ\r\n"
        b'Content-Disposition: form-data; name="audio"; filename="blob"\r\n'
        b"Content-Type: application/octet-stream\r\n\r\n"
        b"\x00\x01\x02\x03\x04\r\n"
        b"--XYZ--\r\n"
    )

    response = client.post(
        "/api/transcribe",
        content=body,
        headers={"Content-Type": 'multipart/form-data; boundary="XYZ"'},
    )

    assert response.status_code == 200
    assert response.json()["filename"] == "audio.wav"
    assert fake.calls[0]["audio"] == b"\x00\x01\x02\x03\x04"
    assert fake.calls[0]["content_type"] == "audio/wav"
    assert fake.calls[0]["language"] == "es"


def test_generate_minutes_returns_minutes_and_action_items() -> None:
    minutes = (
        "# Board of Directors Meeting\n\n"
        "## Action Items\n"
        "- Ana: Hang the spring show (Due: March 1)\n"
        "- Confirm the caterer\n"
    )
    client = _client(MINUTES_ORG_NAME="Riverside Arts Guild")
    fake = FakeMinutesClient(minutes)
    client.app.state.minutes_client = fake

    response = client.post(
        "/api/generate-minutes",
        json={
            "transcript": "Ana agreed to hang the spring show by March 1.",
            "agenda": {
                "type": "board",
                "date": "2025-02-01",
                "items": [{"title": "Spring show", "isVote": True, "subItems": [{"text": "Hanging"}]}],
            },
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["minutes"] == minutes
    assert payload["actionItems"] == [
        {"assignee": "Ana", "task": "Hang the spring show", "dueDate": "March 1"},
        {"assignee": "Unassigned", "task": "Confirm the caterer", "dueDate": None},
    ]
    system_prompt, user_prompt = fake.calls[0]
    assert "Riverside Arts Guild" in system_prompt
    assert "1. Spring show (VOTE)" in user_prompt
    assert "   a. Hanging" in user_prompt
    assert "Location: Gallery" in user_prompt


def test_export_word_returns_docx_attachment() -> None:
    client = _client()
    response = client.post(
        "/api/export-word",
        json={
            "minutes": "# Minutes\n- Quorum present",
            "agenda": {"type": "member", "date": "2025-02-01", "location": "Main Hall"},
            "actionItems": [{"assignee": "Ana", "task": "Hang the show", "dueDate": "Friday"}],
        },
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == DOCX_MEDIA_TYPE
    assert response.headers["content-disposition"] == "attachment; filename=CBG_Minutes_2025-02-01.docx"

    doc = Document(io.BytesIO(response.content))
    texts = [paragraph.text for paragraph in doc.paragraphs]
    assert "General Membership Meeting" in texts
    assert "2025-02-01 — Main Hall" in texts
    assert [cell.text for cell in doc.tables[0].rows[1].cells] == ["Ana", "Hang the show", "Friday"]


def test_export_word_does_not_require_vendor_credentials() -> None:
    client = TestClient(create_app(AppConfig(OPENAI_API_KEY="")))
    response = client.post("/api/export-word", json={"minutes": "Short."})
    assert response.status_code == 200
    assert response.headers["content-disposition"] == "attachment; filename=CBG_Minutes_Unknown-Date.docx"


def test_action_item_model_accepts_snake_and_camel_case() -> None:
    assert ActionItem.model_validate({"task": "t", "dueDate": "d"}).due_date == "d"
    assert ActionItem.model_validate({"task": "t", "due_date": "d"}).due_date == "d"


def test_export_word_non_ascii_date_yields_ascii_attachment_name() -> None:
    client = _client()
    for date, filename in (
        ("1 février 2025", "CBG_Minutes_1-f-vrier-2025.docx"),
        ("2025年2月1日", "CBG_Minutes_2025-2-1.docx"),
    ):
        response = client.post("/api/export-word", json={"minutes": "# Minutes", "agenda": {"date": date}})
        assert response.status_code == 200
        assert response.headers["content-disposition"] == f"attachment; filename={filename}"
        texts = [paragraph.text for paragraph in Document(io.BytesIO(response.content)).paragraphs]
        assert f"{date} — Gallery" in texts
