"""
Tests for the Whisper transcription client.
"""

import asyncio

import httpx
import pytest

from chatbot.config import Settings
from chatbot.exceptions import TranscriptionError
from chatbot.services.openai_client import FileDownloader, create_openai_client
from chatbot.services.transcription import TranscriptionClient

API_KEY = "sk-test"
BASE_URL = "https://api.test/v1"
FILE_URL = "https://files.test/file/bot123/voice/file_1.oga"
AUDIO = b"OggS\x00fake-opus-bytes"


def make_client(api_handler, file_status: int = 200):
    seen: list[httpx.Request] = []

    def route(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == "files.test":
            return httpx.Response(file_status, content=AUDIO)
        return api_handler(request)

    transport = httpx.MockTransport(route)
    settings = Settings(BOT_TOKEN="123:abc", OPENAI_API_KEY=API_KEY, openai_base_url=BASE_URL, _env_file=None)
    client = create_openai_client(settings, http_client=httpx.AsyncClient(transport=transport))
    return TranscriptionClient(client, FileDownloader(transport=transport), model="whisper-1"), seen


class TestTranscribe:

    def test_returns_text(self):
        client, _ = make_client(lambda r: httpx.Response(200, json={"text": "hello there"}))
        assert asyncio.run(client.transcribe(FILE_URL)) == "hello there"

    def test_downloads_then_posts_multipart(self):
        client, seen = make_client(lambda r: httpx.Response(200, json={"text": "ok"}))
        asyncio.run(client.transcribe(FILE_URL))

        download, upload = seen
        assert str(download.url) == FILE_URL
        assert "Authorization" not in download.headers

        assert str(upload.url) == f"{BASE_URL}/audio/transcriptions"
        assert upload.headers["Authorization"] == f"Bearer {API_KEY}"
        assert upload.headers["Content-Type"].startswith("multipart/form-data")
        body = upload.content
        assert b'name="file"; filename="audio.ogg"' in body
        assert b"Content-Type: audio/ogg" in body
        assert AUDIO in body
        assert b'name="model"' in body
        assert b"whisper-1" in body

    def test_empty_transcript_passes_through(self):
        client, _ = make_client(lambda r: httpx.Response(200, json={"text": ""}))
        assert asyncio.run(client.transcribe(FILE_URL)) == ""


class TestTranscribeFailures:

    def test_error_object(self):
        data = {"error": {"message": "Invalid file format."}}
        client, _ = make_client(lambda r: httpx.Response(200, json=data))
        with pytest.raises(TranscriptionError) as exc_info:
            asyncio.run(client.transcribe(FILE_URL))
        assert "Invalid file format." in exc_info.value.detail
        assert str(exc_info.value) == "Audio transcription failed"

    def test_download_failure(self):
        client, seen = make_client(lambda r: httpx.Response(200, json={"text": "x"}), file_status=404)
        with pytest.raises(TranscriptionError):
            asyncio.run(client.transcribe(FILE_URL))
        # Nothing is uploaded when the download fails
        assert len(seen) == 1

    def test_api_status_error(self):
        client, _ = make_client(lambda r: httpx.Response(500, text="internal"))
        with pytest.raises(TranscriptionError):
            asyncio.run(client.transcribe(FILE_URL))

    def test_transport_failure(self):
        def fail(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = make_client(fail)
        with pytest.raises(TranscriptionError):
            asyncio.run(client.transcribe(FILE_URL))
