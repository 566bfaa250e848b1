"""Integration tests for the speech-to-text client"""

import httpx
import pytest
from swiftsplit_parser.domain.exceptions import AudioTooLarge, TranscriptionError, UnsupportedFormat
from swiftsplit_parser.infrastructure.clients.transcription import TranscriptionClient

pytestmark = pytest.mark.integration


def _client(handler) -> TranscriptionClient:
    client = TranscriptionClient(
        base_url="https://stt.test/v1",
        api_key="test-key",
        transport=httpx.MockTransport(handler),
    )
    client.backoff_base = 0
    return client


async def test_transcribe_sends_audio_and_model():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"text": "  Pay John 20 USDC  "})

    text = await _client(handler).transcribe(b"audio", "audio/wav")

    assert text == "Pay John 20 USDC"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://stt.test/v1/speech-to-text"
    assert request.headers["xi-api-key"] == "test-key"
    body = request.content
    assert b"scribe_v1" in body
    assert b"audio" in body


async def test_transcribe_retries_server_errors():
    """Test 5xx responses are retried until one succeeds"""
    statuses = iter([503, 502, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses)
        if status == 200:
            return httpx.Response(200, json={"text": "tip Sam 3"})
        return httpx.Response(status)

    assert await _client(handler).transcribe(b"audio", "audio/mpeg") == "tip Sam 3"


async def test_transcribe_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500)

    with pytest.raises(TranscriptionError, match="after 3 attempts"):
        await _client(handler).transcribe(b"audio", "audio/mpeg")

    assert len(calls) == 3


async def test_transcribe_client_error_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(401)

    with pytest.raises(TranscriptionError, match="401"):
        await _client(handler).transcribe(b"audio", "audio/mpeg")

    assert len(calls) == 1


async def test_transcribe_retries_connection_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TranscriptionError, match="unreachable"):
        await _client(handler).transcribe(b"audio", "audio/mpeg")

    assert len(calls) == 3


async def test_transcribe_malformed_response():
    with pytest.raises(TranscriptionError, match="Invalid response"):
        await _client(lambda request: httpx.Response(200, json={"words": []})).transcribe(b"audio", "audio/mpeg")


def test_validate_audio():
    client = _client(lambda request: httpx.Response(200))

    client.validate_audio(b"ok", "audio/mp4")

    with pytest.raises(UnsupportedFormat):
        client.validate_audio(b"ok", "video/mp4")

    with pytest.raises(AudioTooLarge, match="Maximum size is 10MB"):
        client.validate_audio(b"x" * (10 * 1024 * 1024 + 1), "audio/mpeg")
