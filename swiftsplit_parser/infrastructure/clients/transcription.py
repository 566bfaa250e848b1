"""Speech-to-text HTTP client with exponential backoff retry logic"""

import asyncio
import logging
from typing import List, Optional

import httpx

from swiftsplit_parser.config import settings
from swiftsplit_parser.domain.exceptions import AudioTooLarge, TranscriptionError, UnsupportedFormat
from swiftsplit_parser.infrastructure.observability.metrics import (
    transcription_failure_counter,
    transcription_latency_histogram,
)

logger = logging.getLogger(__name__)


class TranscriptionClient:
    """Client for the external speech-to-text service"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.transcription_api_base
        self.api_key = api_key if api_key is not None else settings.transcription_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.model_id = settings.transcription_model_id
        self.max_retries = settings.transcription_max_retries
        self.backoff_base = settings.transcription_backoff_base
        self.allowed_types: List[str] = list(settings.allowed_audio_types)
        self.max_bytes = settings.max_audio_bytes
        self.transport = transport

    def validate_audio(self, audio: bytes, content_type: str) -> None:
        """
        Reject audio before any transcription attempt.

        Raises:
            UnsupportedFormat: content type not in the allow-list
            AudioTooLarge: payload above the size limit
        """
        if content_type not in self.allowed_types:
            raise UnsupportedFormat(f"Unsupported audio format: {content_type}")

        if len(audio) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise AudioTooLarge(f"Audio file too large. Maximum size is {limit_mb}MB.")

    async def transcribe(self, audio: bytes, content_type: str = "audio/mpeg") -> str:
        """
        Convert speech to text.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s (base * 2^(attempt-1))
        - Retries on timeouts, connection failures and 5xx responses
        - 4xx responses and malformed bodies fail immediately

        Raises:
            TranscriptionError: once retries are exhausted or on a non-retryable failure
        """
        self.validate_audio(audio, content_type)

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with transcription_latency_histogram.time():
                        response = await client.post(
                            f"{self.base_url}/speech-to-text",
                            headers={"xi-api-key": self.api_key},
                            data={"model_id": self.model_id},
                            files={"file": ("audio", audio, content_type)},
                        )
                        response.raise_for_status()
                    return self._read_text(response)

                except httpx.HTTPStatusError as e:
                    transcription_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise TranscriptionError(f"Speech-to-text error: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise TranscriptionError(
                            f"Speech-to-text unavailable after {attempt} attempts: {e.response.status_code}"
                        ) from e

                except httpx.TransportError as e:
                    transcription_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise TranscriptionError(f"Speech-to-text unreachable after {attempt} attempts") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning("Transcription attempt %d failed, retrying in %.1fs", attempt, backoff)
                await asyncio.sleep(backoff)

    @staticmethod
    def _read_text(response: httpx.Response) -> str:
        try:
            text = response.json()["text"]
        except (KeyError, ValueError, TypeError) as e:
            raise TranscriptionError(f"Invalid response from speech-to-text service: {e}") from e
        if not isinstance(text, str):
            raise TranscriptionError("Invalid response from speech-to-text service: text is not a string")
        return text.strip()
