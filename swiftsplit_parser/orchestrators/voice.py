"""Voice command parsing: transcription, then the chat extraction path"""

import logging
from typing import Optional

from swiftsplit_parser.domain.models import PaymentIntent, PaymentSource
from swiftsplit_parser.infrastructure.clients.transcription import TranscriptionClient
from swiftsplit_parser.orchestrators.chat import intent_from_text
from swiftsplit_parser.orchestrators.pipeline import PaymentHistory, PaymentPipeline
from swiftsplit_parser.orchestrators.schemas import ParseResult

logger = logging.getLogger(__name__)


class VoiceOrchestrator(PaymentPipeline):
    """Parses spoken payment commands"""

    source = PaymentSource.VOICE

    def __init__(
        self,
        transcription_client: Optional[TranscriptionClient] = None,
        payment_history: Optional[PaymentHistory] = None,
    ):
        super().__init__(payment_history)
        self.transcription_client = transcription_client or TranscriptionClient()

    async def parse(self, audio: bytes, content_type: str, sender: Optional[str] = None) -> ParseResult:
        return await self.run(self._build(audio, content_type, sender))

    async def _build(self, audio: bytes, content_type: str, sender: Optional[str]) -> PaymentIntent:
        # Format and size are checked before any network call
        self.transcription_client.validate_audio(audio, content_type)

        transcribed_text = await self.transcription_client.transcribe(audio, content_type)
        logger.info("Voice command transcribed", extra={"characters": len(transcribed_text)})

        return intent_from_text(
            transcribed_text,
            payer=sender,
            source=PaymentSource.VOICE,
            extra_metadata={"transcribed_text": transcribed_text},
        )
