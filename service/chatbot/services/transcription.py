import logging

from openai import AsyncOpenAI

from chatbot.config import Settings
from chatbot.exceptions import TranscriptionError
from chatbot.services.llm import CLIENT_ERRORS, describe_client_error, response_error_message
from chatbot.services.openai_client import FileDownloader

logger = logging.getLogger(__name__)

# Telegram voice notes are OGG/Opus
AUDIO_FILENAME = "audio.ogg"
AUDIO_MIME_TYPE = "audio/ogg"


class TranscriptionClient:
    def __init__(self, client: AsyncOpenAI, downloader: FileDownloader, model: str = "whisper-1"):
        self.client = client
        self.downloader = downloader
        self.model = model

    @classmethod
    def from_settings(cls, client: AsyncOpenAI, downloader: FileDownloader, settings: Settings) -> "TranscriptionClient":
        return cls(client, downloader, model=settings.transcription_model)

    async def transcribe(self, resource_link: str) -> str:
        """
        Download a voice note and transcribe it using OpenAI Whisper API.

        Args:
            resource_link: Resolved download URL of the voice note

        Returns:
            Transcribed text (may be empty; it is passed through as is)

        Raises:
            TranscriptionError: on download/upload failure or an API error payload
        """
        try:
            logger.info("Downloading voice note")
            audio_bytes = await self.downloader.download(resource_link)

            logger.info(f"Sending {len(audio_bytes)} bytes to transcription API")
            response = await self.client.audio.transcriptions.create(
                model=self.model,
                file=(AUDIO_FILENAME, audio_bytes, AUDIO_MIME_TYPE),
            )
        except CLIENT_ERRORS as e:
            detail = describe_client_error(e)
            logger.error(f"Audio transcription request failed: {detail}")
            raise TranscriptionError(detail) from e

        logger.debug(f"Transcription response: {response}")

        message = response_error_message(response)
        if message:
            logger.error(f"Transcription API error: {message}")
            raise TranscriptionError(f"API error: {message}")

        return getattr(response, "text", None) or ""
