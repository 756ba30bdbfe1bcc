import base64
import logging

from openai import AsyncOpenAI

from chatbot.config import Settings
from chatbot.exceptions import ImageAnalysisError
from chatbot.prompts import VISION_QUESTION
from chatbot.services.llm import CLIENT_ERRORS, describe_client_error, extract_choice_text
from chatbot.services.openai_client import FileDownloader

logger = logging.getLogger(__name__)


def image_data_uri(image_bytes: bytes) -> str:
    """Inline the image so the request does not depend on the link staying valid."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


class VisionClient:
    def __init__(self, client: AsyncOpenAI, downloader: FileDownloader, model: str = "gpt-4o", max_tokens: int = 300):
        self.client = client
        self.downloader = downloader
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, client: AsyncOpenAI, downloader: FileDownloader, settings: Settings) -> "VisionClient":
        return cls(client, downloader, model=settings.vision_model, max_tokens=settings.vision_max_tokens)

    def build_messages(self, image_bytes: bytes) -> list[dict]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": VISION_QUESTION},
                    {"type": "image_url", "image_url": {"url": image_data_uri(image_bytes)}},
                ],
            }
        ]

    async def describe_image(self, resource_link: str) -> str:
        """
        Download a photo and ask the model what it shows.

        Raises:
            ImageAnalysisError: on any failure
        """
        try:
            logger.info("Downloading image")
            image_bytes = await self.downloader.download(resource_link)

            logger.info(f"Sending {len(image_bytes)} bytes to vision model")
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(image_bytes),
                max_tokens=self.max_tokens,
            )
        except CLIENT_ERRORS as e:
            detail = describe_client_error(e)
            logger.error(f"Image analysis request failed: {detail}")
            raise ImageAnalysisError(detail) from e

        logger.debug(f"Vision response: {response}")

        try:
            return extract_choice_text(response, ImageAnalysisError)
        except ImageAnalysisError as e:
            logger.error(f"Image analysis returned no usable answer: {e.detail}")
            raise
