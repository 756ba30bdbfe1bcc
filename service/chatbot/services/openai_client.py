"""
OpenAI SDK client and attachment downloader.

Base URL, key and timeout come from settings. Both objects accept an httpx
transport/client, so tests can pass an ``httpx.MockTransport`` instead of
talking to the network.
"""

import httpx
from openai import AsyncOpenAI
from typing import Optional

from chatbot.config import Settings


def create_openai_client(settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> AsyncOpenAI:
    """OpenAI client for chat completions and Whisper. Retries are disabled."""
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout,
        max_retries=0,
        http_client=http_client,
    )


class FileDownloader:
    """
    Fetches attachment links as raw bytes.

    Plain httpx client with no Authorization header, so the API key never
    reaches the file host.
    """

    def __init__(self, timeout: float = 60.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileDownloader":
        return cls(timeout=settings.request_timeout)

    async def download(self, url: str) -> bytes:
        """
        Raises:
            httpx.HTTPError: transport failure or non-2xx status
        """
        response = await self.client.get(url)
        response.raise_for_status()
        return response.content

    async def aclose(self):
        await self.client.aclose()
