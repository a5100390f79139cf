"""
Base class for translation gateways.

A gateway turns (text, source language, target language) into translated
text or raises TranslationGatewayError. Chunking, retries and output
cleanup are shared here; providers only implement one chunk request.
"""

from abc import ABC, abstractmethod
from typing import Optional
import asyncio
import httpx

from storyglot.config import (
    REQUEST_TIMEOUT,
    MAX_TRANSLATION_ATTEMPTS,
    RETRY_DELAY_SECONDS,
    TRANSLATION_CHUNK_SIZE
)
from storyglot.core.exceptions import TranslationGatewayError
from storyglot.utils.unified_logger import LogType, debug, warning
from .cleanup import clean_translation, split_into_chunks


class TranslationGateway(ABC):
    """Abstract base class for translation gateways"""

    def __init__(self,
                 timeout: float = REQUEST_TIMEOUT,
                 max_attempts: int = MAX_TRANSLATION_ATTEMPTS,
                 retry_delay: float = RETRY_DELAY_SECONDS,
                 chunk_size: int = TRANSLATION_CHUNK_SIZE,
                 client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            timeout: Request timeout in seconds
            max_attempts: Attempts per chunk before giving up
            retry_delay: Pause between attempts in seconds
            chunk_size: Maximum characters sent per request
            client: Optional pre-built HTTP client (tests pass a mock transport)
        """
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.chunk_size = chunk_size
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout)
            )
        return self._client

    async def close(self):
        """Close the HTTP client if this gateway created it"""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    async def _translate_chunk(self, client: httpx.AsyncClient, text: str,
                               source_language: str, target_language: str) -> str:
        """Send one chunk and return the raw translated text.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
            TranslationGatewayError: On an unusable response body
        """
        pass

    async def _translate_chunk_with_retry(self, text: str, source_language: str,
                                          target_language: str) -> str:
        client = await self._get_client()
        last_error: Optional[Exception] = None
        for attempt in range(self.max_attempts):
            try:
                return await self._translate_chunk(client, text, source_language, target_language)
            except httpx.HTTPStatusError as e:
                last_error = TranslationGatewayError(
                    f"HTTP {e.response.status_code}: {e.response.text[:200]}",
                    status_code=e.response.status_code
                )
            except (httpx.TransportError, ValueError) as e:
                # ValueError covers undecodable JSON bodies
                last_error = TranslationGatewayError(f"{type(e).__name__}: {e}")
            except TranslationGatewayError as e:
                last_error = e

            warning(f"Gateway attempt {attempt + 1}/{self.max_attempts} failed: {last_error}")
            if attempt < self.max_attempts - 1 and self.retry_delay > 0:
                await asyncio.sleep(self.retry_delay)

        raise last_error

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        """Translate ``text`` chunk by chunk, then clean the joined result.

        Raises:
            TranslationGatewayError: If any chunk fails or the result is empty
        """
        debug("Gateway request", LogType.GATEWAY_REQUEST, {
            'source_language': source_language,
            'target_language': target_language,
            'chars': len(text)
        })

        translated_chunks = []
        for chunk in split_into_chunks(text, self.chunk_size):
            translated_chunks.append(
                await self._translate_chunk_with_retry(chunk, source_language, target_language)
            )

        translated = clean_translation(' '.join(translated_chunks))
        if not translated:
            raise TranslationGatewayError("Gateway returned an empty translation")
        return translated
