"""
Gateway for a plain translate route.

Request:  {"text": str, "sourceLanguage": str, "targetLanguage": str}
Response: {"translatedText": str}
"""

from typing import Optional
import httpx

from storyglot.config import TRANSLATE_ROUTE_ENDPOINT
from storyglot.core.exceptions import TranslationGatewayError
from ..base import TranslationGateway


class HttpRouteGateway(TranslationGateway):
    """Posts each chunk to a translate route and reads ``translatedText``."""

    def __init__(self, api_endpoint: str = TRANSLATE_ROUTE_ENDPOINT,
                 api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_endpoint = api_endpoint
        self.api_key = api_key

    async def _translate_chunk(self, client: httpx.AsyncClient, text: str,
                               source_language: str, target_language: str) -> str:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        response = await client.post(
            self.api_endpoint,
            json={"text": text, "sourceLanguage": source_language, "targetLanguage": target_language},
            headers=headers,
            timeout=self.timeout
        )
        response.raise_for_status()

        body = response.json()
        translated = body.get("translatedText") if isinstance(body, dict) else None
        if not isinstance(translated, str):
            raise TranslationGatewayError("Response has no 'translatedText' string")
        return translated
