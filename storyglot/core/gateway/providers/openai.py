"""
OpenAI-compatible gateway implementation.

Works with any chat-completions endpoint (Together AI, OpenAI, vLLM,
llama.cpp, LM Studio...).
"""

from typing import Optional
import httpx

from storyglot.config import (
    API_ENDPOINT,
    TRANSLATION_MODEL,
    TRANSLATION_MAX_TOKENS,
    TRANSLATION_TEMPERATURE
)
from storyglot.core.exceptions import TranslationGatewayError
from ..base import TranslationGateway

SYSTEM_PROMPT = ("You are a professional translator. Translate the following text from "
                 "{source_language} to {target_language}. Maintain the original meaning, tone, "
                 "and style as closely as possible. Return only the translation.")


class OpenAICompatibleGateway(TranslationGateway):
    """Chat-completions translation gateway"""

    def __init__(self, api_endpoint: str = API_ENDPOINT, model: str = TRANSLATION_MODEL,
                 api_key: Optional[str] = None, max_tokens: int = TRANSLATION_MAX_TOKENS,
                 temperature: float = TRANSLATION_TEMPERATURE, **kwargs):
        super().__init__(**kwargs)
        self.api_endpoint = api_endpoint
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def _translate_chunk(self, client: httpx.AsyncClient, text: str,
                               source_language: str, target_language: str) -> str:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(
                    source_language=source_language, target_language=target_language)},
                {"role": "user", "content": text}
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stream": False
        }

        response = await client.post(self.api_endpoint, json=payload, headers=headers, timeout=self.timeout)
        response.raise_for_status()

        body = response.json()
        choices = body.get("choices") if isinstance(body, dict) else None
        first = choices[0] if isinstance(choices, list) and choices else None
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise TranslationGatewayError("Response has no message content")
        return content.strip()
