"""
Ollama gateway implementation (local /api/chat, non-streaming).
"""

import httpx

from storyglot.config import OLLAMA_API_ENDPOINT, OLLAMA_MODEL, TRANSLATION_TEMPERATURE
from storyglot.core.exceptions import TranslationGatewayError
from ..base import TranslationGateway
from .openai import SYSTEM_PROMPT


class OllamaGateway(TranslationGateway):
    """Ollama chat API gateway"""

    def __init__(self, api_endpoint: str = OLLAMA_API_ENDPOINT, model: str = OLLAMA_MODEL,
                 temperature: float = TRANSLATION_TEMPERATURE, **kwargs):
        super().__init__(**kwargs)
        # Accept the /api/generate form used by older setups
        self.api_endpoint = api_endpoint.replace('/api/generate', '/api/chat')
        self.model = model
        self.temperature = temperature

    async def _translate_chunk(self, client: httpx.AsyncClient, text: str,
                               source_language: str, target_language: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(
                    source_language=source_language, target_language=target_language)},
                {"role": "user", "content": text}
            ],
            "stream": False,
            "think": False,
            "options": {"temperature": self.temperature}
        }

        response = await client.post(self.api_endpoint, json=payload, timeout=self.timeout)
        response.raise_for_status()

        body = response.json()
        message = body.get("message") if isinstance(body, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise TranslationGatewayError("Ollama response has no message content")
        return content.strip()
