"""Unit tests for translation gateways using a mocked HTTP transport."""

import json

import httpx
import pytest

from storyglot.core.exceptions import TranslationGatewayError
from storyglot.core.gateway import (
    HttpRouteGateway,
    OllamaGateway,
    OpenAICompatibleGateway,
    create_gateway
)


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpRouteGateway:
    """Test the {text, sourceLanguage, targetLanguage} route gateway."""

    @pytest.mark.asyncio
    async def test_posts_contract_body(self):
        """The request body uses the route's field names."""
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"translatedText": "Bonjour"})

        gateway = HttpRouteGateway("http://test/api/translate", client=_client(handler),
                                   max_attempts=1, retry_delay=0)
        result = await gateway.translate("Hello", "English", "French")

        assert result == "Bonjour"
        assert seen == [{"text": "Hello", "sourceLanguage": "English", "targetLanguage": "French"}]

    @pytest.mark.asyncio
    async def test_long_text_is_chunked_and_joined(self):
        """Each chunk is translated separately and joined with a space."""
        seen = []

        def handler(request):
            text = json.loads(request.content)["text"]
            seen.append(text)
            return httpx.Response(200, json={"translatedText": text.upper()})

        gateway = HttpRouteGateway("http://test", client=_client(handler),
                                   chunk_size=4, max_attempts=1, retry_delay=0)
        result = await gateway.translate("abcdefgh", "English", "French")

        assert seen == ["abcd", "efgh"]
        assert result == "ABCD EFGH"

    @pytest.mark.asyncio
    async def test_http_error_raises_gateway_error(self):
        gateway = HttpRouteGateway("http://test", client=_client(lambda r: httpx.Response(500, text="down")),
                                   max_attempts=1, retry_delay=0)
        with pytest.raises(TranslationGatewayError) as exc_info:
            await gateway.translate("Hello", "English", "French")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_missing_field_raises(self):
        gateway = HttpRouteGateway("http://test", client=_client(lambda r: httpx.Response(200, json={})),
                                   max_attempts=1, retry_delay=0)
        with pytest.raises(TranslationGatewayError):
            await gateway.translate("Hello", "English", "French")

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        """A transient failure is retried up to max_attempts."""
        attempts = []

        def handler(request):
            attempts.append(1)
            if len(attempts) == 1:
                return httpx.Response(503, text="busy")
            return httpx.Response(200, json={"translatedText": "Hallo"})

        gateway = HttpRouteGateway("http://test", client=_client(handler),
                                   max_attempts=2, retry_delay=0)
        assert await gateway.translate("Hello", "English", "German") == "Hallo"
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_empty_cleaned_result_raises(self):
        """A translation that cleans down to nothing is a failure."""
        gateway = HttpRouteGateway("http://test",
                                   client=_client(lambda r: httpx.Response(200, json={"translatedText": "  \n "})),
                                   max_attempts=1, retry_delay=0)
        with pytest.raises(TranslationGatewayError):
            await gateway.translate("Hello", "English", "French")

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        client = _client(lambda r: httpx.Response(200, json={"translatedText": "x"}))
        gateway = HttpRouteGateway("http://test", client=client)
        await gateway.close()
        assert not client.is_closed
        await client.aclose()


class TestOpenAICompatibleGateway:
    """Test the chat-completions gateway."""

    @pytest.mark.asyncio
    async def test_request_shape_and_response(self):
        seen = []

        def handler(request):
            seen.append((request.headers.get("Authorization"), json.loads(request.content)))
            return httpx.Response(200, json={"choices": [{"message": {"content": " Hola "}}]})

        gateway = OpenAICompatibleGateway("http://test/v1/chat/completions", model="m",
                                          api_key="secret", client=_client(handler),
                                          max_attempts=1, retry_delay=0)
        result = await gateway.translate("Hello", "English", "Spanish")

        auth, payload = seen[0]
        assert result == "Hola"
        assert auth == "Bearer secret"
        assert payload["model"] == "m"
        assert payload["max_tokens"] == 300
        assert payload["temperature"] == 0.3
        assert payload["messages"][1] == {"role": "user", "content": "Hello"}
        assert "Spanish" in payload["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_no_choices_raises(self):
        gateway = OpenAICompatibleGateway("http://test", client=_client(lambda r: httpx.Response(200, json={})),
                                          max_attempts=1, retry_delay=0)
        with pytest.raises(TranslationGatewayError):
            await gateway.translate("Hello", "English", "Spanish")

    @pytest.mark.parametrize("body", [
        {"choices": ["not a dict"]},
        {"choices": [{"message": "text"}]},
        {"choices": "nope"},
        ["a", "list"],
    ])
    @pytest.mark.asyncio
    async def test_malformed_body_is_retried_then_raises(self, body):
        """Unexpected JSON shapes are gateway errors and go through the retry loop."""
        attempts = []

        def handler(request):
            attempts.append(1)
            return httpx.Response(200, json=body)

        gateway = OpenAICompatibleGateway("http://test", client=_client(handler),
                                          max_attempts=2, retry_delay=0)
        with pytest.raises(TranslationGatewayError):
            await gateway.translate("Hello", "English", "Spanish")
        assert len(attempts) == 2


class TestOllamaGateway:

    @pytest.mark.asyncio
    async def test_chat_request(self):
        seen = []

        def handler(request):
            seen.append((str(request.url), json.loads(request.content)))
            return httpx.Response(200, json={"message": {"content": "Ciao"}})

        gateway = OllamaGateway("http://localhost:11434/api/generate", model="qwen",
                                client=_client(handler), max_attempts=1, retry_delay=0)
        assert await gateway.translate("Hello", "English", "Italian") == "Ciao"

        url, payload = seen[0]
        assert url.endswith("/api/chat")
        assert payload["stream"] is False

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self):
        gateway = OllamaGateway("http://test/api/chat",
                                client=_client(lambda r: httpx.Response(200, json=["Ciao"])),
                                max_attempts=1, retry_delay=0)
        with pytest.raises(TranslationGatewayError):
            await gateway.translate("Hello", "English", "Italian")


class TestCreateGateway:

    def test_known_providers(self):
        assert isinstance(create_gateway("openai", api_key="k"), OpenAICompatibleGateway)
        assert isinstance(create_gateway("ollama"), OllamaGateway)
        assert isinstance(create_gateway("HTTP"), HttpRouteGateway)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            create_gateway("carrier-pigeon")
