"""
Translation gateways: the only I/O boundary of the translation core.
"""

from storyglot.config import TRANSLATION_PROVIDER, TRANSLATION_API_KEY
from .base import TranslationGateway
from .providers.http_route import HttpRouteGateway
from .providers.openai import OpenAICompatibleGateway
from .providers.ollama import OllamaGateway

__all__ = [
    'TranslationGateway',
    'HttpRouteGateway',
    'OpenAICompatibleGateway',
    'OllamaGateway',
    'create_gateway'
]


def create_gateway(provider_type: str = TRANSLATION_PROVIDER, **kwargs) -> TranslationGateway:
    """Factory function to create translation gateways"""
    provider = (provider_type or "").lower()
    if provider == "openai":
        kwargs.setdefault("api_key", TRANSLATION_API_KEY or None)
        return OpenAICompatibleGateway(**kwargs)
    elif provider == "ollama":
        return OllamaGateway(**kwargs)
    elif provider == "http":
        return HttpRouteGateway(**kwargs)
    raise ValueError(f"Unknown translation provider: {provider_type}")
