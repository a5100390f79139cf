"""
Translation gateway implementations

Providers:
    - http_route: a translate route speaking {text, sourceLanguage, targetLanguage}
    - openai: OpenAI-compatible chat completions (Together AI by default)
    - ollama: Local Ollama server
"""

__all__ = []
