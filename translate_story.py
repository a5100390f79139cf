"""
Command-line interface for translating a story document into other languages
"""
import os
import sys
import json
import argparse
import asyncio

from storyglot.config import (
    TRANSLATION_PROVIDER,
    API_ENDPOINT,
    OLLAMA_API_ENDPOINT,
    TRANSLATE_ROUTE_ENDPOINT,
    TRANSLATION_MODEL,
    OLLAMA_MODEL,
    TRANSLATION_API_KEY,
    DEFAULT_LANGUAGE
)
from storyglot.core import DocumentSession, StoryglotError, VersionStore, pages_from_list
from storyglot.core.gateway import create_gateway
from storyglot.utils.unified_logger import setup_cli_logger, LogType


def load_session(path, source_lang):
    """Build a session from a list of pages or a language_versions document"""
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)

    if isinstance(raw, list):
        return DocumentSession(source_lang or DEFAULT_LANGUAGE, pages_from_list(raw))

    store = VersionStore.from_dict(raw)
    default_language = raw.get('default_language') or source_lang or DEFAULT_LANGUAGE
    if not store.has_language(default_language):
        raise StoryglotError(f"Document has no {default_language} version")

    session = DocumentSession(default_language)
    for version in store.snapshot():
        session.store.set_version(version)
    return session


def build_gateway(args):
    """Create the gateway, passing only the options the provider accepts"""
    if args.provider == "ollama":
        return create_gateway("ollama",
                              api_endpoint=args.api_endpoint or OLLAMA_API_ENDPOINT,
                              model=args.model or OLLAMA_MODEL)
    if args.provider == "http":
        return create_gateway("http",
                              api_endpoint=args.api_endpoint or TRANSLATE_ROUTE_ENDPOINT,
                              api_key=args.api_key or None)
    return create_gateway("openai",
                          api_endpoint=args.api_endpoint or API_ENDPOINT,
                          model=args.model or TRANSLATION_MODEL,
                          api_key=args.api_key or None)


async def run(session, args, logger):
    gateway = build_gateway(args)
    session.orchestrator.logger = logger
    try:
        await session.translate_all(
            target_languages=args.target_langs,
            source_language=args.source_lang,
            gateway=gateway
        )
    finally:
        await gateway.close()
    return session.orchestrator.last_run


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Translate a story document into one or more languages.")
    parser.add_argument("-i", "--input", required=True, help="Path to the input JSON (list of pages or language_versions document).")
    parser.add_argument("-o", "--output", default=None, help="Path to the output JSON. If not specified, uses input filename with suffix.")
    parser.add_argument("-sl", "--source_lang", default=None, help=f"Source language (default: the document's default language, else {DEFAULT_LANGUAGE}).")
    parser.add_argument("-tl", "--target_langs", nargs="+", required=True, help="Target languages, processed in the given order.")
    parser.add_argument("--provider", default=TRANSLATION_PROVIDER, choices=["openai", "ollama", "http"], help=f"Translation provider (default: {TRANSLATION_PROVIDER}).")
    parser.add_argument("--api_endpoint", default=None, help="API endpoint for the selected provider.")
    parser.add_argument("-m", "--model", default=None, help="Model name for the openai or ollama provider.")
    parser.add_argument("--api_key", default=TRANSLATION_API_KEY, help="API key for the openai or http provider.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")

    args = parser.parse_args()

    if args.output is None:
        base, _ = os.path.splitext(args.input)
        args.output = f"{base}_translated.json"

    logger = setup_cli_logger(enable_colors=not args.no_color)

    if args.provider == "openai" and not args.api_key:
        parser.error("--api_key (or TRANSLATION_API_KEY) is required when using the openai provider")

    try:
        session = load_session(args.input, args.source_lang)
        stats = asyncio.run(run(session, args, logger))
    except (OSError, ValueError, StoryglotError) as e:
        logger.error(f"Translation failed: {str(e)}", LogType.ERROR_DETAIL, {
            'details': str(e),
            'input_file': args.input
        })
        sys.exit(1)

    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump({**session.to_dict(), "stats": stats.to_dict()}, f, ensure_ascii=False, indent=2)

    logger.info(f"Wrote {args.output}", LogType.GENERAL, {'output_file': args.output})
    if stats.status == "failed":
        sys.exit(1)
