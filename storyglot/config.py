"""
Centralized configuration
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

_config_logger = logging.getLogger('config')

_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)

_env_file = Path.cwd() / '.env'
if not _env_file.exists():
    _config_logger.info(f".env not found in {Path.cwd()}, using environment and defaults "
                        "(see .env.example)")

_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"load_dotenv() returned: {_dotenv_result}")

# Translation provider: 'openai' (any OpenAI-compatible chat API, Together AI by default),
# 'ollama' or 'http' (a translate route speaking {text, sourceLanguage, targetLanguage})
TRANSLATION_PROVIDER = os.getenv('TRANSLATION_PROVIDER', 'openai')
API_ENDPOINT = os.getenv('API_ENDPOINT', 'https://api.together.xyz/v1/chat/completions')
TRANSLATION_MODEL = os.getenv('TRANSLATION_MODEL', 'meta-llama/Llama-3.2-11B-Vision-Instruct-Turbo')
TRANSLATION_API_KEY = os.getenv('TRANSLATION_API_KEY', os.getenv('TOGETHER_API_KEY', ''))

OLLAMA_API_ENDPOINT = os.getenv('OLLAMA_API_ENDPOINT', 'http://localhost:11434/api/chat')
OLLAMA_MODEL = os.getenv('OLLAMA_MODEL', 'qwen3:14b')

TRANSLATE_ROUTE_ENDPOINT = os.getenv('TRANSLATE_ROUTE_ENDPOINT', 'http://localhost:3000/api/translate')

REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '120'))
MAX_TRANSLATION_ATTEMPTS = int(os.getenv('MAX_TRANSLATION_ATTEMPTS', '2'))
RETRY_DELAY_SECONDS = float(os.getenv('RETRY_DELAY_SECONDS', '2'))

# Long blocks are sent in fixed-size character chunks and joined back with a space
TRANSLATION_CHUNK_SIZE = int(os.getenv('TRANSLATION_CHUNK_SIZE', '1000'))
TRANSLATION_MAX_TOKENS = int(os.getenv('TRANSLATION_MAX_TOKENS', '300'))
TRANSLATION_TEMPERATURE = float(os.getenv('TRANSLATION_TEMPERATURE', '0.3'))

DEFAULT_LANGUAGE = os.getenv('DEFAULT_LANGUAGE', 'English')

# Key fingerprints by (source, target, page, block). Set to false to share one
# fingerprint per source block across all target languages.
FINGERPRINT_PER_TARGET = os.getenv('FINGERPRINT_PER_TARGET', 'true').lower() == 'true'

# Server configuration
HOST = os.getenv('HOST', '127.0.0.1')
PORT = int(os.getenv('PORT', '5000'))

DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("=" * 60)
    _config_logger.debug("LOADED CONFIGURATION VALUES:")
    _config_logger.debug(f"   TRANSLATION_PROVIDER: {TRANSLATION_PROVIDER}")
    _config_logger.debug(f"   API_ENDPOINT: {API_ENDPOINT}")
    _config_logger.debug(f"   TRANSLATION_MODEL: {TRANSLATION_MODEL}")
    _config_logger.debug(f"   TRANSLATION_API_KEY: {'***' + TRANSLATION_API_KEY[-4:] if TRANSLATION_API_KEY else '(not set)'}")
    _config_logger.debug(f"   OLLAMA_API_ENDPOINT: {OLLAMA_API_ENDPOINT}")
    _config_logger.debug(f"   DEFAULT_LANGUAGE: {DEFAULT_LANGUAGE}")
    _config_logger.debug(f"   FINGERPRINT_PER_TARGET: {FINGERPRINT_PER_TARGET}")
    _config_logger.debug(f"   HOST: {HOST}  PORT: {PORT}")
    _config_logger.debug("=" * 60)
