"""
Flask web server for the StoryGlot API with WebSocket support
"""
import logging
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Reduce verbosity of werkzeug (Flask HTTP server logs)
logging.getLogger('werkzeug').setLevel(logging.WARNING)

from storyglot import __version__
from storyglot.config import (
    HOST,
    PORT,
    DEBUG_MODE,
    TRANSLATION_PROVIDER,
    TRANSLATION_MODEL,
    DEFAULT_LANGUAGE
)
from storyglot.api.routes import configure_routes
from storyglot.api.websocket import configure_websocket_handlers
from storyglot.api.handlers import start_translation_job
from storyglot.api.session_state import get_state_manager


app = Flask(__name__)
CORS(app)
socketio = SocketIO(app, cors_allowed_origins="*")

# Thread-safe state manager
state_manager = get_state_manager()


def validate_configuration():
    """Validate required configuration before starting server"""
    issues = []

    if not PORT or not isinstance(PORT, int):
        issues.append("PORT must be a valid integer")
    if not TRANSLATION_PROVIDER:
        issues.append("TRANSLATION_PROVIDER must be configured")
    if not DEFAULT_LANGUAGE:
        issues.append("DEFAULT_LANGUAGE must be configured")

    if issues:
        logger.error("=" * 70)
        logger.error("CONFIGURATION ERROR")
        for issue in issues:
            logger.error(f"   - {issue}")
        logger.error("Create a .env file from .env.example and restart the server")
        logger.error("=" * 70)
        raise ValueError("Configuration validation failed. See errors above.")

    logger.info("Configuration validated successfully")


def start_job_wrapper(session_id, config):
    """Wrapper to inject dependencies into job starter"""
    start_translation_job(session_id, config, state_manager, socketio)


# Configure routes and WebSocket handlers
configure_routes(app, state_manager, start_job_wrapper)
configure_websocket_handlers(socketio, state_manager)


if __name__ == '__main__':
    validate_configuration()

    logger.info("=" * 60)
    logger.info(f"STORYGLOT SERVER (Version {__version__})")
    logger.info("=" * 60)
    logger.info(f"   - Provider: {TRANSLATION_PROVIDER} ({TRANSLATION_MODEL})")
    logger.info(f"   - Default language: {DEFAULT_LANGUAGE}")
    logger.info(f"   - API: http://{HOST}:{PORT}/api/")
    logger.info(f"   - Health Check: http://{HOST}:{PORT}/api/health")
    logger.info("")

    if HOST == '0.0.0.0':
        logger.warning("Server is binding to 0.0.0.0 (all network interfaces)")
        logger.warning("   For production, use a proper WSGI server like gunicorn:")
        logger.warning("   gunicorn --worker-class eventlet -w 1 --bind 0.0.0.0:5000 storyglot_api:app")

    socketio.run(app, debug=DEBUG_MODE, host=HOST, port=PORT, allow_unsafe_werkzeug=True)
