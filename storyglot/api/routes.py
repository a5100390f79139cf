"""
Flask routes orchestrator for the StoryGlot API

Registers the route blueprints:

- blueprints/config_routes.py: Health check and default configuration
- blueprints/session_routes.py: Sessions, page edits and languages
- blueprints/translation_routes.py: Translate-all jobs and progress
"""
import traceback
from flask import jsonify

from storyglot.utils.unified_logger import error
from .blueprints import (
    create_config_blueprint,
    create_session_blueprint,
    create_translation_blueprint
)


def configure_routes(app, state_manager, start_translation_job):
    """
    Configure Flask routes by registering all blueprints

    Args:
        app: Flask application instance
        state_manager: Session state manager
        start_translation_job: Function to start translation jobs, called as (session_id, config)
    """
    app.register_blueprint(create_config_blueprint())
    app.register_blueprint(create_session_blueprint(state_manager))
    app.register_blueprint(create_translation_blueprint(state_manager, start_translation_job))

    _register_error_handlers(app)


def _register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def route_not_found(err):
        return jsonify({"error": "API Endpoint not found"}), 404

    @app.errorhandler(500)
    def internal_server_error(err):
        error(f"INTERNAL SERVER ERROR: {err}\nTRACEBACK:\n{traceback.format_exc()}")
        return jsonify({"error": "Internal server error", "details": str(err)}), 500
