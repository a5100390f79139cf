"""
Configuration and health check routes
"""
from flask import Blueprint, jsonify

from storyglot import __version__
from storyglot.config import (
    TRANSLATION_PROVIDER,
    TRANSLATION_MODEL,
    DEFAULT_LANGUAGE,
    FINGERPRINT_PER_TARGET,
    TRANSLATION_CHUNK_SIZE,
    MAX_TRANSLATION_ATTEMPTS
)


def create_config_blueprint():
    """Create and configure the config blueprint"""
    bp = Blueprint('config', __name__)

    @bp.route('/api/health', methods=['GET'])
    def health_check():
        """API health check endpoint"""
        return jsonify({
            "status": "ok",
            "message": "StoryGlot API is running",
            "version": __version__,
            "block_types": ["text", "image", "video"]
        })

    @bp.route('/api/config', methods=['GET'])
    def get_default_config():
        """Get default configuration values"""
        return jsonify({
            "translation_provider": TRANSLATION_PROVIDER,
            "translation_model": TRANSLATION_MODEL,
            "default_language": DEFAULT_LANGUAGE,
            "fingerprint_per_target": FINGERPRINT_PER_TARGET,
            "chunk_size": TRANSLATION_CHUNK_SIZE,
            "max_attempts": MAX_TRANSLATION_ATTEMPTS
        })

    return bp
