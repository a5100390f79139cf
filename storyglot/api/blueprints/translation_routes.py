"""
Translate-all job routes
"""
import os
from flask import Blueprint, request, jsonify

# Gateway options each provider accepts from a request
PROVIDER_OPTIONS = {
    'openai': ('api_endpoint', 'model', 'api_key'),
    'ollama': ('api_endpoint', 'model'),
    'http': ('api_endpoint', 'api_key'),
}


def _resolve_api_key(value, env_var_name):
    """
    Resolve API key value from request or environment.

    Args:
        value: Value from request (can be actual key, '__USE_ENV__', or empty)
        env_var_name: Name of environment variable to fall back to

    Returns:
        Resolved API key string
    """
    if value == '__USE_ENV__' or not value:
        return os.getenv(env_var_name, '')
    return value


def create_translation_blueprint(state_manager, start_translation_job):
    """
    Create and configure the translation blueprint

    Args:
        state_manager: Session state manager instance
        start_translation_job: Function to start translation jobs
    """
    bp = Blueprint('translation', __name__)

    @bp.route('/api/sessions/<session_id>/translate', methods=['POST'])
    def start_translation_request(session_id):
        """Start a translate-all job for a session"""
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404

        data = request.get_json(silent=True) or {}
        target_languages = data.get('target_languages')
        if target_languages is not None and (
                not isinstance(target_languages, list)
                or not all(isinstance(lang, str) and lang.strip() for lang in target_languages)):
            return jsonify({"error": "target_languages must be a list of language names"}), 400

        source_language = data.get('source_language')
        if source_language is not None and not session.store.has_language(source_language):
            return jsonify({"error": f"No version for language: {source_language}"}), 404

        provider = data.get('provider')
        if provider is not None and provider not in PROVIDER_OPTIONS:
            return jsonify({"error": f"Unknown translation provider: {provider}"}), 400

        gateway_options = {}
        for option in PROVIDER_OPTIONS.get(provider, ()):
            if option == 'api_key':
                value = _resolve_api_key(data.get('api_key'), 'TRANSLATION_API_KEY')
            else:
                value = data.get(option)
            if value:
                gateway_options[option] = value

        if not state_manager.begin_job(session_id):
            return jsonify({
                "error": "A translation is already running for this session",
                "progress": session.progress
            }), 409

        config = {
            'target_languages': [lang.strip() for lang in target_languages] if target_languages else target_languages,
            'source_language': source_language,
            'provider': provider,
            'gateway_options': gateway_options
        }
        start_translation_job(session_id, config)

        return jsonify({
            "session_id": session_id,
            "message": "Translation queued.",
            "config_received": {k: v for k, v in config.items() if k != 'gateway_options'}
        }), 202

    @bp.route('/api/sessions/<session_id>/translation', methods=['GET'])
    def get_translation_job_status(session_id):
        """Poll progress of the current or last translate-all run"""
        status = state_manager.get_job_status(session_id)
        if status is None:
            return jsonify({"error": "Session not found"}), 404
        return jsonify(status)

    @bp.route('/api/sessions/<session_id>/translation/interrupt', methods=['POST'])
    def interrupt_translation_job(session_id):
        """Interrupt a running translate-all job"""
        if not state_manager.exists(session_id):
            return jsonify({"error": "Session not found"}), 404

        status = state_manager.get_job_status(session_id)
        if status['status'] in ('running', 'queued') or status['is_translating']:
            state_manager.set_interrupted(session_id, True)
            return jsonify({
                "message": "Interruption signal sent. Translation will stop before the next page or block."
            }), 200
        return jsonify({
            "message": "The translation is not in an interruptible state (e.g., already completed or failed)."
        }), 400

    return bp
