"""
Session, page and language management routes
"""
import uuid
from flask import Blueprint, request, jsonify

from storyglot.config import DEFAULT_LANGUAGE
from storyglot.core.exceptions import StructuralError, UnknownLanguageError
from storyglot.core.models import PageContent, pages_from_list
from storyglot.core.session import DocumentSession


def _structural_error_response(error):
    body = {"error": str(error)}
    if error.page_index is not None:
        body["page_index"] = error.page_index
    if error.block_index is not None:
        body["block_index"] = error.block_index
    return jsonify(body), 400


def create_session_blueprint(state_manager):
    """
    Create and configure the session blueprint

    Args:
        state_manager: Session state manager instance
    """
    bp = Blueprint('sessions', __name__)

    def _busy_response():
        return jsonify({"error": "A translation is running for this session. Wait for it or interrupt it."}), 409

    @bp.route('/api/sessions', methods=['POST'])
    def create_session():
        """Create an editing session from a default language and optional pages"""
        data = request.get_json(silent=True) or {}
        default_language = data.get('default_language') or DEFAULT_LANGUAGE
        if not isinstance(default_language, str) or not default_language.strip():
            return jsonify({"error": "default_language must be a non-empty string"}), 400

        try:
            pages = pages_from_list(data.get('pages', []))
        except StructuralError as e:
            return _structural_error_response(e)

        session_id = f"session_{uuid.uuid4().hex[:12]}"
        state_manager.create_session(session_id, DocumentSession(default_language.strip(), pages))
        return jsonify({
            "session_id": session_id,
            "default_language": default_language.strip(),
            "page_count": len(pages)
        }), 201

    @bp.route('/api/sessions', methods=['GET'])
    def list_sessions():
        """List all sessions"""
        summaries = state_manager.get_session_summaries()
        return jsonify({"sessions": summaries, "total": len(summaries)})

    @bp.route('/api/sessions/<session_id>', methods=['GET'])
    def get_session(session_id):
        """Return every language version of a session"""
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        return jsonify({"session_id": session_id, **session.to_dict()})

    @bp.route('/api/sessions/<session_id>', methods=['DELETE'])
    def delete_session(session_id):
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        if session.is_translating:
            return _busy_response()
        state_manager.delete_session(session_id)
        return jsonify({"message": f"Session {session_id} deleted"})

    @bp.route('/api/sessions/<session_id>/versions/<language>', methods=['GET'])
    def get_version(session_id, language):
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        try:
            version = session.get_version(language)
        except UnknownLanguageError as e:
            return jsonify({"error": str(e)}), 404
        return jsonify(version.to_dict())

    @bp.route('/api/sessions/<session_id>/pages/<int:page_index>', methods=['PUT'])
    def edit_page(session_id, page_index):
        """Overwrite a default-language page"""
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        data = request.get_json(silent=True) or {}
        if 'content' not in data:
            return jsonify({"error": "Missing field: content"}), 400
        try:
            content = PageContent.from_dict(data['content'])
            session.edit_page(page_index, content)
        except StructuralError as e:
            return _structural_error_response(e)
        return jsonify({"page_index": page_index, "content": content.to_dict()})

    @bp.route('/api/sessions/<session_id>/pages', methods=['POST'])
    def add_page(session_id):
        """Append a page to the default-language version"""
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        data = request.get_json(silent=True) or {}
        try:
            content = PageContent.from_dict(data.get('content'))
        except StructuralError as e:
            return _structural_error_response(e)
        page_index = session.add_page(content)
        return jsonify({"page_index": page_index}), 201

    @bp.route('/api/sessions/<session_id>/pages/<int:page_index>', methods=['DELETE'])
    def delete_page(session_id, page_index):
        """Delete a page from every language version"""
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        if session.is_translating:
            return _busy_response()
        try:
            session.delete_page(page_index)
        except StructuralError as e:
            return _structural_error_response(e)
        return jsonify({"message": f"Page {page_index} deleted"})

    @bp.route('/api/sessions/<session_id>/languages', methods=['POST'])
    def add_language(session_id):
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        data = request.get_json(silent=True) or {}
        language = data.get('language')
        if not isinstance(language, str):
            return jsonify({"error": "Missing or empty field: language"}), 400
        try:
            created = session.add_language(language)
        except StructuralError as e:
            return _structural_error_response(e)
        return jsonify({"language": language.strip(), "created": created,
                        "languages": session.languages}), 201 if created else 200

    @bp.route('/api/sessions/<session_id>/languages/<language>', methods=['DELETE'])
    def remove_language(session_id, language):
        session = state_manager.get_session(session_id)
        if session is None:
            return jsonify({"error": "Session not found"}), 404
        if session.is_translating:
            return _busy_response()
        try:
            session.remove_language(language)
        except UnknownLanguageError as e:
            return jsonify({"error": str(e)}), 404
        except StructuralError as e:
            return _structural_error_response(e)
        return jsonify({"languages": session.languages})

    return bp
