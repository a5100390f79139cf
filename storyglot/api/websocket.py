"""
WebSocket handlers for real-time progress
"""
from flask import request
from flask_socketio import emit

from storyglot.utils.unified_logger import warning


def configure_websocket_handlers(socketio, state_manager):
    """Configure WebSocket event handlers"""

    @socketio.on('connect')
    def handle_websocket_connect():
        emit('connected', {'message': 'Connected to StoryGlot via WebSocket', 'sid': request.sid})

    @socketio.on('disconnect')
    def handle_websocket_disconnect():
        pass


def emit_update(socketio, session_id, data_to_emit, state_manager):
    """
    Emit a translation_update event for a session

    Args:
        socketio: SocketIO instance (None disables pushing)
        session_id (str): Session identifier
        data_to_emit (dict): Data to send
        state_manager: Session state manager instance
    """
    if socketio is None:
        return
    status = state_manager.get_job_status(session_id)
    if status is None:
        return
    data_to_emit['session_id'] = session_id
    data_to_emit.setdefault('progress', status['progress'])
    data_to_emit.setdefault('status', status['status'])
    try:
        socketio.emit('translation_update', data_to_emit, namespace='/')
    except Exception as e:
        warning(f"WebSocket emission error for {session_id}: {e}")
