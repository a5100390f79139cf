"""
Translate-all job handlers
"""
import asyncio
import threading
from datetime import datetime

from storyglot.core.exceptions import StoryglotError
from storyglot.core.gateway import create_gateway
from storyglot.utils.unified_logger import setup_web_logger
from .websocket import emit_update


def run_translation_async_wrapper(session_id, config, state_manager, socketio):
    """
    Run a translate-all job on a fresh event loop (called on a worker thread)

    Args:
        session_id (str): Session identifier
        config (dict): Job configuration (target_languages, source_language, provider)
        state_manager: Session state manager instance
        socketio: SocketIO instance
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        loop.run_until_complete(perform_translation(session_id, config, state_manager, socketio))
    except Exception as e:
        error_msg = f"Uncaught error in translation wrapper {session_id}: {e}"
        if state_manager.exists(session_id):
            state_manager.set_field(session_id, 'status', 'error')
            state_manager.set_field(session_id, 'error', error_msg)
            state_manager.append_log(session_id, f"[{datetime.now().strftime('%H:%M:%S')}] CRITICAL: {error_msg}")
            emit_update(socketio, session_id, {'status': 'error', 'error': error_msg}, state_manager)
    finally:
        loop.close()


async def perform_translation(session_id, config, state_manager, socketio, gateway=None):
    """
    Perform one translate-all run for a session

    Args:
        session_id (str): Session identifier
        config (dict): Job configuration
        state_manager: Session state manager instance
        socketio: SocketIO instance (may be None)
        gateway: Gateway to use; built from config when omitted
    """
    session = state_manager.get_session(session_id)
    if session is None:
        return

    state_manager.set_field(session_id, 'status', 'running')
    emit_update(socketio, session_id, {'status': 'running'}, state_manager)

    def web_callback(log_entry):
        state_manager.append_log(session_id, log_entry)
        emit_update(socketio, session_id, {'log': log_entry['message'], 'log_entry': log_entry}, state_manager)

    logger = setup_web_logger(web_callback, storage_callback=None)
    session.orchestrator.logger = logger
    session.orchestrator.progress_callback = (
        lambda percent: emit_update(socketio, session_id, {'progress': percent}, state_manager)
    )

    owns_gateway = gateway is None
    if owns_gateway:
        gateway_kwargs = dict(config.get('gateway_options') or {})
        if config.get('provider'):
            gateway = create_gateway(config['provider'], **gateway_kwargs)
        else:
            gateway = create_gateway(**gateway_kwargs)

    try:
        await session.translate_all(
            target_languages=config.get('target_languages'),
            source_language=config.get('source_language'),
            check_interruption_callback=lambda: state_manager.is_interrupted(session_id),
            gateway=gateway
        )
        run = session.orchestrator.last_run
        state_manager.set_field(session_id, 'status', run.status)
        state_manager.set_field(session_id, 'error', run.error)
    except StoryglotError as e:
        state_manager.set_field(session_id, 'status', 'error')
        state_manager.set_field(session_id, 'error', str(e))
    finally:
        if owns_gateway:
            await gateway.close()
        session.orchestrator.logger = None
        session.orchestrator.progress_callback = None

    emit_update(socketio, session_id, {
        'status': state_manager.get_field(session_id, 'status'),
        'stats': session.orchestrator.last_run.to_dict()
    }, state_manager)


def start_translation_job(session_id, config, state_manager, socketio):
    """Start a translate-all job on a daemon thread"""
    thread = threading.Thread(
        target=run_translation_async_wrapper,
        args=(session_id, config, state_manager, socketio),
        daemon=True
    )
    thread.start()
