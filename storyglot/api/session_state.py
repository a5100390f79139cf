"""
Thread-safe registry of editing sessions and their translation jobs
"""
import threading
import time
from datetime import datetime
from typing import Dict, Any, Optional, List

from storyglot.core.session import DocumentSession


class SessionStateManager:
    """Thread-safe manager for sessions and job state"""

    def __init__(self):
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    def create_session(self, session_id: str, session: DocumentSession) -> None:
        """Register a new session"""
        with self._lock:
            self._sessions[session_id] = {
                'session': session,
                'status': 'idle',
                'created_at': time.time(),
                'logs': [f"[{datetime.now().strftime('%H:%M:%S')}] Session {session_id} created."],
                'error': None,
                'interrupted': False
            }

    def get_session(self, session_id: str) -> Optional[DocumentSession]:
        with self._lock:
            entry = self._sessions.get(session_id)
            return entry['session'] if entry else None

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def set_field(self, session_id: str, field: str, value: Any) -> bool:
        with self._lock:
            if session_id not in self._sessions:
                return False
            self._sessions[session_id][field] = value
            return True

    def get_field(self, session_id: str, field: str, default=None):
        with self._lock:
            if session_id not in self._sessions:
                return default
            return self._sessions[session_id].get(field, default)

    def append_log(self, session_id: str, log_entry: Any) -> bool:
        with self._lock:
            if session_id not in self._sessions:
                return False
            self._sessions[session_id]['logs'].append(log_entry)
            return True

    def begin_job(self, session_id: str) -> bool:
        """Mark a job as queued. Returns False if the session is already busy."""
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None or entry['status'] in ('queued', 'running') or entry['session'].is_translating:
                return False
            entry.update({'status': 'queued', 'error': None, 'interrupted': False})
            return True

    def is_interrupted(self, session_id: str) -> bool:
        return bool(self.get_field(session_id, 'interrupted', False))

    def set_interrupted(self, session_id: str, interrupted: bool = True) -> bool:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return False
            entry['interrupted'] = interrupted
            if interrupted:
                entry['session'].request_cancel()
            return True

    def get_job_status(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Status, progress and last-run statistics for polling clients"""
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            session = entry['session']
            return {
                'session_id': session_id,
                'status': entry['status'],
                'is_translating': session.is_translating,
                'progress': session.progress,
                'stats': session.orchestrator.last_run.to_dict(),
                'error': entry['error'],
                'logs': list(entry['logs'][-100:])
            }

    def get_session_summaries(self) -> List[Dict[str, Any]]:
        with self._lock:
            summaries = []
            for sid, entry in self._sessions.items():
                session = entry['session']
                summaries.append({
                    'session_id': sid,
                    'default_language': session.default_language,
                    'languages': session.languages,
                    'status': entry['status'],
                    'progress': session.progress,
                    'created_at': entry['created_at']
                })
            return sorted(summaries, key=lambda x: x['created_at'], reverse=True)


# Global instance
_state_manager = SessionStateManager()


def get_state_manager() -> SessionStateManager:
    """Get the global state manager instance"""
    return _state_manager
