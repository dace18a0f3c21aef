"""
In-memory registry of editor sessions.

Each browser session (identified by a cookie) gets its own EditorController.
Sessions expire after SESSION_TTL_SECONDS of inactivity and are never persisted.
"""

import uuid
from cachetools import TTLCache
from threading import Lock
from typing import Optional, Any, Callable, Dict, Tuple

from config.settings import settings
from services.editor_controller import EditorController

_sessions: TTLCache = TTLCache(maxsize=settings.SESSION_MAX_COUNT, ttl=settings.SESSION_TTL_SECONDS)
_sessions_lock = Lock()

# Swapped out in tests to inject a fake edit service
controller_factory: Callable[[], EditorController] = EditorController


def new_session_id() -> str:
    return uuid.uuid4().hex


def get_or_create(session_id: Optional[str]) -> Tuple[str, EditorController]:
    """
    Return the controller for a session, creating one if needed.

    Args:
        session_id: The id from the session cookie, or None for a new visitor

    Returns:
        Tuple of (session_id, controller); the id differs from the input when
        the session was unknown or expired
    """
    with _sessions_lock:
        if session_id:
            controller = _sessions.get(session_id)
            if controller is not None:
                # Re-insert to refresh the TTL
                _sessions[session_id] = controller
                return session_id, controller

        session_id = new_session_id()
        controller = controller_factory()
        _sessions[session_id] = controller
        return session_id, controller


def clear_all() -> int:
    with _sessions_lock:
        count = len(_sessions)
        _sessions.clear()
        return count


def get_session_stats() -> Dict[str, Any]:
    with _sessions_lock:
        return {
            "active_sessions": len(_sessions),
            "max_sessions": settings.SESSION_MAX_COUNT,
            "ttl_seconds": settings.SESSION_TTL_SECONDS
        }
