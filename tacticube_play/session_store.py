"""
tacticube_play/session_store.py

In-process registry of networked matches.

Matches are stored in a module-level dict protected by a
threading.Lock().  Lock acquisition is fast, so the store is safe to call
from both sync (HTTP views) and async (WS consumers) code.  The registry
only pairs seats; each connected consumer owns its own GameSession, so a
match record never holds game state.

The registry is per-process: with the Redis channel layer and several
ASGI workers, both players of a match must still reach the same worker
for the HTTP create/join calls.

Match dict structure
--------------------
match_key       str                 UUID string
mode            str                 'SINGLE' | 'MULTI' | 'RANDOM'
role_manager    RoleManager         host/guest seats
status          str                 'waiting' | 'in_progress' | 'ended'
created_at      str                 ISO 8601 UTC timestamp
"""

import threading
import uuid
from datetime import datetime, timezone

from tacticube_play.engine.role_manager import RoleManager

_matches: dict = {}
_lock = threading.Lock()


def create_match(mode: str) -> dict:
    """Register a new match with an empty RoleManager and return it."""
    match_key = str(uuid.uuid4())
    data = {
        'match_key':    match_key,
        'mode':         mode,
        'role_manager': RoleManager(),
        'status':       'waiting',
        'created_at':   datetime.now(timezone.utc).isoformat(),
    }
    with _lock:
        _matches[match_key] = data
    return data


def get_match(match_key: str) -> dict | None:
    """Return the match dict, or None if not found."""
    with _lock:
        return _matches.get(match_key)


def update_match(match_key: str, updates: dict) -> None:
    """Merge ``updates`` into an existing match dict."""
    with _lock:
        if match_key in _matches:
            _matches[match_key].update(updates)


def delete_match(match_key: str) -> None:
    with _lock:
        _matches.pop(match_key, None)


def get_all_matches() -> list:
    """Return a snapshot list of all match dicts."""
    with _lock:
        return list(_matches.values())
