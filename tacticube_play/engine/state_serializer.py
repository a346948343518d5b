"""
tacticube_play/engine/state_serializer.py

Serialize game sessions to JSON-compatible dicts for the WebSocket
``state_update`` push.

Protocol (preferred):
    Session classes implement ``snapshot()`` returning plain data.

Fallback (automatic):
    ``vars()``-based copy with JSON type coercion (enums become their
    values, tuples become lists).
"""

import enum


def serialize_session(session) -> dict:
    """Convert a GameSession to a JSON-compatible dict.

    The result always contains a ``'__class__'`` key with the class
    qualified name (for debugging only).
    """
    if hasattr(session, 'snapshot') and callable(session.snapshot):
        d = _coerce(session.snapshot())
    else:
        d = _fallback_serialize(session)
    d['__class__'] = type(session).__qualname__
    return d


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _fallback_serialize(obj) -> dict:
    return {key: _coerce(val) for key, val in vars(obj).items() if not key.startswith('_')}


def _coerce(val):
    """Recursively coerce a value to a JSON-serializable type."""
    if isinstance(val, enum.Enum):
        return _coerce(val.value)
    if isinstance(val, (bool, int, float, str, type(None))):
        return val
    if hasattr(val, 'to_dict') and callable(val.to_dict):
        return _coerce(val.to_dict())
    if hasattr(val, '_asdict'):
        return {k: _coerce(v) for k, v in val._asdict().items()}
    if isinstance(val, (list, tuple)):
        return [_coerce(v) for v in val]
    if isinstance(val, dict):
        return {str(k): _coerce(v) for k, v in val.items()}
    # Last resort: convert to string.
    return str(val)
