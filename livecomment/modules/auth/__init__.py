"""Session verification for livecomment endpoints."""

from livecomment.modules.auth.session import (
    SessionGate,
    SessionIdentity,
    get_session_gate,
    optional_caller,
    require_caller,
)

__all__ = [
    "SessionGate",
    "SessionIdentity",
    "get_session_gate",
    "optional_caller",
    "require_caller",
]
