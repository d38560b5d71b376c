"""Session verification for livecomment endpoints.

Sessions are issued by the account service as HS256 JWTs whose ``sub`` is
the numeric user id and whose ``exp`` is the expiry in epoch seconds. This
module only checks them and extracts the caller.
"""

import time
import uuid
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from livecomment.core.errors import UnauthenticatedError

ALGORITHM = "HS256"


class SessionIdentity(BaseModel):
    """The authenticated caller."""

    user_id: int
    expires_at: int


class SessionGate:
    """Validates session tokens and resolves the caller's identity."""

    def __init__(
        self,
        secret_key: str,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ):
        self.secret_key = secret_key
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def issue(self, user_id: int, ttl_seconds: Optional[int] = None) -> str:
        """Sign a session token for ``user_id``.

        Used by the login flow and by tests; livecomment endpoints never
        issue sessions themselves.
        """
        now = int(self.clock())
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + (self.ttl_seconds if ttl_seconds is None else ttl_seconds),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=ALGORITHM)

    def authenticate(self, token: Optional[str]) -> SessionIdentity:
        """Verify ``token`` and return the caller.

        Raises:
            UnauthenticatedError: Missing, malformed or expired session
        """
        if not token:
            raise UnauthenticatedError("failed to get session")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            raise UnauthenticatedError("failed to get session")

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise UnauthenticatedError("failed to get USERID value from session")

        expires_at = payload.get("exp")
        if not isinstance(expires_at, int):
            raise UnauthenticatedError("failed to get EXPIRES value from session")
        if int(self.clock()) > expires_at:
            raise UnauthenticatedError("session has expired")

        return SessionIdentity(user_id=user_id, expires_at=expires_at)


bearer_scheme = HTTPBearer(auto_error=False)


def get_session_gate(request: Request) -> SessionGate:
    """The gate configured on the application at startup."""
    return request.app.state.session_gate


async def require_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate: SessionGate = Depends(get_session_gate),
) -> SessionIdentity:
    """Dependency for endpoints that need an authenticated caller."""
    token = credentials.credentials if credentials else None
    return gate.authenticate(token)


async def optional_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate: SessionGate = Depends(get_session_gate),
) -> Optional[SessionIdentity]:
    """Dependency for endpoints open to anonymous callers.

    A supplied token must still be valid.
    """
    if credentials is None:
        return None
    return gate.authenticate(credentials.credentials)
