"""Tests for session token verification."""

import pytest
from hypothesis import given, settings, strategies as st
from jose import jwt

from livecomment.core.errors import UnauthenticatedError
from livecomment.modules.auth import SessionGate
from livecomment.modules.auth.session import ALGORITHM

SECRET = "gate-secret"
NOW = 1_700_000_000


def fixed_clock(now: float = NOW):
    return lambda: now


class TestSessionGate:
    """Tests for SessionGate.authenticate."""

    @given(user_id=st.integers(min_value=1, max_value=2**31 - 1))
    @settings(max_examples=100)
    def test_issued_token_resolves_to_user(self, user_id: int) -> None:
        """For any user ID, an unexpired issued token SHALL resolve to that user."""
        gate = SessionGate(SECRET, clock=fixed_clock())
        token = gate.issue(user_id, ttl_seconds=60)

        identity = gate.authenticate(token)

        assert identity.user_id == user_id
        assert identity.expires_at == NOW + 60

    def test_missing_token_is_unauthenticated(self) -> None:
        gate = SessionGate(SECRET)
        with pytest.raises(UnauthenticatedError):
            gate.authenticate(None)
        with pytest.raises(UnauthenticatedError):
            gate.authenticate("")

    def test_malformed_token_is_unauthenticated(self) -> None:
        gate = SessionGate(SECRET)
        with pytest.raises(UnauthenticatedError):
            gate.authenticate("not-a-jwt")

    def test_token_signed_with_other_key_is_unauthenticated(self) -> None:
        token = SessionGate("other-secret").issue(1, ttl_seconds=60)
        with pytest.raises(UnauthenticatedError):
            SessionGate(SECRET).authenticate(token)

    def test_expired_token_is_unauthenticated(self) -> None:
        token = SessionGate(SECRET, clock=fixed_clock(NOW)).issue(1, ttl_seconds=60)
        later = SessionGate(SECRET, clock=fixed_clock(NOW + 61))

        with pytest.raises(UnauthenticatedError) as exc_info:
            later.authenticate(token)
        assert exc_info.value.message == "session has expired"

    def test_token_at_expiry_second_is_still_valid(self) -> None:
        token = SessionGate(SECRET, clock=fixed_clock(NOW)).issue(7, ttl_seconds=60)
        identity = SessionGate(SECRET, clock=fixed_clock(NOW + 60)).authenticate(token)
        assert identity.user_id == 7

    def test_token_without_user_id_is_unauthenticated(self) -> None:
        token = jwt.encode({"exp": NOW + 60}, SECRET, algorithm=ALGORITHM)
        with pytest.raises(UnauthenticatedError):
            SessionGate(SECRET, clock=fixed_clock()).authenticate(token)

    def test_token_without_expiry_is_unauthenticated(self) -> None:
        token = jwt.encode({"sub": "1"}, SECRET, algorithm=ALGORITHM)
        with pytest.raises(UnauthenticatedError):
            SessionGate(SECRET, clock=fixed_clock()).authenticate(token)
