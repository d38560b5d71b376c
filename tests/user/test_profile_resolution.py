"""Tests for profile resolution and icon hashing."""

import hashlib

import pytest
from hypothesis import given, settings, strategies as st

from livecomment.core.errors import ConsistencyError, FallbackAvatarError
from livecomment.modules.user import AvatarStore, Icon, ProfileResolver, Theme, User, icon_hash

FALLBACK = b"fallback-image-bytes"


def make_user(user_id: int = 1, image: bytes = None, with_theme: bool = True) -> User:
    user = User(
        id=user_id,
        name=f"user{user_id}",
        display_name=f"User {user_id}",
        description="",
        password="",
    )
    user.theme = Theme(id=user_id, user_id=user_id, dark_mode=True) if with_theme else None
    user.icon = Icon(id=user_id, user_id=user_id, image=image) if image is not None else None
    return user


class TestIconHash:
    """Property tests for icon hashing."""

    @given(image=st.binary(min_size=1, max_size=512))
    @settings(max_examples=100)
    def test_icon_hash_is_deterministic(self, image: bytes) -> None:
        """For an unchanged avatar, the icon hash SHALL be the same every time."""
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        user = make_user(image=image)

        first = resolver.resolve_user(user)
        second = resolver.resolve_user(user)

        assert first.icon_hash == second.icon_hash
        assert first.icon_hash == hashlib.sha256(image).hexdigest()

    def test_icon_hash_is_lowercase_hex_sha256(self) -> None:
        digest = icon_hash(b"abc")
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TestProfileResolver:
    """Tests for ProfileResolver."""

    def test_user_without_icon_gets_fallback_hash(self) -> None:
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        profile = resolver.resolve_user(make_user())

        assert profile.icon_hash == hashlib.sha256(FALLBACK).hexdigest()

    def test_empty_avatar_bytes_use_fallback(self) -> None:
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        user = make_user()

        profile = resolver.resolve(user, user.theme, b"")

        assert profile.icon_hash == hashlib.sha256(FALLBACK).hexdigest()

    def test_profile_carries_user_and_theme_fields(self) -> None:
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        profile = resolver.resolve_user(make_user(user_id=3, image=b"icon"))

        assert profile.id == 3
        assert profile.name == "user3"
        assert profile.display_name == "User 3"
        assert profile.theme.id == 3
        assert profile.theme.dark_mode is True

    def test_missing_theme_is_consistency_error(self) -> None:
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        with pytest.raises(ConsistencyError):
            resolver.resolve_user(make_user(with_theme=False))

    def test_missing_user_is_consistency_error(self) -> None:
        resolver = ProfileResolver(AvatarStore(FALLBACK))
        with pytest.raises(ConsistencyError):
            resolver.resolve_user(None)


class TestAvatarStore:
    """Tests for fallback avatar loading."""

    def test_from_path_reads_bytes(self, tmp_path) -> None:
        path = tmp_path / "NoImage.jpg"
        path.write_bytes(FALLBACK)

        store = AvatarStore.from_path(path)

        assert store.get_fallback_avatar() == FALLBACK

    def test_missing_fallback_file_is_fatal(self, tmp_path) -> None:
        with pytest.raises(FallbackAvatarError):
            AvatarStore.from_path(tmp_path / "missing.jpg")

    def test_empty_fallback_is_rejected(self) -> None:
        with pytest.raises(FallbackAvatarError):
            AvatarStore(b"")
