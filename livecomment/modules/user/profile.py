"""Profile resolution.

Turns a user row, its theme row and optional avatar bytes into the
``ProfileResponse`` every comment and report embeds.
"""

import hashlib
from typing import Optional

from fastapi import Request

from livecomment.core.errors import ConsistencyError
from livecomment.modules.user.avatar import AvatarStore
from livecomment.modules.user.models import Theme, User
from livecomment.modules.user.schemas import ProfileResponse, ThemeResponse


def icon_hash(image: bytes) -> str:
    """SHA-256 of the avatar bytes as lowercase hex."""
    return hashlib.sha256(image).hexdigest()


class ProfileResolver:
    """Builds profiles, substituting the fallback avatar where needed."""

    def __init__(self, avatar_store: AvatarStore):
        self.avatar_store = avatar_store

    def resolve(
        self,
        user: User,
        theme: Optional[Theme],
        avatar: Optional[bytes],
    ) -> ProfileResponse:
        """Assemble a profile from already-loaded rows.

        Args:
            user: User row
            theme: The user's theme row
            avatar: Uploaded icon bytes; None or empty selects the fallback

        Returns:
            ProfileResponse with a content hash of the bytes actually served

        Raises:
            ConsistencyError: If the user has no theme row
        """
        if theme is None:
            raise ConsistencyError(
                "Theme not found for user",
                {"user_id": user.id},
            )

        image = avatar if avatar else self.avatar_store.get_fallback_avatar()

        return ProfileResponse(
            id=user.id,
            name=user.name,
            display_name=user.display_name,
            description=user.description,
            theme=ThemeResponse(id=theme.id, dark_mode=theme.dark_mode),
            icon_hash=icon_hash(image),
        )

    def resolve_user(self, user: Optional[User]) -> ProfileResponse:
        """Resolve a user whose theme and icon were eager-loaded with it.

        Raises:
            ConsistencyError: If the joined user row is missing
        """
        if user is None:
            raise ConsistencyError("User row missing while assembling response")
        return self.resolve(user, user.theme, self.avatar_store.get_avatar(user))


def get_profile_resolver(request: Request) -> ProfileResolver:
    """The resolver built at startup around the fallback avatar."""
    return request.app.state.profile_resolver
