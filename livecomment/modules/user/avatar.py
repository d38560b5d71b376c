"""Avatar access for profile assembly.

The fallback image is read from disk once, when the store is built at
startup. A missing or unreadable fallback is fatal: every profile of a user
without an icon depends on it.
"""

import logging
from pathlib import Path
from typing import Optional

from livecomment.core.errors import FallbackAvatarError
from livecomment.core.logging import log_info
from livecomment.modules.user.models import User

logger = logging.getLogger(__name__)


class AvatarStore:
    """Serves user avatars and the shared fallback image."""

    def __init__(self, fallback_avatar: bytes):
        if not fallback_avatar:
            raise FallbackAvatarError("Fallback avatar image is empty")
        self._fallback_avatar = fallback_avatar

    @classmethod
    def from_path(cls, path: str | Path) -> "AvatarStore":
        """Build a store whose fallback bytes are loaded from ``path``.

        Raises:
            FallbackAvatarError: If the file cannot be read
        """
        fallback_path = Path(path)
        try:
            data = fallback_path.read_bytes()
        except OSError as e:
            raise FallbackAvatarError(
                f"Failed to read fallback avatar: {e}",
                {"path": str(fallback_path)},
            ) from e

        log_info(
            logger,
            "Fallback avatar loaded",
            path=str(fallback_path),
            size_bytes=len(data),
        )
        return cls(data)

    def get_avatar(self, user: User) -> Optional[bytes]:
        """Return the user's uploaded icon bytes, or None if there is none.

        ``user.icon`` must already be loaded with the user row.
        """
        if user.icon is None or not user.icon.image:
            return None
        return user.icon.image

    def get_fallback_avatar(self) -> bytes:
        return self._fallback_avatar
