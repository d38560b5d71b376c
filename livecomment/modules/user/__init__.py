"""User profiles: read-only user/theme/icon mappings and profile assembly."""

from livecomment.modules.user.avatar import AvatarStore
from livecomment.modules.user.models import Icon, Theme, User
from livecomment.modules.user.profile import (
    ProfileResolver,
    get_profile_resolver,
    icon_hash,
)
from livecomment.modules.user.schemas import ProfileResponse, ThemeResponse

__all__ = [
    "AvatarStore",
    "Icon",
    "Theme",
    "User",
    "ProfileResolver",
    "get_profile_resolver",
    "icon_hash",
    "ProfileResponse",
    "ThemeResponse",
]
