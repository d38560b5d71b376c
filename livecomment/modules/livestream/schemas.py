"""Pydantic schemas for livestreams as embedded in comment responses."""

from typing import Optional

from pydantic import BaseModel

from livecomment.modules.livestream.models import Livestream
from livecomment.modules.user.profile import ProfileResolver
from livecomment.modules.user.schemas import ProfileResponse


class LivestreamResponse(BaseModel):
    """Stream metadata with its owner's profile."""

    id: int
    owner: ProfileResponse
    title: str
    description: Optional[str] = None
    playlist_url: str
    thumbnail_url: str
    start_at: int
    end_at: int

    @classmethod
    def assemble(
        cls,
        livestream: Livestream,
        resolver: ProfileResolver,
    ) -> "LivestreamResponse":
        """Build the response from a stream whose owner was eager-loaded."""
        return cls(
            id=livestream.id,
            owner=resolver.resolve_user(livestream.owner),
            title=livestream.title,
            description=livestream.description,
            playlist_url=livestream.playlist_url,
            thumbnail_url=livestream.thumbnail_url,
            start_at=livestream.start_at,
            end_at=livestream.end_at,
        )
