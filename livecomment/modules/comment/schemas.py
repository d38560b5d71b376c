"""Pydantic schemas for livecomment module."""

from pydantic import BaseModel, Field

from livecomment.core.errors import ConsistencyError
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.livestream.schemas import LivestreamResponse
from livecomment.modules.user.profile import ProfileResolver
from livecomment.modules.user.schemas import ProfileResponse


class LivecommentCreate(BaseModel):
    """Request body for posting a livecomment."""

    comment: str
    tip: int = Field(default=0, ge=0)


class LivecommentResponse(BaseModel):
    """A livecomment with its author and stream resolved."""

    id: int
    user: ProfileResponse
    livestream: LivestreamResponse
    comment: str
    tip: int
    created_at: int

    @classmethod
    def assemble(
        cls,
        livecomment: Livecomment,
        resolver: ProfileResolver,
    ) -> "LivecommentResponse":
        """Build the response from a row loaded with its context.

        Raises:
            ConsistencyError: If the joined stream row is missing
        """
        if livecomment.livestream is None:
            raise ConsistencyError(
                "Livestream row missing while assembling livecomment",
                {"livecomment_id": livecomment.id},
            )
        return cls(
            id=livecomment.id,
            user=resolver.resolve_user(livecomment.user),
            livestream=LivestreamResponse.assemble(livecomment.livestream, resolver),
            comment=livecomment.comment,
            tip=livecomment.tip,
            created_at=livecomment.created_at,
        )
