"""API router for livecomments.

Implements listing and posting comments on a livestream.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.database import MAX_ROW_ID, get_session
from livecomment.core.errors import InvalidArgumentError
from livecomment.modules.auth import SessionIdentity, optional_caller, require_caller
from livecomment.modules.comment.schemas import LivecommentCreate, LivecommentResponse
from livecomment.modules.comment.service import LivecommentService
from livecomment.modules.user.profile import ProfileResolver, get_profile_resolver

router = APIRouter(prefix="/livestream", tags=["livecomments"])


def parse_limit(raw: Optional[str]) -> Optional[int]:
    """Parse ``?limit=``; an empty value means no limit."""
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError:
        limit = None
    if limit is None or limit > MAX_ROW_ID:
        raise InvalidArgumentError(
            "limit query parameter must be a non-negative integer",
            {"limit": raw},
        )
    return limit


@router.get("/{livestream_id}/livecomment", response_model=list[LivecommentResponse])
async def get_livecomments(
    livestream_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    limit: Optional[str] = Query(None, description="Maximum number of comments"),
    caller: Optional[SessionIdentity] = Depends(optional_caller),
    session: AsyncSession = Depends(get_session),
    resolver: ProfileResolver = Depends(get_profile_resolver),
):
    """List a livestream's comments, newest first."""
    service = LivecommentService(session, resolver)
    return await service.list_comments(livestream_id, parse_limit(limit))


@router.post(
    "/{livestream_id}/livecomment",
    response_model=LivecommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_livecomment(
    data: LivecommentCreate,
    livestream_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    caller: SessionIdentity = Depends(require_caller),
    session: AsyncSession = Depends(get_session),
    resolver: ProfileResolver = Depends(get_profile_resolver),
):
    """Post a comment to a livestream.

    Comments containing one of the stream's NG words are rejected.
    """
    service = LivecommentService(session, resolver)
    result = await service.post_comment(
        caller_id=caller.user_id,
        livestream_id=livestream_id,
        comment=data.comment,
        tip=data.tip,
    )
    await session.commit()
    return result
