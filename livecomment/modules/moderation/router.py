"""API router for livestream moderation.

Implements NG word listing and registration for stream owners.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.database import MAX_ROW_ID, get_session
from livecomment.modules.auth import SessionIdentity, require_caller
from livecomment.modules.moderation.schemas import (
    ModerateRequest,
    ModerateResponse,
    NGWordResponse,
)
from livecomment.modules.moderation.service import ModerationService

router = APIRouter(prefix="/livestream", tags=["moderation"])


@router.get("/{livestream_id}/ngwords", response_model=list[NGWordResponse])
async def get_ngwords(
    livestream_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    caller: SessionIdentity = Depends(require_caller),
    session: AsyncSession = Depends(get_session),
):
    """List the NG words the caller registered on a livestream."""
    service = ModerationService(session)
    ng_words = await service.list_phrases(caller.user_id, livestream_id)
    return [NGWordResponse.model_validate(ng_word) for ng_word in ng_words]


@router.post(
    "/{livestream_id}/moderate",
    response_model=ModerateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def moderate(
    data: ModerateRequest,
    livestream_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    caller: SessionIdentity = Depends(require_caller),
    session: AsyncSession = Depends(get_session),
):
    """Register an NG word and purge the stream's matching comments.

    Only the stream's owner may moderate it.
    """
    service = ModerationService(session)
    result = await service.register_phrase(
        caller_id=caller.user_id,
        livestream_id=livestream_id,
        word=data.ng_word,
    )
    await session.commit()
    return result
