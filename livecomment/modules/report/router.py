"""API router for livecomment reports."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.database import MAX_ROW_ID, get_session
from livecomment.modules.auth import SessionIdentity, require_caller
from livecomment.modules.report.schemas import LivecommentReportResponse
from livecomment.modules.report.service import ReportService
from livecomment.modules.user.profile import ProfileResolver, get_profile_resolver

router = APIRouter(prefix="/livestream", tags=["reports"])


@router.post(
    "/{livestream_id}/livecomment/{livecomment_id}/report",
    response_model=LivecommentReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_livecomment(
    livestream_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    livecomment_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    caller: SessionIdentity = Depends(require_caller),
    session: AsyncSession = Depends(get_session),
    resolver: ProfileResolver = Depends(get_profile_resolver),
):
    """Report a livecomment as abusive."""
    service = ReportService(session, resolver)
    result = await service.report_comment(
        caller_id=caller.user_id,
        livestream_id=livestream_id,
        livecomment_id=livecomment_id,
    )
    await session.commit()
    return result
