"""Service for livecomment abuse reports."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.errors import ConsistencyError, NotFoundError
from livecomment.core.logging import log_info
from livecomment.core.metrics import LIVECOMMENT_REPORTS_TOTAL
from livecomment.modules.comment.repository import LivecommentRepository
from livecomment.modules.livestream.repository import LivestreamRepository
from livecomment.modules.report.repository import LivecommentReportRepository
from livecomment.modules.report.schemas import LivecommentReportResponse
from livecomment.modules.user.profile import ProfileResolver

logger = logging.getLogger(__name__)


class ReportService:
    """Service for filing reports against livecomments."""

    def __init__(self, session: AsyncSession, resolver: ProfileResolver):
        self.session = session
        self.resolver = resolver
        self.report_repo = LivecommentReportRepository(session)
        self.livecomment_repo = LivecommentRepository(session)
        self.livestream_repo = LivestreamRepository(session)

    async def report_comment(
        self,
        caller_id: int,
        livestream_id: int,
        livecomment_id: int,
    ) -> LivecommentReportResponse:
        """File a report by ``caller_id`` against a livecomment.

        The same user may report the same comment more than once.

        Raises:
            NotFoundError: If the stream or the comment does not exist, or the
                comment was posted to a different stream
            ConsistencyError: If the stored report cannot be read back
        """
        livestream = await self.livestream_repo.get_by_id(livestream_id)
        if livestream is None:
            raise NotFoundError("livestream not found", {"livestream_id": livestream_id})

        livecomment = await self.livecomment_repo.get_by_id(livecomment_id)
        if livecomment is None or livecomment.livestream_id != livestream_id:
            raise NotFoundError(
                "livecomment not found",
                {"livestream_id": livestream_id, "livecomment_id": livecomment_id},
            )

        report = await self.report_repo.insert(
            user_id=caller_id,
            livestream_id=livestream_id,
            livecomment_id=livecomment_id,
        )

        stored = await self.report_repo.get_with_context(report.id)
        if stored is None:
            raise ConsistencyError(
                "not found livecomment report with the specified ID",
                {"report_id": report.id},
            )

        LIVECOMMENT_REPORTS_TOTAL.inc()
        log_info(
            logger,
            "Livecomment reported",
            livestream_id=livestream_id,
            livecomment_id=livecomment_id,
            report_id=report.id,
        )
        return LivecommentReportResponse.assemble(stored, self.resolver)
