"""Repository for livecomment report data access."""

import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from livecomment.core.errors import ConstraintViolationError
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.livestream.models import Livestream
from livecomment.modules.report.models import LivecommentReport
from livecomment.modules.user.models import User


class LivecommentReportRepository:
    """Repository for LivecommentReport operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(
        self,
        user_id: int,
        livestream_id: int,
        livecomment_id: int,
    ) -> LivecommentReport:
        """Store a new report stamped with the current server time.

        Raises:
            ConstraintViolationError: If the reporter, stream or comment is gone
        """
        report = LivecommentReport(
            user_id=user_id,
            livestream_id=livestream_id,
            livecomment_id=livecomment_id,
            created_at=int(time.time()),
        )
        self.session.add(report)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(
                "failed to insert livecomment report",
                {
                    "user_id": user_id,
                    "livestream_id": livestream_id,
                    "livecomment_id": livecomment_id,
                },
            ) from e
        return report

    async def get_with_context(self, report_id: int) -> Optional[LivecommentReport]:
        """Get a report joined with its reporter and the reported comment.

        The comment comes with its author and stream, so both the reporter's
        and the comment author's profiles can be resolved without further
        queries.
        """
        target = joinedload(LivecommentReport.livecomment)
        result = await self.session.execute(
            select(LivecommentReport)
            .options(
                joinedload(LivecommentReport.reporter).joinedload(User.theme),
                joinedload(LivecommentReport.reporter).joinedload(User.icon),
                target.joinedload(Livecomment.user).joinedload(User.theme),
                target.joinedload(Livecomment.user).joinedload(User.icon),
                target.joinedload(Livecomment.livestream)
                .joinedload(Livestream.owner)
                .joinedload(User.theme),
                target.joinedload(Livecomment.livestream)
                .joinedload(Livestream.owner)
                .joinedload(User.icon),
            )
            .where(LivecommentReport.id == report_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
