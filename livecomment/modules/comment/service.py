"""Livecomment service.

Lists and posts livecomments, assembling each one with its author and stream
profiles.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.config import settings
from livecomment.core.errors import ConsistencyError, NotFoundError
from livecomment.core.logging import log_info
from livecomment.core.metrics import LIVECOMMENTS_POSTED_TOTAL
from livecomment.modules.comment.repository import LivecommentRepository
from livecomment.modules.comment.schemas import LivecommentResponse
from livecomment.modules.livestream.repository import LivestreamRepository
from livecomment.modules.moderation.service import ModerationService
from livecomment.modules.user.profile import ProfileResolver

logger = logging.getLogger(__name__)


class LivecommentService:
    """Service for livecomment listing and submission."""

    def __init__(self, session: AsyncSession, resolver: ProfileResolver):
        """Initialize livecomment service.

        Args:
            session: Database session; the caller owns the transaction
            resolver: Profile resolver for response assembly
        """
        self.session = session
        self.resolver = resolver
        self.livecomment_repo = LivecommentRepository(session)
        self.livestream_repo = LivestreamRepository(session)
        self.moderation = ModerationService(session)

    async def list_comments(
        self,
        livestream_id: int,
        limit: Optional[int] = None,
    ) -> list[LivecommentResponse]:
        """List a stream's livecomments, newest first.

        An unknown stream yields an empty list.
        """
        max_limit = settings.COMMENT_LIST_MAX_LIMIT
        if max_limit is not None and limit is not None and limit > max_limit:
            limit = max_limit

        livecomments = await self.livecomment_repo.list_by_stream(livestream_id, limit)
        return [
            LivecommentResponse.assemble(livecomment, self.resolver)
            for livecomment in livecomments
        ]

    async def post_comment(
        self,
        caller_id: int,
        livestream_id: int,
        comment: str,
        tip: int = 0,
    ) -> LivecommentResponse:
        """Screen and store a livecomment.

        Raises:
            NotFoundError: If the stream does not exist
            RejectedError: If the comment contains one of the stream's NG words
            ConsistencyError: If the stored comment cannot be read back
        """
        # Serializes with NG word registration on the same stream
        livestream = await self.livestream_repo.get_for_update(livestream_id)
        if livestream is None:
            raise NotFoundError("livestream not found", {"livestream_id": livestream_id})

        await self.moderation.check_submission(livestream.user_id, livestream.id, comment)

        livecomment = await self.livecomment_repo.insert(
            user_id=caller_id,
            livestream_id=livestream_id,
            comment=comment,
            tip=tip,
        )

        stored = await self.livecomment_repo.get_with_context(livecomment.id)
        if stored is None:
            raise ConsistencyError(
                "not found livecomment with the specified ID",
                {"livecomment_id": livecomment.id},
            )

        LIVECOMMENTS_POSTED_TOTAL.inc()
        log_info(
            logger,
            "Livecomment posted",
            livestream_id=livestream_id,
            livecomment_id=livecomment.id,
            tip=tip,
        )
        return LivecommentResponse.assemble(stored, self.resolver)
