"""Service for livestream moderation.

Registers NG words, purges existing comments that hit them, and screens new
comments before they are stored.
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.errors import ForbiddenError, RejectedError
from livecomment.core.logging import log_info
from livecomment.core.metrics import (
    LIVECOMMENTS_PURGED_TOTAL,
    LIVECOMMENTS_REJECTED_TOTAL,
    NG_WORDS_REGISTERED_TOTAL,
    PURGE_DURATION_SECONDS,
)
from livecomment.modules.comment.repository import LivecommentRepository
from livecomment.modules.livestream.repository import LivestreamRepository
from livecomment.modules.moderation.models import NGWord
from livecomment.modules.moderation.repository import NGWordRepository
from livecomment.modules.moderation.schemas import ModerateResponse
from livecomment.modules.moderation.spam_detection import BannedPhraseMatcher

logger = logging.getLogger(__name__)


class ModerationService:
    """Service for NG word registration and comment screening."""

    def __init__(self, session: AsyncSession):
        """Initialize moderation service.

        Args:
            session: Database session; the caller owns the transaction
        """
        self.session = session
        self.ng_word_repo = NGWordRepository(session)
        self.livecomment_repo = LivecommentRepository(session)
        self.livestream_repo = LivestreamRepository(session)

    async def load_matcher(self, livestream_id: int) -> BannedPhraseMatcher:
        """Build a matcher over the stream's effective banned set."""
        ng_words = await self.ng_word_repo.get_by_stream(livestream_id)
        return BannedPhraseMatcher(ng_word.word for ng_word in ng_words)

    async def register_phrase(
        self,
        caller_id: int,
        livestream_id: int,
        word: str,
    ) -> ModerateResponse:
        """Register an NG word and purge the stream's matching comments.

        The phrase insert and the purge share the caller's transaction, so
        either both become visible on commit or neither does.

        Args:
            caller_id: Authenticated user; must own the stream
            livestream_id: Stream to moderate
            word: Phrase to ban

        Returns:
            ModerateResponse with the new word's ID and the purge count

        Raises:
            ForbiddenError: If the stream does not exist or the caller does
                not own it
        """
        livestream = await self.livestream_repo.get_for_update(livestream_id)
        # An absent stream is indistinguishable from someone else's
        if livestream is None or not livestream.is_owned_by(caller_id):
            raise ForbiddenError(
                "A streamer can't moderate livestreams that other streamers own",
                {"livestream_id": livestream_id},
            )

        ng_word = await self.ng_word_repo.create(
            user_id=caller_id,
            livestream_id=livestream_id,
            word=word,
        )
        NG_WORDS_REGISTERED_TOTAL.inc()

        matcher = await self.load_matcher(livestream_id)

        start_time = time.perf_counter()
        purged_count = await self.livecomment_repo.delete_if_matches(
            livestream_id,
            matcher.matches,
        )
        PURGE_DURATION_SECONDS.observe(time.perf_counter() - start_time)
        LIVECOMMENTS_PURGED_TOTAL.inc(purged_count)

        log_info(
            logger,
            "NG word registered",
            livestream_id=livestream_id,
            word_id=ng_word.id,
            banned_phrases=len(matcher),
            purged_count=purged_count,
        )

        return ModerateResponse(word_id=ng_word.id, purged_count=purged_count)

    async def check_submission(
        self,
        stream_owner_id: int,
        livestream_id: int,
        body: str,
    ) -> None:
        """Screen a comment body against the stream's banned set.

        Raises:
            RejectedError: If the body contains an NG word
        """
        matcher = await self.load_matcher(livestream_id)
        hit = matcher.first_match(body)
        if hit is None:
            return

        LIVECOMMENTS_REJECTED_TOTAL.inc()
        log_info(
            logger,
            "Livecomment rejected as spam",
            livestream_id=livestream_id,
            stream_owner_id=stream_owner_id,
            ng_word=hit,
        )
        raise RejectedError(
            "This comment was flagged as spam",
            {"livestream_id": livestream_id, "ng_word": hit},
        )

    async def list_phrases(self, caller_id: int, livestream_id: int) -> list[NGWord]:
        """List the NG words the caller registered on a stream, newest first."""
        return await self.ng_word_repo.get_by_user_and_stream(caller_id, livestream_id)
