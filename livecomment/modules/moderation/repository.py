"""Repository for NG word data access."""

import time

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.core.errors import ConstraintViolationError
from livecomment.modules.moderation.models import NGWord


class NGWordRepository:
    """Repository for NGWord operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_id: int, livestream_id: int, word: str) -> NGWord:
        """Register a new NG word.

        Raises:
            ConstraintViolationError: If the user or stream does not exist
        """
        ng_word = NGWord(
            user_id=user_id,
            livestream_id=livestream_id,
            word=word,
            created_at=int(time.time()),
        )
        self.session.add(ng_word)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(
                "failed to insert new NG word",
                {"user_id": user_id, "livestream_id": livestream_id},
            ) from e
        return ng_word

    async def get_by_stream(self, livestream_id: int) -> list[NGWord]:
        """Get every NG word registered on a stream."""
        result = await self.session.execute(
            select(NGWord)
            .where(NGWord.livestream_id == livestream_id)
            .order_by(NGWord.id)
        )
        return list(result.scalars().all())

    async def get_by_user_and_stream(
        self,
        user_id: int,
        livestream_id: int,
    ) -> list[NGWord]:
        """Get the NG words a user registered on a stream, newest first."""
        result = await self.session.execute(
            select(NGWord)
            .where(
                NGWord.user_id == user_id,
                NGWord.livestream_id == livestream_id,
            )
            .order_by(NGWord.created_at.desc(), NGWord.id.desc())
        )
        return list(result.scalars().all())
