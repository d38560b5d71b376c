"""Repository for livecomment data access."""

import time
from typing import Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from livecomment.core.errors import ConstraintViolationError, InvalidArgumentError
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.livestream.models import Livestream
from livecomment.modules.user.models import User

# Keeps IN (...) lists well under driver parameter limits
DELETE_BATCH_SIZE = 500


def livecomment_context_options() -> tuple:
    """Eager-load everything a livecomment response embeds.

    Author with theme and icon, and the stream with its owner's theme and
    icon, fetched in the same statement as the comment itself.
    """
    return (
        joinedload(Livecomment.user).joinedload(User.theme),
        joinedload(Livecomment.user).joinedload(User.icon),
        joinedload(Livecomment.livestream)
        .joinedload(Livestream.owner)
        .joinedload(User.theme),
        joinedload(Livecomment.livestream)
        .joinedload(Livestream.owner)
        .joinedload(User.icon),
    )


class LivecommentRepository:
    """Repository for Livecomment operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(
        self,
        user_id: int,
        livestream_id: int,
        comment: str,
        tip: int = 0,
    ) -> Livecomment:
        """Store a new livecomment stamped with the current server time.

        Raises:
            ConstraintViolationError: If the user or stream does not exist
        """
        livecomment = Livecomment(
            user_id=user_id,
            livestream_id=livestream_id,
            comment=comment,
            tip=tip,
            created_at=int(time.time()),
        )
        self.session.add(livecomment)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(
                "failed to insert livecomment",
                {"user_id": user_id, "livestream_id": livestream_id},
            ) from e
        return livecomment

    async def get_by_id(self, livecomment_id: int) -> Optional[Livecomment]:
        """Get a livecomment row without its context."""
        result = await self.session.execute(
            select(Livecomment).where(Livecomment.id == livecomment_id)
        )
        return result.scalar_one_or_none()

    async def get_with_context(self, livecomment_id: int) -> Optional[Livecomment]:
        """Get a livecomment joined with its author and stream."""
        result = await self.session.execute(
            select(Livecomment)
            .options(*livecomment_context_options())
            .where(Livecomment.id == livecomment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_stream(
        self,
        livestream_id: int,
        limit: Optional[int] = None,
    ) -> list[Livecomment]:
        """List a stream's livecomments, newest first.

        Ties on ``created_at`` (second granularity) fall back to insertion
        order, newest first.

        Args:
            livestream_id: Stream to list
            limit: Maximum number of comments; None for all

        Raises:
            InvalidArgumentError: If limit is not a non-negative integer
        """
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
        ):
            raise InvalidArgumentError(
                "limit query parameter must be a non-negative integer",
                {"limit": str(limit)},
            )

        query = (
            select(Livecomment)
            .options(*livecomment_context_options())
            .where(Livecomment.livestream_id == livestream_id)
            .order_by(Livecomment.created_at.desc(), Livecomment.id.desc())
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_if_matches(
        self,
        livestream_id: int,
        predicate: Callable[[str], bool],
    ) -> int:
        """Delete every comment on a stream whose body satisfies ``predicate``.

        The stream's comment rows are locked while they are scanned so that
        nothing is inserted between the scan and the delete.

        Returns:
            Number of comments removed
        """
        result = await self.session.execute(
            select(Livecomment.id, Livecomment.comment)
            .where(Livecomment.livestream_id == livestream_id)
            .with_for_update()
        )
        doomed = [row.id for row in result if predicate(row.comment)]

        for start in range(0, len(doomed), DELETE_BATCH_SIZE):
            batch = doomed[start:start + DELETE_BATCH_SIZE]
            await self.session.execute(
                delete(Livecomment)
                .where(
                    Livecomment.livestream_id == livestream_id,
                    Livecomment.id.in_(batch),
                )
                .execution_options(synchronize_session="fetch")
            )

        return len(doomed)
