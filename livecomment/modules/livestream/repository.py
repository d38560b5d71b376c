"""Repository for livestream lookups."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from livecomment.modules.livestream.models import Livestream


class LivestreamRepository:
    """Read access to livestreams."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, livestream_id: int) -> Optional[Livestream]:
        """Get a livestream by ID."""
        result = await self.session.execute(
            select(Livestream).where(Livestream.id == livestream_id)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, livestream_id: int) -> Optional[Livestream]:
        """Get a livestream and lock its row until the transaction ends.

        Comment submission and NG word registration both take this lock, so a
        purge and a concurrent post on the same stream are serialized.
        Dialects without row locks (SQLite) ignore FOR UPDATE.
        """
        result = await self.session.execute(
            select(Livestream)
            .where(Livestream.id == livestream_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()
