"""Livecomment model.

A livecomment is a viewer's message posted to a livestream, optionally with a
tip. Rows are only ever inserted or deleted (by an NG word purge); they are
never edited.
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from livecomment.core.database import Base
from livecomment.modules.livestream.models import Livestream
from livecomment.modules.user.models import User


class Livecomment(Base):
    """A comment posted to a livestream."""

    __tablename__ = "livecomments"
    __table_args__ = (
        Index("ix_livecomments_livestream_id_created_at", "livestream_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    livestream_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("livestreams.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    tip: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # Epoch seconds, server clock
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    user: Mapped[User] = relationship(User, lazy="raise")
    livestream: Mapped[Livestream] = relationship(Livestream, lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<Livecomment(id={self.id}, livestream_id={self.livestream_id}, "
            f"user_id={self.user_id})>"
        )
