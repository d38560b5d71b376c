"""Livecomment report model.

A report is a user's abuse flag against a single livecomment. Reports are
append-only; purging a comment removes its reports with it.
"""

from sqlalchemy import BigInteger, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from livecomment.core.database import Base
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.livestream.models import Livestream
from livecomment.modules.user.models import User


class LivecommentReport(Base):
    """An abuse report filed against a livecomment."""

    __tablename__ = "livecomment_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Reporter
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    livestream_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("livestreams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    livecomment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("livecomments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Epoch seconds
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    reporter: Mapped[User] = relationship(User, lazy="raise")
    livestream: Mapped[Livestream] = relationship(Livestream, lazy="raise")
    livecomment: Mapped[Livecomment] = relationship(Livecomment, lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<LivecommentReport(id={self.id}, livecomment_id={self.livecomment_id}, "
            f"user_id={self.user_id})>"
        )
