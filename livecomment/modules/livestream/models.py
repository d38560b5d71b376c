"""Livestream model.

Streams are created and managed by the streaming service; livecomment only
reads them to scope comments and NG words and to check ownership.
"""

from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from livecomment.core.database import Base
from livecomment.modules.user.models import User


class Livestream(Base):
    """A livestream owned by one user."""

    __tablename__ = "livestreams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    playlist_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    thumbnail_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    # Epoch seconds
    start_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    owner: Mapped[User] = relationship(
        User,
        lazy="raise",
    )

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def __repr__(self) -> str:
        return f"<Livestream(id={self.id}, owner={self.user_id}, title={self.title})>"
