"""NG word model.

An NG word is a literal phrase a stream owner has banned from their stream.
Registering one rejects future comments containing it and purges existing
ones. A stream's effective banned set is every row for its ``livestream_id``.
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from livecomment.core.database import Base


class NGWord(Base):
    """A banned phrase registered on a livestream."""

    __tablename__ = "ng_words"
    __table_args__ = (
        Index("ix_ng_words_livestream_id_user_id", "livestream_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Stream owner at registration time
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    livestream_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("livestreams.id", ondelete="CASCADE"),
        nullable=False,
    )
    word: Mapped[str] = mapped_column(Text, nullable=False)
    # Epoch seconds
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<NGWord(id={self.id}, livestream_id={self.livestream_id}, word={self.word!r})>"
