"""User, theme and icon models.

These tables belong to the account service. They are mapped here so that
livecomment queries can join against them; this service never writes to them.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from livecomment.core.database import Base


class User(Base):
    """Platform user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # bcrypt hash owned by the account service
    password: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    theme: Mapped[Optional["Theme"]] = relationship(
        "Theme",
        back_populates="user",
        uselist=False,
        lazy="raise",
    )
    icon: Mapped[Optional["Icon"]] = relationship(
        "Icon",
        back_populates="user",
        uselist=False,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"


class Theme(Base):
    """Per-user display theme. Exactly one per user."""

    __tablename__ = "themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    dark_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped["User"] = relationship("User", back_populates="theme", lazy="raise")


class Icon(Base):
    """Uploaded avatar image. At most one per user."""

    __tablename__ = "icons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="icon", lazy="raise")
