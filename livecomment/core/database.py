"""Database engine, session factory and declarative base.

Every exposed operation runs inside one session obtained from ``get_session``:
routers commit once on success, and any exception escaping the request rolls
the whole unit of work back.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from livecomment.core.config import settings


# Largest value a signed 64-bit INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for SQLite connections.

    SQLite ships with foreign keys disabled; without this the store would
    silently accept comments pointing at missing users or streams.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for ``url``."""
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(
            url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
    enable_sqlite_foreign_keys(engine)
    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional session for dependency injection.

    The session is rolled back if the request raises; uncommitted work is
    discarded when the session closes.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_all(bind: AsyncEngine) -> None:
    """Create every mapped table on ``bind``."""
    # Import models so they register with Base.metadata
    from livecomment.modules.user import models as _user_models  # noqa: F401
    from livecomment.modules.livestream import models as _livestream_models  # noqa: F401
    from livecomment.modules.comment import models as _comment_models  # noqa: F401
    from livecomment.modules.moderation import models as _moderation_models  # noqa: F401
    from livecomment.modules.report import models as _report_models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
