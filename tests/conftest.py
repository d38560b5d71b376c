"""Shared fixtures: in-memory database, seed helpers and an API client."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from livecomment.core.database import create_all, enable_sqlite_foreign_keys, get_session
from livecomment.main import create_app
from livecomment.modules.auth import SessionGate
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.livestream.models import Livestream
from livecomment.modules.user import AvatarStore, Icon, ProfileResolver, Theme, User

FALLBACK_AVATAR = b"\xff\xd8\xff\xe0fallback-avatar"
TEST_SECRET = "test-secret-key"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def avatar_store() -> AvatarStore:
    return AvatarStore(FALLBACK_AVATAR)


@pytest.fixture
def resolver(avatar_store: AvatarStore) -> ProfileResolver:
    return ProfileResolver(avatar_store)


@pytest.fixture
def session_gate() -> SessionGate:
    return SessionGate(TEST_SECRET)


async def create_user(
    session: AsyncSession,
    name: str,
    icon: Optional[bytes] = None,
    dark_mode: bool = False,
    with_theme: bool = True,
) -> User:
    """Insert a user with a theme and, optionally, an uploaded icon."""
    user = User(
        name=name,
        display_name=name.title(),
        description=f"{name} description",
        password="",
    )
    session.add(user)
    await session.flush()
    if with_theme:
        session.add(Theme(user_id=user.id, dark_mode=dark_mode))
    if icon is not None:
        session.add(Icon(user_id=user.id, image=icon))
    await session.commit()
    return user


async def create_livestream(
    session: AsyncSession,
    owner: User,
    title: str = "stream",
) -> Livestream:
    livestream = Livestream(
        user_id=owner.id,
        title=title,
        description=f"{title} description",
        playlist_url="https://media.example.com/playlist.m3u8",
        thumbnail_url="https://media.example.com/thumbnail.jpg",
        start_at=1700000000,
        end_at=1700003600,
    )
    session.add(livestream)
    await session.commit()
    return livestream


async def create_livecomment(
    session: AsyncSession,
    author: User,
    livestream: Livestream,
    comment: str,
    tip: int = 0,
    created_at: int = 1700000100,
) -> Livecomment:
    """Insert a comment directly, bypassing NG word screening."""
    livecomment = Livecomment(
        user_id=author.id,
        livestream_id=livestream.id,
        comment=comment,
        tip=tip,
        created_at=created_at,
    )
    session.add(livecomment)
    await session.commit()
    return livecomment


@pytest.fixture
def app(
    session_maker: async_sessionmaker[AsyncSession],
    avatar_store: AvatarStore,
    session_gate: SessionGate,
):
    app = create_app(avatar_store=avatar_store, session_gate=session_gate)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


def auth_headers(session_gate: SessionGate, user: User, ttl_seconds: int = 3600) -> dict:
    token = session_gate.issue(user.id, ttl_seconds)
    return {"Authorization": f"Bearer {token}"}
