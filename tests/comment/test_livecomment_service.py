"""Tests for livecomment submission and listing."""

import hashlib

import pytest
from sqlalchemy import func, select

from conftest import FALLBACK_AVATAR, create_livecomment, create_livestream, create_user
from livecomment.core.config import settings
from livecomment.core.errors import NotFoundError, RejectedError
from livecomment.modules.comment.models import Livecomment
from livecomment.modules.comment.service import LivecommentService
from livecomment.modules.moderation.service import ModerationService


class TestPostComment:
    """Tests for LivecommentService.post_comment."""

    @pytest.mark.asyncio
    async def test_post_returns_resolved_comment(self, session, resolver) -> None:
        owner = await create_user(session, "owner", icon=b"owner-icon")
        viewer = await create_user(session, "viewer")
        stream = await create_livestream(session, owner)

        response = await LivecommentService(session, resolver).post_comment(
            viewer.id, stream.id, "hello world", tip=500
        )
        await session.commit()

        assert response.comment == "hello world"
        assert response.tip == 500
        assert response.user.id == viewer.id
        assert response.user.icon_hash == hashlib.sha256(FALLBACK_AVATAR).hexdigest()
        assert response.livestream.id == stream.id
        assert response.livestream.owner.id == owner.id
        assert response.livestream.owner.icon_hash == hashlib.sha256(b"owner-icon").hexdigest()

    @pytest.mark.asyncio
    async def test_rejected_comment_is_not_stored(self, session, resolver) -> None:
        owner = await create_user(session, "owner")
        viewer = await create_user(session, "viewer")
        stream = await create_livestream(session, owner)
        await ModerationService(session).register_phrase(owner.id, stream.id, "banana")
        await session.commit()

        with pytest.raises(RejectedError):
            await LivecommentService(session, resolver).post_comment(
                viewer.id, stream.id, "free banana today"
            )
        await session.rollback()

        result = await session.execute(select(func.count()).select_from(Livecomment))
        assert result.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_post_to_unknown_stream_is_not_found(self, session, resolver) -> None:
        viewer = await create_user(session, "viewer")

        with pytest.raises(NotFoundError):
            await LivecommentService(session, resolver).post_comment(viewer.id, 999, "hi")


class TestListComments:
    """Tests for LivecommentService.list_comments."""

    @pytest.mark.asyncio
    async def test_listing_resolves_each_author(self, session, resolver) -> None:
        owner = await create_user(session, "owner")
        alice = await create_user(session, "alice", icon=b"alice-icon")
        stream = await create_livestream(session, owner)
        await create_livecomment(session, alice, stream, "first", created_at=1)
        await create_livecomment(session, owner, stream, "second", created_at=2)

        responses = await LivecommentService(session, resolver).list_comments(stream.id)

        assert [r.user.name for r in responses] == ["owner", "alice"]
        assert responses[1].user.icon_hash == hashlib.sha256(b"alice-icon").hexdigest()

    @pytest.mark.asyncio
    async def test_limit_is_capped_when_configured(
        self, session, resolver, monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "COMMENT_LIST_MAX_LIMIT", 2)
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner)
        for ts in range(4):
            await create_livecomment(session, owner, stream, f"c{ts}", created_at=ts)

        responses = await LivecommentService(session, resolver).list_comments(stream.id, 10)

        assert [r.comment for r in responses] == ["c3", "c2"]
