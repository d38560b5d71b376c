"""Tests for filing livecomment reports."""

import hashlib

import pytest
from sqlalchemy import func, select

from conftest import FALLBACK_AVATAR, create_livecomment, create_livestream, create_user
from livecomment.core.errors import ConstraintViolationError, NotFoundError
from livecomment.modules.report.models import LivecommentReport
from livecomment.modules.report.repository import LivecommentReportRepository
from livecomment.modules.report.service import ReportService


async def report_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(LivecommentReport))
    return result.scalar_one()


class TestReportComment:
    """Tests for ReportService.report_comment."""

    @pytest.mark.asyncio
    async def test_report_resolves_reporter_and_comment_author(
        self, session, resolver
    ) -> None:
        owner = await create_user(session, "owner")
        author = await create_user(session, "author", icon=b"author-icon")
        reporter = await create_user(session, "reporter", dark_mode=True)
        stream = await create_livestream(session, owner)
        livecomment = await create_livecomment(session, author, stream, "rude words")

        response = await ReportService(session, resolver).report_comment(
            reporter.id, stream.id, livecomment.id
        )
        await session.commit()

        assert response.reporter.id == reporter.id
        assert response.reporter.theme.dark_mode is True
        assert response.reporter.icon_hash == hashlib.sha256(FALLBACK_AVATAR).hexdigest()
        assert response.livecomment.id == livecomment.id
        assert response.livecomment.user.id == author.id
        assert response.livecomment.user.icon_hash == hashlib.sha256(b"author-icon").hexdigest()
        assert response.livecomment.livestream.owner.id == owner.id
        assert await report_count(session) == 1

    @pytest.mark.asyncio
    async def test_same_comment_may_be_reported_twice(self, session, resolver) -> None:
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner)
        livecomment = await create_livecomment(session, owner, stream, "hello")
        service = ReportService(session, resolver)

        first = await service.report_comment(owner.id, stream.id, livecomment.id)
        second = await service.report_comment(owner.id, stream.id, livecomment.id)
        await session.commit()

        assert first.id != second.id
        assert await report_count(session) == 2

    @pytest.mark.asyncio
    async def test_missing_comment_is_not_found(self, session, resolver) -> None:
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner)

        with pytest.raises(NotFoundError):
            await ReportService(session, resolver).report_comment(owner.id, stream.id, 999)
        await session.rollback()

        assert await report_count(session) == 0

    @pytest.mark.asyncio
    async def test_missing_stream_is_not_found(self, session, resolver) -> None:
        owner = await create_user(session, "owner")

        with pytest.raises(NotFoundError):
            await ReportService(session, resolver).report_comment(owner.id, 999, 1)

    @pytest.mark.asyncio
    async def test_comment_on_other_stream_is_not_found(self, session, resolver) -> None:
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner, "mine")
        other = await create_livestream(session, owner, "other")
        livecomment = await create_livecomment(session, owner, other, "elsewhere")

        with pytest.raises(NotFoundError):
            await ReportService(session, resolver).report_comment(
                owner.id, stream.id, livecomment.id
            )
        await session.rollback()

        assert await report_count(session) == 0


class TestReportInsert:
    """Tests for LivecommentReportRepository.insert."""

    @pytest.mark.asyncio
    async def test_unknown_reporter_is_constraint_violation(self, session) -> None:
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner)
        livecomment = await create_livecomment(session, owner, stream, "hello")

        with pytest.raises(ConstraintViolationError):
            await LivecommentReportRepository(session).insert(
                user_id=4242,
                livestream_id=stream.id,
                livecomment_id=livecomment.id,
            )
        await session.rollback()

        assert await report_count(session) == 0

    @pytest.mark.asyncio
    async def test_unknown_livecomment_is_constraint_violation(self, session) -> None:
        owner = await create_user(session, "owner")
        stream = await create_livestream(session, owner)

        with pytest.raises(ConstraintViolationError):
            await LivecommentReportRepository(session).insert(
                user_id=owner.id,
                livestream_id=stream.id,
                livecomment_id=999,
            )
