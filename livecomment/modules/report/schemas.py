"""Pydantic schemas for report module."""

from pydantic import BaseModel

from livecomment.core.errors import ConsistencyError
from livecomment.modules.comment.schemas import LivecommentResponse
from livecomment.modules.report.models import LivecommentReport
from livecomment.modules.user.profile import ProfileResolver
from livecomment.modules.user.schemas import ProfileResponse


class LivecommentReportResponse(BaseModel):
    """A report with the reporter and the reported comment resolved."""

    id: int
    reporter: ProfileResponse
    livecomment: LivecommentResponse
    created_at: int

    @classmethod
    def assemble(
        cls,
        report: LivecommentReport,
        resolver: ProfileResolver,
    ) -> "LivecommentReportResponse":
        """Build the response from a row loaded with its context.

        Raises:
            ConsistencyError: If the reported comment row is missing
        """
        if report.livecomment is None:
            raise ConsistencyError(
                "Livecomment row missing while assembling report",
                {"report_id": report.id},
            )
        return cls(
            id=report.id,
            reporter=resolver.resolve_user(report.reporter),
            livecomment=LivecommentResponse.assemble(report.livecomment, resolver),
            created_at=report.created_at,
        )
