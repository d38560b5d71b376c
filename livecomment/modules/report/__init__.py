"""Report module.

Abuse reports filed by users against individual livecomments.
"""

from livecomment.modules.report.models import LivecommentReport
from livecomment.modules.report.repository import LivecommentReportRepository
from livecomment.modules.report.schemas import LivecommentReportResponse
from livecomment.modules.report.service import ReportService

__all__ = [
    "LivecommentReport",
    "LivecommentReportRepository",
    "LivecommentReportResponse",
    "ReportService",
]
