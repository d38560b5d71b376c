"""Livecomment module.

Stores and lists the comments viewers post to a livestream. Submission and
routing live in ``service`` and ``router``; they are imported directly so the
moderation module can depend on this package's repository.
"""

from livecomment.modules.comment.models import Livecomment
from livecomment.modules.comment.repository import (
    LivecommentRepository,
    livecomment_context_options,
)
from livecomment.modules.comment.schemas import LivecommentCreate, LivecommentResponse

__all__ = [
    # Models
    "Livecomment",
    # Repository
    "LivecommentRepository",
    "livecomment_context_options",
    # Schemas
    "LivecommentCreate",
    "LivecommentResponse",
]
