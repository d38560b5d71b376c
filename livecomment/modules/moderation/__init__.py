"""Moderation module.

Per-stream NG words: registration with a retroactive purge of matching
comments, and screening of new comments.
"""

from livecomment.modules.moderation.models import NGWord
from livecomment.modules.moderation.repository import NGWordRepository
from livecomment.modules.moderation.schemas import (
    ModerateRequest,
    ModerateResponse,
    NGWordResponse,
)
from livecomment.modules.moderation.service import ModerationService
from livecomment.modules.moderation.spam_detection import (
    BannedPhraseMatcher,
    any_match,
    matches,
)

__all__ = [
    # Models
    "NGWord",
    # Repository
    "NGWordRepository",
    # Service
    "ModerationService",
    # Matching
    "BannedPhraseMatcher",
    "any_match",
    "matches",
    # Schemas
    "ModerateRequest",
    "ModerateResponse",
    "NGWordResponse",
]
