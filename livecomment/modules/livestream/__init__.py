"""Livestream lookups used to scope and authorize livecomment operations."""

from livecomment.modules.livestream.models import Livestream
from livecomment.modules.livestream.repository import LivestreamRepository
from livecomment.modules.livestream.schemas import LivestreamResponse

__all__ = [
    "Livestream",
    "LivestreamRepository",
    "LivestreamResponse",
]
