"""Core module for configuration, persistence, logging and errors."""

from livecomment.core.config import settings
from livecomment.core.database import Base, get_session

__all__ = [
    "settings",
    "Base",
    "get_session",
]
