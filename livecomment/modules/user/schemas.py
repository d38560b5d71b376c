"""Pydantic schemas for user profiles."""

from typing import Optional

from pydantic import BaseModel


class ThemeResponse(BaseModel):
    """Display theme attached to a profile."""

    id: int
    dark_mode: bool


class ProfileResponse(BaseModel):
    """Client-facing view of a user.

    ``icon_hash`` lets clients notice avatar changes without downloading
    the image again.
    """

    id: int
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    theme: ThemeResponse
    icon_hash: str
