"""Pydantic schemas for moderation module."""

from pydantic import BaseModel, ConfigDict, Field


class ModerateRequest(BaseModel):
    """Request body for registering an NG word."""

    ng_word: str = Field(..., min_length=1)


class ModerateResponse(BaseModel):
    """Outcome of an NG word registration."""

    word_id: int
    purged_count: int


class NGWordResponse(BaseModel):
    """An NG word as returned to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    livestream_id: int
    word: str
    created_at: int
