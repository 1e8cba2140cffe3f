"""Micropost schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MicropostCreate(BaseModel):
    """Create a new micropost."""

    content: str | None = None


class MicropostResponse(BaseModel):
    """Micropost response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime


class RelationshipResponse(BaseModel):
    """Follow edge response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    follower_id: int
    followed_id: int
    created_at: datetime
