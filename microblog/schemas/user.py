"""User profile schemas."""

from pydantic import BaseModel

from microblog.schemas.auth import UserResponse


class UserUpdate(BaseModel):
    """Update the current user's profile."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class UserProfileResponse(UserResponse):
    """User with post and follow counts."""

    micropost_count: int = 0
    following_count: int = 0
    followers_count: int = 0
    is_following: bool = False
