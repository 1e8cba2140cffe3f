"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserRegister(BaseModel):
    """User registration request.

    Field rules live in microblog.validation so that every failure is
    reported per field in one response.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class UserLogin(BaseModel):
    """User login request."""

    email: str
    password: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: "UserResponse"


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    admin: bool
    created_at: datetime
