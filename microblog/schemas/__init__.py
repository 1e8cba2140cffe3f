"""Pydantic schemas for API requests and responses."""

from microblog.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from microblog.schemas.errors import FieldErrorResponse, ValidationErrorResponse
from microblog.schemas.micropost import MicropostCreate, MicropostResponse, RelationshipResponse
from microblog.schemas.user import UserProfileResponse, UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "UserUpdate",
    "UserProfileResponse",
    "MicropostCreate",
    "MicropostResponse",
    "RelationshipResponse",
    "FieldErrorResponse",
    "ValidationErrorResponse",
]
