"""FastAPI dependencies for authentication, services and pagination."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from microblog.config import get_settings
from microblog.database import get_db
from microblog.models.user import User
from microblog.security import decode_access_token
from microblog.services.auth import get_user
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService

security = HTTPBearer()


class Pagination:
    """Page and page size taken from the query string."""

    def __init__(
        self,
        page: Annotated[int, Query(ge=1)] = 1,
        per_page: Annotated[int | None, Query(ge=1)] = None,
    ):
        settings = get_settings()
        self.page = page
        self.per_page = min(per_page or settings.per_page, settings.max_per_page)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = int(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_admin_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require the current user to be an admin."""
    if not current_user.admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


def get_user_or_404(db: Session, user_id: int) -> User:
    """Look up a user by id or fail with 404."""
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_follow_service(
    db: Annotated[Session, Depends(get_db)],
) -> FollowService:
    """Get follow service with dependencies."""
    return FollowService(db)


def get_micropost_service(
    db: Annotated[Session, Depends(get_db)],
) -> MicropostService:
    """Get micropost service with dependencies."""
    return MicropostService(db)
