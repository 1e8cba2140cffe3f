"""User API endpoints: profiles, admin actions and the follow graph."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from microblog.api.dependencies import (
    Pagination,
    get_admin_user,
    get_current_user,
    get_follow_service,
    get_micropost_service,
    get_user_or_404,
    get_user_service,
)
from microblog.database import get_db
from microblog.models.user import User
from microblog.schemas.auth import UserResponse
from microblog.schemas.micropost import MicropostResponse, RelationshipResponse
from microblog.schemas.user import UserProfileResponse, UserUpdate
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    pagination: Annotated[Pagination, Depends()],
    current_user: Annotated[User, Depends(get_current_user)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """List all users."""
    return user_service.list_users(page=pagination.page, per_page=pagination.per_page)


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    follow_service: Annotated[FollowService, Depends(get_follow_service)],
    micropost_service: Annotated[MicropostService, Depends(get_micropost_service)],
):
    """Get a user's profile with post and follow counts."""
    user = get_user_or_404(db, user_id)
    following_count, followers_count = follow_service.counts(user)

    profile = UserProfileResponse.model_validate(user)
    profile.micropost_count = micropost_service.count_for(user)
    profile.following_count = following_count
    profile.followers_count = followers_count
    profile.is_following = follow_service.is_following(current_user, user)
    return profile


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Update your own profile."""
    user = get_user_or_404(db, user_id)
    if user.id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only edit your own profile",
        )

    return user_service.update_user(
        user,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        password_confirmation=user_data.password_confirmation,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    admin: Annotated[User, Depends(get_admin_user)],
    db: Annotated[Session, Depends(get_db)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user and everything they own (admin only)."""
    user = get_user_or_404(db, user_id)
    if user.id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admins cannot delete themselves",
        )
    user_service.destroy_user(user)


@router.post("/{user_id}/toggle-admin", response_model=UserResponse)
async def toggle_admin(
    user_id: int,
    admin: Annotated[User, Depends(get_admin_user)],
    db: Annotated[Session, Depends(get_db)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Grant or revoke admin privileges (admin only)."""
    user = get_user_or_404(db, user_id)
    return user_service.toggle_admin(user)


@router.get("/{user_id}/microposts", response_model=list[MicropostResponse])
async def list_user_microposts(
    user_id: int,
    pagination: Annotated[Pagination, Depends()],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    micropost_service: Annotated[MicropostService, Depends(get_micropost_service)],
):
    """List a user's microposts, newest first."""
    user = get_user_or_404(db, user_id)
    return micropost_service.microposts_for(
        user, page=pagination.page, per_page=pagination.per_page
    )


@router.get("/{user_id}/following", response_model=list[UserResponse])
async def list_following(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    follow_service: Annotated[FollowService, Depends(get_follow_service)],
):
    """List the users this user follows."""
    user = get_user_or_404(db, user_id)
    return follow_service.following(user)


@router.get("/{user_id}/followers", response_model=list[UserResponse])
async def list_followers(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    follow_service: Annotated[FollowService, Depends(get_follow_service)],
):
    """List the users following this user."""
    user = get_user_or_404(db, user_id)
    return follow_service.followers(user)


@router.post(
    "/{user_id}/follow",
    response_model=RelationshipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    follow_service: Annotated[FollowService, Depends(get_follow_service)],
):
    """Follow a user. Following someone twice is a no-op."""
    target = get_user_or_404(db, user_id)
    return follow_service.follow(current_user, target)


@router.delete("/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    follow_service: Annotated[FollowService, Depends(get_follow_service)],
):
    """Stop following a user."""
    target = get_user_or_404(db, user_id)
    follow_service.unfollow(current_user, target)
