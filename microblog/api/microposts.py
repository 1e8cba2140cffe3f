"""Micropost and feed API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from microblog.api.dependencies import Pagination, get_current_user, get_micropost_service
from microblog.models.user import User
from microblog.schemas.micropost import MicropostCreate, MicropostResponse
from microblog.services.microposts import MicropostService

router = APIRouter(prefix="/api/v1", tags=["microposts"])


@router.post(
    "/microposts",
    response_model=MicropostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_micropost(
    micropost_data: MicropostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    micropost_service: Annotated[MicropostService, Depends(get_micropost_service)],
):
    """Post a new micropost as the current user."""
    return micropost_service.create_micropost(current_user, micropost_data.content)


@router.delete("/microposts/{micropost_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_micropost(
    micropost_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    micropost_service: Annotated[MicropostService, Depends(get_micropost_service)],
):
    """Delete one of your microposts."""
    micropost = micropost_service.get_micropost(micropost_id)
    if micropost is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Micropost not found")
    micropost_service.delete_micropost(micropost, current_user)


@router.get("/feed", response_model=list[MicropostResponse])
async def get_feed(
    pagination: Annotated[Pagination, Depends()],
    current_user: Annotated[User, Depends(get_current_user)],
    micropost_service: Annotated[MicropostService, Depends(get_micropost_service)],
):
    """Microposts from you and the people you follow, newest first."""
    return micropost_service.feed(
        current_user, page=pagination.page, per_page=pagination.per_page
    )
