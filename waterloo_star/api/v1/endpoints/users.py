"""
User-scoped endpoints.
"""
from fastapi import APIRouter, Depends, Query

from waterloo_star.api.deps import get_post_service
from waterloo_star.models.enums import SortOrder
from waterloo_star.models.schemas import (
    ApiResponse,
    ErrorResponse,
    PaginatedResponse,
    PaginationParams,
    Post,
    UserProfile,
)
from waterloo_star.services.post_service import PostService

router = APIRouter()


@router.get(
    "/{user_id}/profile",
    response_model=ApiResponse[UserProfile],
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get a user's profile"
)
async def get_user_profile(
    user_id: str,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[UserProfile]:
    return await service.get_user_profile(user_id)


@router.get(
    "/{user_id}/posts",
    response_model=PaginatedResponse[Post],
    summary="List posts written by a user"
)
async def list_user_posts(
    user_id: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    service: PostService = Depends(get_post_service),
) -> PaginatedResponse[Post]:
    pagination = PaginationParams(page=page, page_size=page_size, sort_by="createdAt", sort_order=SortOrder.DESC)
    return await service.list_posts_by_author(user_id, pagination)
