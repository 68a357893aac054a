"""
Post endpoints: listing, detail, create, update, delete and like.
"""
import json
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from waterloo_star.api.deps import get_auth_token, get_post_service, get_request_id
from waterloo_star.exceptions import ValidationError
from waterloo_star.models.enums import PostCategory, SortOrder
from waterloo_star.models.schemas import (
    ApiResponse,
    ApiStatusResponse,
    CreatePostInput,
    ErrorResponse,
    PaginatedResponse,
    PaginationParams,
    Post,
    SearchParams,
    UpdatePostInput,
)
from waterloo_star.services.post_service import PostService, RECENT_POSTS_LIMIT
from waterloo_star.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _parse_filters(raw: Optional[str]) -> Optional[dict]:
    if not raw:
        return None
    try:
        filters = json.loads(raw)
    except ValueError:
        raise ValidationError("filters must be a JSON object")
    if not isinstance(filters, dict):
        raise ValidationError("filters must be a JSON object")
    return filters


@router.get(
    "/",
    response_model=PaginatedResponse[Post],
    responses=ERROR_RESPONSES,
    summary="List posts of a category"
)
async def list_posts(
    category: PostCategory,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[SortOrder] = Query(None, alias="sortOrder"),
    query: Optional[str] = Query(None, max_length=200),
    filters: Optional[str] = Query(None, description="JSON object of field filters"),
    service: PostService = Depends(get_post_service),
    request_id: str = Depends(get_request_id),
) -> PaginatedResponse[Post]:
    search = SearchParams(
        sort_by=sort_by,
        sort_order=sort_order,
        query=query,
        filters=_parse_filters(filters),
    )
    pagination = PaginationParams(page=page, page_size=page_size)

    logger.info(
        "Post list requested",
        category=category.value,
        page=page,
        page_size=page_size,
        request_id=request_id
    )
    return await service.list_posts(category, search, pagination)


@router.get(
    "/recent",
    response_model=PaginatedResponse[Post],
    summary="Newest posts across categories"
)
async def list_recent_posts(
    limit: int = Query(RECENT_POSTS_LIMIT, ge=1, le=50),
    service: PostService = Depends(get_post_service),
) -> PaginatedResponse[Post]:
    return await service.list_recent_posts(limit)


@router.get(
    "/{post_id}",
    response_model=ApiResponse[Post],
    responses=ERROR_RESPONSES,
    summary="Get a single post"
)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[Post]:
    return await service.get_post(post_id)


@router.post(
    "/",
    response_model=ApiResponse[Post],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a post",
    description="Requires the auth-token cookie or a bearer token"
)
async def create_post(
    data: CreatePostInput,
    service: PostService = Depends(get_post_service),
    auth_token: Optional[str] = Depends(get_auth_token),
    request_id: str = Depends(get_request_id),
) -> ApiResponse[Post]:
    response = await service.create_post(data, auth_token)
    logger.info(
        "Post created",
        post_id=response.data.id,
        category=response.data.category.value,
        request_id=request_id
    )
    return response


@router.patch(
    "/{post_id}",
    response_model=ApiResponse[Post],
    responses=ERROR_RESPONSES,
    summary="Update a post"
)
async def update_post(
    post_id: str,
    data: UpdatePostInput,
    service: PostService = Depends(get_post_service),
    auth_token: Optional[str] = Depends(get_auth_token),
) -> ApiResponse[Post]:
    return await service.update_post(post_id, data, auth_token)


@router.delete(
    "/{post_id}",
    response_model=ApiStatusResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a post"
)
async def delete_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
    auth_token: Optional[str] = Depends(get_auth_token),
    request_id: str = Depends(get_request_id),
) -> ApiStatusResponse:
    response = await service.delete_post(post_id, auth_token)
    logger.info("Post deleted", post_id=post_id, request_id=request_id)
    return response


@router.post(
    "/{post_id}/like",
    response_model=ApiStatusResponse,
    responses=ERROR_RESPONSES,
    summary="Like a post"
)
async def like_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
    auth_token: Optional[str] = Depends(get_auth_token),
) -> ApiStatusResponse:
    return await service.like_post(post_id, auth_token)
