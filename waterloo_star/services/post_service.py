"""
Post query interface used by the HTTP API and page renderers.

Checks the credential and the input before anything reaches the repository,
so a rejected call never has a side effect on either backend.
"""
import time
from typing import Optional

from waterloo_star.exceptions import Unauthorized, ValidationError
from waterloo_star.models.enums import PostCategory, SortOrder
from waterloo_star.models.schemas import (
    ApiResponse,
    ApiStatusResponse,
    CreatePostInput,
    PaginatedResponse,
    PaginationParams,
    Post,
    SearchParams,
    UpdatePostInput,
    UserProfile,
)
from waterloo_star.repositories.base import PostRepository
from waterloo_star.services.lifecycle import CREATABLE_STATUSES
from waterloo_star.services.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from waterloo_star.utils import elapsed_ms, get_logger, log_business_event, log_performance

logger = get_logger(__name__)

RECENT_POSTS_LIMIT = 5


def _require_token(auth_token: Optional[str], operation: str) -> str:
    if not auth_token:
        logger.warning("Rejected unauthenticated call", operation=operation)
        raise Unauthorized()
    return auth_token


def _require_id(post_id: str) -> str:
    if not post_id or not post_id.strip():
        raise ValidationError(missing_fields=["id"])
    return post_id


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class PostService:
    """Validating facade over a ``PostRepository``."""

    def __init__(self, repository: PostRepository):
        self.repository = repository
        self.logger = get_logger("post_service")

    @property
    def backend_name(self) -> str:
        return self.repository.name

    async def list_posts(
        self,
        category: PostCategory,
        search: Optional[SearchParams] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse[Post]:
        """
        List posts of one category.

        Page and page size come from ``pagination`` first, then ``search``;
        sorting from ``search`` first, then ``pagination``.
        """
        if category is None:
            raise ValidationError(missing_fields=["category"])
        return await self._list(category=category, search=search, pagination=pagination)

    async def list_posts_by_author(
        self,
        author_id: str,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse[Post]:
        if _is_blank(author_id):
            raise ValidationError(missing_fields=["authorId"])
        return await self._list(author_id=author_id, pagination=pagination)

    async def list_recent_posts(self, limit: int = RECENT_POSTS_LIMIT) -> PaginatedResponse[Post]:
        """Newest posts across every category."""
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        search = SearchParams(page=1, page_size=limit, sort_by="createdAt", sort_order=SortOrder.DESC)
        return await self._list(search=search)

    async def _list(
        self,
        *,
        category: Optional[PostCategory] = None,
        author_id: Optional[str] = None,
        search: Optional[SearchParams] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse[Post]:
        start = time.perf_counter()
        paging = pagination or search
        page = paging.page if paging else DEFAULT_PAGE
        page_size = paging.page_size if paging else DEFAULT_PAGE_SIZE

        effective = search.model_copy() if search else SearchParams()
        if pagination is not None:
            effective.sort_by = effective.sort_by or pagination.sort_by
            effective.sort_order = effective.sort_order or pagination.sort_order

        response = await self.repository.list_posts(
            category=category,
            author_id=author_id,
            search=effective,
            page=page,
            page_size=page_size,
        )

        duration_ms = elapsed_ms(start)
        log_performance(
            operation="list_posts",
            duration_ms=duration_ms,
            additional_data={"backend": self.backend_name, "returned": len(response.data)},
        )
        self.logger.info(
            "Posts listed",
            category=category.value if category else None,
            author_id=author_id,
            page=page,
            page_size=page_size,
            total_count=response.meta.total_count,
        )
        return response

    async def get_post(self, post_id: str) -> ApiResponse[Post]:
        _require_id(post_id)
        start = time.perf_counter()
        response = await self.repository.get_post(post_id)
        log_performance(
            operation="get_post",
            duration_ms=elapsed_ms(start),
            additional_data={"backend": self.backend_name, "post_id": post_id},
        )
        return response

    async def create_post(self, data: CreatePostInput, auth_token: Optional[str]) -> ApiResponse[Post]:
        token = _require_token(auth_token, "create_post")

        missing = [
            field for field, value in (
                ("title", data.title),
                ("content", data.content),
                ("category", data.category.value if data.category else None),
            )
            if _is_blank(value)
        ]
        if missing:
            self.logger.warning("Post creation rejected: missing fields", missing_fields=missing)
            raise ValidationError(missing_fields=missing)
        if data.status not in CREATABLE_STATUSES:
            raise ValidationError(f"A new post cannot be created with status '{data.status.value}'")

        response = await self.repository.create_post(data, token)
        log_business_event(
            event_type="post_created",
            details={
                "post_id": response.data.id,
                "category": response.data.category.value,
                "status": response.data.status.value,
                "backend": self.backend_name,
            },
        )
        return response

    async def update_post(
        self, post_id: str, data: UpdatePostInput, auth_token: Optional[str]
    ) -> ApiResponse[Post]:
        token = _require_token(auth_token, "update_post")
        _require_id(post_id)

        provided = data.model_dump(exclude_none=True)
        if not provided:
            raise ValidationError("No fields to update")
        blank = [field for field in ("title", "content") if field in provided and _is_blank(provided[field])]
        if blank:
            raise ValidationError(f"Fields cannot be blank: {', '.join(blank)}")

        response = await self.repository.update_post(post_id, data, token)
        log_business_event(
            event_type="post_updated",
            details={"post_id": post_id, "fields": sorted(provided), "backend": self.backend_name},
        )
        return response

    async def delete_post(self, post_id: str, auth_token: Optional[str]) -> ApiStatusResponse:
        token = _require_token(auth_token, "delete_post")
        _require_id(post_id)
        response = await self.repository.delete_post(post_id, token)
        log_business_event(
            event_type="post_deleted",
            details={"post_id": post_id, "backend": self.backend_name},
        )
        return response

    async def like_post(self, post_id: str, auth_token: Optional[str]) -> ApiStatusResponse:
        token = _require_token(auth_token, "like_post")
        _require_id(post_id)
        response = await self.repository.like_post(post_id, token)
        log_business_event(
            event_type="post_liked",
            details={"post_id": post_id, "backend": self.backend_name},
        )
        return response

    async def get_user_profile(self, user_id: str) -> ApiResponse[UserProfile]:
        if _is_blank(user_id):
            raise ValidationError(missing_fields=["userId"])
        return await self.repository.get_user_profile(user_id)
