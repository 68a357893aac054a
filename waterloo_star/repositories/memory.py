"""
In-memory post repository backed by the fixture data.

Stands in for the remote API during development: same envelopes, same
errors, plus a bounded random delay so loading states can be exercised.
"""
import asyncio
import random
import uuid
from typing import Any, Callable, Dict, List, Optional

from waterloo_star.config import ForumSettings
from waterloo_star.exceptions import NotFound, UpstreamError, ValidationError
from waterloo_star.models.enums import PostCategory, SortOrder
from waterloo_star.models.schemas import (
    ApiResponse,
    ApiStatusResponse,
    CreatePostInput,
    PaginatedResponse,
    Post,
    PostAuthor,
    PostStats,
    SearchParams,
    UpdatePostInput,
    UserProfile,
)
from waterloo_star.repositories.base import PostRepository
from waterloo_star.repositories.fixtures import FIXTURE_POSTS, find_author, find_profile
from waterloo_star.services.lifecycle import ensure_transition
from waterloo_star.services.pagination import build_item_response, build_status_response, paginate
from waterloo_star.utils import get_logger, utc_now

logger = get_logger(__name__)

_SORT_KEYS: Dict[str, Callable[[Post], Any]] = {
    "createdAt": lambda post: post.created_at,
    "updatedAt": lambda post: post.updated_at,
    "title": lambda post: post.title.lower(),
    "views": lambda post: post.stats.views,
    "likes": lambda post: post.stats.likes,
    "stars": lambda post: post.stats.stars,
    "replies": lambda post: post.stats.replies,
}
_SORT_KEYS["created_at"] = _SORT_KEYS["createdAt"]
_SORT_KEYS["updated_at"] = _SORT_KEYS["updatedAt"]

_FILTER_FIELDS: Dict[str, Callable[[Post], str]] = {
    "status": lambda post: post.status.value,
    "category": lambda post: post.category.value,
    "authorId": lambda post: post.author.id,
    "author_id": lambda post: post.author.id,
}


class InMemoryPostRepository(PostRepository):
    """Fixture-backed repository. Each instance owns a private copy of the data."""

    name = "fixtures"

    def __init__(self, settings: ForumSettings, posts: Optional[List[Post]] = None):
        self.settings = settings
        self.logger = get_logger("repository.fixtures")
        self._random = random.Random(settings.random_seed)
        source = FIXTURE_POSTS if posts is None else posts
        self._posts: List[Post] = [post.model_copy(deep=True) for post in source]

        author = find_author(settings.mock_author_id)
        if author is None:
            raise ValueError(f"Unknown fixture author '{settings.mock_author_id}'")
        self._author: PostAuthor = author

    async def _simulate_call(self, operation: str) -> None:
        delay = self._random.uniform(self.settings.mock_min_delay, self.settings.mock_max_delay)
        if delay > 0:
            await asyncio.sleep(delay)

        if self.settings.mock_failure_rate and self._random.random() < self.settings.mock_failure_rate:
            self.logger.warning("Simulated API failure", operation=operation)
            raise UpstreamError("Simulated API error", upstream_status=500)

    def _index_of(self, post_id: str) -> int:
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                return index
        raise NotFound(f"Post '{post_id}' not found")

    def _matches(self, post: Post, search: Optional[SearchParams]) -> bool:
        if search is None:
            return True
        if search.query:
            needle = search.query.lower()
            if needle not in post.title.lower() and needle not in post.content.lower():
                return False
        for key, expected in (search.filters or {}).items():
            getter = _FILTER_FIELDS.get(key)
            if getter is None:
                raise ValidationError(f"Unsupported filter '{key}'")
            if getter(post) != str(expected):
                return False
        return True

    async def list_posts(
        self,
        *,
        category: Optional[PostCategory] = None,
        author_id: Optional[str] = None,
        search: Optional[SearchParams] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> PaginatedResponse[Post]:
        await self._simulate_call("list_posts")

        posts = [
            post for post in self._posts
            if (category is None or post.category == category)
            and (author_id is None or post.author.id == author_id)
            and self._matches(post, search)
        ]

        sort_by = (search.sort_by if search else None) or "createdAt"
        sort_key = _SORT_KEYS.get(sort_by)
        if sort_key is None:
            raise ValidationError(f"Unsupported sort field '{sort_by}'")
        sort_order = (search.sort_order if search else None) or SortOrder.DESC
        posts.sort(key=sort_key, reverse=sort_order == SortOrder.DESC)

        self.logger.debug(
            "Fixture posts listed",
            category=category.value if category else None,
            author_id=author_id,
            matched=len(posts),
            page=page,
            page_size=page_size,
        )
        response = paginate(posts, page, page_size)
        response.data = [post.model_copy(deep=True) for post in response.data]
        return response

    async def get_post(self, post_id: str) -> ApiResponse[Post]:
        await self._simulate_call("get_post")
        post = self._posts[self._index_of(post_id)]
        return build_item_response(post.model_copy(deep=True))

    async def create_post(self, data: CreatePostInput, auth_token: str) -> ApiResponse[Post]:
        await self._simulate_call("create_post")

        now = utc_now()
        post = Post(
            id=f"post-{uuid.uuid4().hex}",
            title=data.title,
            content=data.content,
            category=data.category,
            status=data.status,
            author=self._author,
            images=list(data.images or []),
            stats=PostStats(),
            created_at=now,
            updated_at=now,
        )
        self._posts.append(post)

        self.logger.info("Fixture post created", post_id=post.id, category=post.category.value)
        return build_item_response(post.model_copy(deep=True), code=201)

    async def update_post(self, post_id: str, data: UpdatePostInput, auth_token: str) -> ApiResponse[Post]:
        await self._simulate_call("update_post")

        index = self._index_of(post_id)
        existing = self._posts[index]
        changes = data.model_dump(exclude_none=True)
        if "status" in changes:
            ensure_transition(existing.status, data.status)
        if "images" in changes:
            changes["images"] = list(changes["images"])
        changes["updated_at"] = max(utc_now(), existing.created_at)

        updated = existing.model_copy(update=changes)
        self._posts[index] = updated

        self.logger.info("Fixture post updated", post_id=post_id, fields=sorted(changes))
        return build_item_response(updated.model_copy(deep=True))

    async def delete_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        await self._simulate_call("delete_post")
        # Acknowledged only; fixture posts are never removed
        self._index_of(post_id)
        return build_status_response("Post deleted successfully")

    async def like_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        await self._simulate_call("like_post")

        index = self._index_of(post_id)
        existing = self._posts[index]
        stats = existing.stats.model_copy(update={"likes": existing.stats.likes + 1})
        self._posts[index] = existing.model_copy(update={"stats": stats})
        return build_status_response("Post liked successfully")

    async def get_user_profile(self, user_id: str) -> ApiResponse[UserProfile]:
        await self._simulate_call("get_user_profile")
        profile = find_profile(user_id)
        if profile is None:
            raise NotFound(f"User '{user_id}' not found")
        return build_item_response(profile.model_copy(deep=True))
