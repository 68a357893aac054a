from abc import ABC, abstractmethod
from typing import Optional

from waterloo_star.models.enums import PostCategory
from waterloo_star.models.schemas import (
    ApiResponse,
    ApiStatusResponse,
    CreatePostInput,
    PaginatedResponse,
    Post,
    SearchParams,
    UpdatePostInput,
    UserProfile,
)


class PostRepository(ABC):
    """Where posts come from: the fixture store or the remote API.

    Implementations assume their inputs were already checked by
    ``PostService`` (credential present, required fields filled in).
    """

    name: str = "abstract"

    @abstractmethod
    async def list_posts(
        self,
        *,
        category: Optional[PostCategory] = None,
        author_id: Optional[str] = None,
        search: Optional[SearchParams] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> PaginatedResponse[Post]:
        """List posts matching category/author/search, one page at a time."""

    @abstractmethod
    async def get_post(self, post_id: str) -> ApiResponse[Post]:
        """Fetch one post. Raises NotFound for an unknown id."""

    @abstractmethod
    async def create_post(self, data: CreatePostInput, auth_token: str) -> ApiResponse[Post]:
        pass

    @abstractmethod
    async def update_post(self, post_id: str, data: UpdatePostInput, auth_token: str) -> ApiResponse[Post]:
        pass

    @abstractmethod
    async def delete_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        pass

    @abstractmethod
    async def like_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        pass

    @abstractmethod
    async def get_user_profile(self, user_id: str) -> ApiResponse[UserProfile]:
        """Fetch a user's full profile. Raises NotFound for an unknown user."""
