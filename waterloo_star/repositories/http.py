"""
Post repository backed by the remote forum API.

Thin aiohttp wrapper: builds the request, passes the bearer credential
through untouched and turns every non-success answer into one error of the
taxonomy in ``waterloo_star.exceptions``.
"""
import asyncio
import json
from typing import Any, Dict, Optional, Type

import aiohttp
from pydantic import BaseModel, ValidationError as PydanticValidationError

from waterloo_star.config import ForumSettings
from waterloo_star.exceptions import (
    ForumError,
    Forbidden,
    NotFound,
    Unauthorized,
    UpstreamError,
    ValidationError,
)
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
from waterloo_star.repositories.base import PostRepository
from waterloo_star.utils import get_logger

logger = get_logger(__name__)

_STATUS_ERRORS: Dict[int, Type[ForumError]] = {
    400: ValidationError,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    422: ValidationError,
}


def error_for_status(status: int, message: str) -> ForumError:
    """Map an HTTP failure status to the matching error kind."""
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return UpstreamError(message, upstream_status=status)
    return error_cls(message)


def build_list_params(
    *,
    category: Optional[PostCategory],
    author_id: Optional[str],
    search: Optional[SearchParams],
    page: int,
    page_size: int,
) -> Dict[str, str]:
    params: Dict[str, str] = {"page": str(page), "pageSize": str(page_size)}
    if category is not None:
        params["category"] = category.value
    if author_id:
        params["authorId"] = author_id
    if search is not None:
        if search.sort_by:
            params["sortBy"] = search.sort_by
        if search.sort_order:
            params["sortOrder"] = search.sort_order.value
        if search.query:
            params["query"] = search.query
        if search.filters:
            params["filters"] = json.dumps(search.filters, sort_keys=True)
    return params


class HttpPostRepository(PostRepository):
    """Talks to the forum API at ``api_base_url``. One short-lived session per call."""

    name = "remote"

    def __init__(self, settings: ForumSettings):
        self.settings = settings
        self.base_url = settings.api_base_url
        self.timeout = aiohttp.ClientTimeout(total=settings.request_timeout)
        self.logger = get_logger("repository.remote")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        fallback_message: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
        auth_token: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Perform one call and return the decoded JSON body (None when empty).

        Raises:
            ForumError: The server answered with a failure status.
            UpstreamError: Transport failure, timeout or undecodable success body.
        """
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"}
        if auth_token is not None:
            headers["Authorization"] = f"Bearer {auth_token}"

        self.logger.debug("Remote API request", method=method, url=url, params=params)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, params=params, json=body, headers=headers) as response:
                    if response.status >= 400:
                        message = await self._error_message(response) or fallback_message
                        self.logger.warning(
                            "Remote API request failed",
                            method=method,
                            url=url,
                            status_code=response.status,
                            error_message=message,
                        )
                        raise error_for_status(response.status, message)

                    raw = await response.read()
                    if response.status == 204 or not raw.strip():
                        return None
                    try:
                        payload = json.loads(raw)
                    except ValueError as e:
                        raise UpstreamError(
                            f"{fallback_message}: invalid JSON from backend",
                            upstream_status=response.status,
                        ) from e
                    if not isinstance(payload, dict):
                        raise UpstreamError(
                            f"{fallback_message}: unexpected response shape",
                            upstream_status=response.status,
                        )
                    return payload

        except asyncio.TimeoutError as e:
            self.logger.error("Remote API request timed out", method=method, url=url)
            raise UpstreamError(f"{fallback_message}: request timed out") from e

        except aiohttp.ClientError as e:
            self.logger.error("Remote API client error", method=method, url=url, error=str(e))
            raise UpstreamError(f"{fallback_message}: {e}") from e

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> Optional[str]:
        try:
            data = await response.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError):
            return None
        if isinstance(data, dict):
            message = data.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    def _parse(self, model: Type[BaseModel], payload: Optional[Dict[str, Any]], fallback_message: str) -> Any:
        if payload is None:
            raise UpstreamError(f"{fallback_message}: empty response from backend")
        if payload.get("success") is False:
            code = payload.get("code")
            status = code if isinstance(code, int) and not isinstance(code, bool) else 502
            message = payload.get("message")
            raise error_for_status(status, message if isinstance(message, str) and message else fallback_message)
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            self.logger.error("Malformed response from remote API", errors=e.errors(include_url=False))
            raise UpstreamError(f"{fallback_message}: malformed response from backend") from e

    def _acknowledge(self, payload: Optional[Dict[str, Any]], message: str, fallback_message: str) -> ApiStatusResponse:
        if payload is None:
            return ApiStatusResponse(code=200, success=True, message=message)
        return self._parse(ApiStatusResponse, payload, fallback_message)

    async def list_posts(
        self,
        *,
        category: Optional[PostCategory] = None,
        author_id: Optional[str] = None,
        search: Optional[SearchParams] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> PaginatedResponse[Post]:
        fallback = "Failed to fetch posts"
        params = build_list_params(
            category=category, author_id=author_id, search=search, page=page, page_size=page_size
        )
        payload = await self._request("GET", "/posts", params=params, fallback_message=fallback)
        return self._parse(PaginatedResponse[Post], payload, fallback)

    async def get_post(self, post_id: str) -> ApiResponse[Post]:
        fallback = "Failed to fetch post"
        payload = await self._request("GET", f"/posts/{post_id}", fallback_message=fallback)
        return self._parse(ApiResponse[Post], payload, fallback)

    async def create_post(self, data: CreatePostInput, auth_token: str) -> ApiResponse[Post]:
        fallback = "Failed to create post"
        payload = await self._request(
            "POST",
            "/posts",
            body=data.model_dump(mode="json", by_alias=True, exclude_none=True),
            auth_token=auth_token,
            fallback_message=fallback,
        )
        return self._parse(ApiResponse[Post], payload, fallback)

    async def update_post(self, post_id: str, data: UpdatePostInput, auth_token: str) -> ApiResponse[Post]:
        fallback = "Failed to update post"
        payload = await self._request(
            "PATCH",
            f"/posts/{post_id}",
            body=data.model_dump(mode="json", by_alias=True, exclude_none=True),
            auth_token=auth_token,
            fallback_message=fallback,
        )
        return self._parse(ApiResponse[Post], payload, fallback)

    async def delete_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        fallback = "Failed to delete post"
        payload = await self._request(
            "DELETE", f"/posts/{post_id}", auth_token=auth_token, fallback_message=fallback
        )
        return self._acknowledge(payload, "Post deleted successfully", fallback)

    async def like_post(self, post_id: str, auth_token: str) -> ApiStatusResponse:
        fallback = "Failed to like post"
        payload = await self._request(
            "POST", f"/posts/{post_id}/like", auth_token=auth_token, fallback_message=fallback
        )
        return self._acknowledge(payload, "Post liked successfully", fallback)

    async def get_user_profile(self, user_id: str) -> ApiResponse[UserProfile]:
        fallback = "Failed to fetch user profile"
        payload = await self._request("GET", f"/users/{user_id}/profile", fallback_message=fallback)
        return self._parse(ApiResponse[UserProfile], payload, fallback)
