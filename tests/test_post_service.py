import asyncio

import pytest

from waterloo_star.exceptions import NotFound, Unauthorized, ValidationError
from waterloo_star.models.enums import PostCategory, PostStatus, SortOrder
from waterloo_star.models.schemas import (
    CreatePostInput,
    PaginationParams,
    SearchParams,
    UpdatePostInput,
)
from waterloo_star.repositories.base import PostRepository
from waterloo_star.services.pagination import build_status_response, paginate
from waterloo_star.services.post_service import PostService


class RecordingRepository(PostRepository):
    """Remembers every call; answers with empty envelopes."""

    name = "recording"

    def __init__(self):
        self.calls = []

    async def list_posts(self, **kwargs):
        self.calls.append(("list_posts", kwargs))
        return paginate([], page=kwargs["page"], page_size=kwargs["page_size"])

    async def get_post(self, post_id):
        self.calls.append(("get_post", post_id))
        raise NotFound()

    async def create_post(self, data, auth_token):
        self.calls.append(("create_post", data, auth_token))
        raise AssertionError("create_post should not be reached in these tests")

    async def update_post(self, post_id, data, auth_token):
        self.calls.append(("update_post", post_id, data, auth_token))
        raise AssertionError("update_post should not be reached in these tests")

    async def delete_post(self, post_id, auth_token):
        self.calls.append(("delete_post", post_id, auth_token))
        return build_status_response("Post deleted successfully")

    async def like_post(self, post_id, auth_token):
        self.calls.append(("like_post", post_id, auth_token))
        return build_status_response("Post liked successfully")

    async def get_user_profile(self, user_id):
        self.calls.append(("get_user_profile", user_id))
        raise NotFound()


@pytest.fixture()
def recording():
    return RecordingRepository()


@pytest.fixture()
def service(recording):
    return PostService(recording)


@pytest.mark.parametrize("token", [None, ""])
def test_mutations_require_a_credential_before_dispatch(service, recording, token):
    valid = CreatePostInput(title="t", content="c", category=PostCategory.SUBLET)
    calls = [
        service.create_post(valid, token),
        service.create_post(CreatePostInput(), token),
        service.update_post("post-1", UpdatePostInput(title="x"), token),
        service.delete_post("post-1", token),
        service.like_post("post-1", token),
    ]
    for call in calls:
        with pytest.raises(Unauthorized):
            asyncio.run(call)
    assert recording.calls == []


def test_create_lists_every_missing_field(service, recording):
    with pytest.raises(ValidationError) as exc:
        asyncio.run(service.create_post(CreatePostInput(title="  ", content=""), "token"))
    assert exc.value.missing_fields == ["title", "content", "category"]
    assert exc.value.details() == {"missingFields": ["title", "content", "category"]}
    assert exc.value.status_code == 400
    assert recording.calls == []


def test_create_rejects_archived_status(service, recording):
    data = CreatePostInput(title="t", content="c", category=PostCategory.SUBLET, status=PostStatus.ARCHIVED)
    with pytest.raises(ValidationError):
        asyncio.run(service.create_post(data, "token"))
    assert recording.calls == []


def test_update_rejects_empty_and_blank_changes(service, recording):
    with pytest.raises(ValidationError) as exc:
        asyncio.run(service.update_post("post-1", UpdatePostInput(), "token"))
    assert exc.value.message == "No fields to update"

    with pytest.raises(ValidationError):
        asyncio.run(service.update_post("post-1", UpdatePostInput(title=" "), "token"))
    assert recording.calls == []


def test_blank_post_id_rejected(service, recording):
    with pytest.raises(ValidationError):
        asyncio.run(service.get_post(""))
    with pytest.raises(ValidationError):
        asyncio.run(service.like_post("  ", "token"))
    assert recording.calls == []


def test_credential_is_passed_through_untouched(service, recording):
    ack = asyncio.run(service.like_post("post-1", "opaque value"))
    assert ack.success is True
    assert recording.calls == [("like_post", "post-1", "opaque value")]


def test_repository_errors_propagate(service):
    with pytest.raises(NotFound):
        asyncio.run(service.get_post("post-1"))


def test_pagination_wins_for_paging_and_search_for_sorting(service, recording):
    search = SearchParams(page=5, page_size=50, sort_by="likes", sort_order=SortOrder.ASC, query="room")
    pagination = PaginationParams(page=2, page_size=3, sort_by="title", sort_order=SortOrder.DESC)
    asyncio.run(service.list_posts(PostCategory.SUBLET, search, pagination))

    _, kwargs = recording.calls[0]
    assert kwargs["page"] == 2
    assert kwargs["page_size"] == 3
    assert kwargs["category"] == PostCategory.SUBLET
    assert kwargs["search"].sort_by == "likes"
    assert kwargs["search"].sort_order == SortOrder.ASC
    assert kwargs["search"].query == "room"


def test_sorting_falls_back_to_pagination(service, recording):
    pagination = PaginationParams(page=1, page_size=10, sort_by="title", sort_order=SortOrder.ASC)
    asyncio.run(service.list_posts(PostCategory.HOUSING_REQUEST, None, pagination))
    _, kwargs = recording.calls[0]
    assert kwargs["search"].sort_by == "title"
    assert kwargs["search"].sort_order == SortOrder.ASC


def test_list_defaults(service, recording):
    asyncio.run(service.list_posts(PostCategory.SUBLET))
    _, kwargs = recording.calls[0]
    assert (kwargs["page"], kwargs["page_size"]) == (1, 10)


def test_list_requires_category(service):
    with pytest.raises(ValidationError):
        asyncio.run(service.list_posts(None))


def test_recent_posts_across_categories(post_service):
    response = asyncio.run(post_service.list_recent_posts(limit=2))
    assert [post.id for post in response.data] == ["post-3", "post-2"]
    assert response.meta.total_count == 6

    with pytest.raises(ValidationError):
        asyncio.run(post_service.list_recent_posts(limit=0))


def test_posts_by_author(post_service):
    response = asyncio.run(post_service.list_posts_by_author("user-1"))
    assert [post.id for post in response.data] == ["post-1", "post-6"]

    with pytest.raises(ValidationError):
        asyncio.run(post_service.list_posts_by_author(""))


def test_create_through_fixture_backend(post_service):
    data = CreatePostInput(title="Need a room", content="Fall term", category=PostCategory.HOUSING_REQUEST)
    response = asyncio.run(post_service.create_post(data, "token"))
    assert response.code == 201
    assert response.data.title == "Need a room"


def test_profile_lookup_requires_user_id(service, recording):
    with pytest.raises(ValidationError):
        asyncio.run(service.get_user_profile(" "))
    assert recording.calls == []

    with pytest.raises(NotFound):
        asyncio.run(service.get_user_profile("user-2"))
    assert recording.calls == [("get_user_profile", "user-2")]
