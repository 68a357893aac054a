"""Pytest fixtures shared by the unit, repository and API tests.

Async code is driven with ``asyncio.run`` from plain tests; the remote
backend is a real aiohttp server started per test on a free port.
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, List, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from fastapi.testclient import TestClient

# Ensure project root on sys.path so 'waterloo_star' resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from waterloo_star.config import ForumSettings  # noqa: E402
from waterloo_star.main import create_app  # noqa: E402
from waterloo_star.repositories import HttpPostRepository, InMemoryPostRepository  # noqa: E402
from waterloo_star.services.post_service import PostService  # noqa: E402

Route = Tuple[str, str, Callable[[web.Request], Awaitable[web.StreamResponse]]]


@pytest.fixture()
def mock_settings() -> ForumSettings:
    """Fixture backend with no artificial latency and no simulated failures."""
    return ForumSettings(use_mocks=True, mock_min_delay=0.0, mock_max_delay=0.0, random_seed=1234)


@pytest.fixture()
def memory_repository(mock_settings) -> InMemoryPostRepository:
    return InMemoryPostRepository(mock_settings)


@pytest.fixture()
def post_service(memory_repository) -> PostService:
    return PostService(memory_repository)


@pytest.fixture()
def client(mock_settings):
    with TestClient(create_app(mock_settings)) as test_client:
        yield test_client


@pytest.fixture()
def auth_cookies(mock_settings):
    return {mock_settings.auth_cookie_name: "opaque-session-token"}


@pytest.fixture()
def remote_backend():
    """Run ``scenario(repository)`` against an aiohttp server serving ``routes``.

    Returns whatever the scenario returns; requests seen by the server are
    collected in the list passed as the scenario's second argument.
    """
    def _run(routes: Iterable[Route], scenario: Callable[[HttpPostRepository, List[web.Request]], Awaitable[Any]]):
        async def _main():
            seen: List[web.Request] = []

            @web.middleware
            async def record(request: web.Request, handler):
                # cache the body so scenarios can inspect it after the response
                await request.read()
                seen.append(request)
                return await handler(request)

            backend = web.Application(middlewares=[record])
            for method, path, handler in routes:
                backend.router.add_route(method, path, handler)

            server = TestServer(backend)
            await server.start_server()
            try:
                settings = ForumSettings(
                    use_mocks=False,
                    api_base_url=str(server.make_url("/")),
                    request_timeout=5,
                )
                return await scenario(HttpPostRepository(settings), seen)
            finally:
                await server.close()

        return asyncio.run(_main())

    return _run


def post_payload(post_id: str = "post-42", **overrides) -> dict:
    """Wire-format post as the remote backend would send it."""
    payload = {
        "id": post_id,
        "title": "Room near campus",
        "content": "Furnished room, 5 minutes from campus.",
        "category": "sublet",
        "status": "published",
        "author": {"id": "user-9", "username": "remote_user", "avatar": None, "level": 2},
        "images": [],
        "stats": {"views": 3, "likes": 1, "stars": 0, "replies": 0},
        "createdAt": "2024-02-01T12:00:00Z",
        "updatedAt": "2024-02-01T12:00:00Z",
    }
    payload.update(overrides)
    return payload
