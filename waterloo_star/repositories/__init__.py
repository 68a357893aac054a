"""
Repositories package initialization.
Exports both post repositories and the factory that picks one.
"""
from waterloo_star.config import ForumSettings
from waterloo_star.utils import get_logger

from .base import PostRepository
from .memory import InMemoryPostRepository
from .http import HttpPostRepository

logger = get_logger(__name__)


def create_repository(settings: ForumSettings) -> PostRepository:
    """Pick the backend once, from settings resolved at startup."""
    if settings.use_mocks:
        repository: PostRepository = InMemoryPostRepository(settings)
    else:
        repository = HttpPostRepository(settings)
    logger.info(
        "Post repository selected",
        backend=repository.name,
        api_base_url=None if settings.use_mocks else settings.api_base_url,
    )
    return repository


__all__ = [
    "PostRepository",
    "InMemoryPostRepository",
    "HttpPostRepository",
    "create_repository",
]
