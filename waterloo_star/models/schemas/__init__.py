from .base import (
    CamelModel,
    PaginationParams,
    SearchParams,
    PaginationMeta,
    PaginatedResponse,
    ApiResponse,
    ApiStatusResponse,
    ErrorResponse,
)
from .users import User, UserStats, UserProfile, PostAuthor
from .posts import Post, PostStats, CreatePostInput, UpdatePostInput

__all__ = [
    # Base
    "CamelModel",
    "PaginationParams",
    "SearchParams",
    "PaginationMeta",
    "PaginatedResponse",
    "ApiResponse",
    "ApiStatusResponse",
    "ErrorResponse",

    # Users
    "User",
    "UserStats",
    "UserProfile",
    "PostAuthor",

    # Posts
    "Post",
    "PostStats",
    "CreatePostInput",
    "UpdatePostInput",
]
