"""
Pydantic schemas for forum posts.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import ConfigDict, Field

from .base import CamelModel
from .users import PostAuthor
from ..enums import PostCategory, PostStatus


class PostStats(CamelModel):
    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    stars: int = Field(0, ge=0)
    replies: int = Field(0, ge=0)


class Post(CamelModel):
    """A housing request or sublet as returned by the API."""
    id: str
    title: str
    content: str
    category: PostCategory
    status: PostStatus
    author: PostAuthor
    images: List[str] = Field(default_factory=list)
    stats: PostStats = Field(default_factory=PostStats)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "post-4",
            "title": "Sublet Available: 1BR near campus - May-Aug 2024",
            "content": "Subletting my 1-bedroom apartment from May to August 2024.",
            "category": "sublet",
            "status": "published",
            "author": {"id": "user-4", "username": "sarah_wilson", "level": 4},
            "images": [],
            "stats": {"views": 342, "likes": 28, "stars": 15, "replies": 18},
            "createdAt": "2024-01-14T16:45:00Z",
            "updatedAt": "2024-01-14T16:45:00Z"
        }
    })


class CreatePostInput(CamelModel):
    """
    Data required to create a post. Server-generated fields (id, dates,
    stats, author) are not accepted.

    Required fields default to empty so that missing ones are reported
    together by the data access layer instead of one at a time.
    """
    title: str = ""
    content: str = ""
    category: Optional[PostCategory] = None
    images: Optional[List[str]] = None
    status: PostStatus = PostStatus.PUBLISHED


class UpdatePostInput(CamelModel):
    """Partial update; category cannot be changed after creation."""
    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[PostStatus] = None
    images: Optional[List[str]] = None
