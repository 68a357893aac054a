"""
Pydantic schemas for forum users.
"""
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, EmailStr, Field

from .base import CamelModel


class User(CamelModel):
    """Minimal user, as shown in lists and author info."""
    id: str
    username: str
    email: EmailStr
    avatar: Optional[str] = None
    level: int = Field(ge=0)


class UserStats(CamelModel):
    posts_count: int = Field(0, ge=0)
    likes_received: int = Field(0, ge=0)
    followers: int = Field(0, ge=0)
    following: int = Field(0, ge=0)
    star_points: int = Field(0, ge=0)
    member_since: datetime


class UserProfile(User):
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    stats: UserStats


class PostAuthor(CamelModel):
    """
    Snapshot of a user embedded in a post.

    Frozen and copied at creation time: later edits to the user do not
    rewrite who authored historical posts.
    """
    id: str
    username: str
    avatar: Optional[str] = None
    level: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_user(cls, user: User) -> "PostAuthor":
        return cls(id=user.id, username=user.username, avatar=user.avatar, level=user.level)
