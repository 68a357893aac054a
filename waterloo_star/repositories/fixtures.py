"""
Seed data for the in-memory backend.

Users, profiles and posts used before the real backend is available. The
module-level lists are never mutated; repositories take deep copies.
"""
from datetime import datetime, timezone
from typing import List, Optional

from waterloo_star.models.enums import PostCategory, PostStatus
from waterloo_star.models.schemas import (
    Post,
    PostAuthor,
    PostStats,
    User,
    UserProfile,
    UserStats,
)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


FIXTURE_USERS: List[User] = [
    User(id="user-1", username="john_doe", email="john@uwaterloo.ca",
         avatar="https://i.pravatar.cc/150?img=1", level=5),
    User(id="user-2", username="jane_smith", email="jane@uwaterloo.ca",
         avatar="https://i.pravatar.cc/150?img=2", level=3),
    User(id="user-3", username="alex_chen", email="alex@uwaterloo.ca",
         avatar="https://i.pravatar.cc/150?img=3", level=7),
    User(id="user-4", username="sarah_wilson", email="sarah@uwaterloo.ca",
         avatar="https://i.pravatar.cc/150?img=4", level=4),
    User(id="user-5", username="mike_brown", email="mike@uwaterloo.ca",
         avatar="https://i.pravatar.cc/150?img=5", level=6),
]

FIXTURE_PROFILES: List[UserProfile] = [
    UserProfile(
        **FIXTURE_USERS[0].model_dump(),
        bio="Computer Science student at UWaterloo. Looking for housing near campus.",
        location="Waterloo, ON",
        website="https://johndoe.dev",
        phone="+1 (519) 555-0123",
        stats=UserStats(posts_count=42, likes_received=150, followers=89, following=67,
                        star_points=1250, member_since=_ts("2024-01-15T00:00:00")),
    ),
    UserProfile(
        **FIXTURE_USERS[1].model_dump(),
        bio="Engineering student. Pet-friendly housing preferred!",
        location="Waterloo, ON",
        stats=UserStats(posts_count=18, likes_received=65, followers=34, following=45,
                        star_points=680, member_since=_ts("2024-03-20T00:00:00")),
    ),
]

FIXTURE_AUTHORS: List[PostAuthor] = [PostAuthor.from_user(user) for user in FIXTURE_USERS]


def _post(post_id: str, author_index: int, category: PostCategory, title: str, content: str,
          images: List[str], stats: PostStats, created: str) -> Post:
    created_at = _ts(created)
    return Post(
        id=post_id,
        title=title,
        content=content,
        category=category,
        status=PostStatus.PUBLISHED,
        author=FIXTURE_AUTHORS[author_index],
        images=images,
        stats=stats,
        created_at=created_at,
        updated_at=created_at,
    )


HOUSING_REQUEST_POSTS: List[Post] = [
    _post(
        "post-1", 0, PostCategory.HOUSING_REQUEST,
        "Looking for 1BR near UWaterloo campus",
        "Hi! I'm a grad student looking for a 1-bedroom apartment near UWaterloo campus for Fall 2024. "
        "Budget is $1200-1500/month. Prefer a quiet area with good internet. Non-smoker, no pets. "
        "Please let me know if you have anything available!",
        ["https://images.unsplash.com/photo-1522708323590-d24dbb6b0267?w=800"],
        PostStats(views=245, likes=12, stars=8, replies=5),
        "2024-01-15T10:30:00",
    ),
    _post(
        "post-2", 1, PostCategory.HOUSING_REQUEST,
        "Roommate needed for 2BR apartment",
        "Looking for a roommate to share a 2BR apartment starting May 2024. Rent is $800/month per person, "
        "utilities included. Close to university, gym in building, parking available. "
        "Prefer someone clean and respectful.",
        [],
        PostStats(views=189, likes=8, stars=4, replies=12),
        "2024-01-16T14:20:00",
    ),
    _post(
        "post-3", 2, PostCategory.HOUSING_REQUEST,
        "Looking for pet-friendly housing",
        "Engineering student with a small dog looking for pet-friendly housing near campus. "
        "Budget up to $1400/month. Willing to pay pet deposit. Looking for May-August 2024 term.",
        ["https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800"],
        PostStats(views=156, likes=15, stars=6, replies=8),
        "2024-01-17T09:15:00",
    ),
]

SUBLET_POSTS: List[Post] = [
    _post(
        "post-4", 3, PostCategory.SUBLET,
        "Sublet Available: 1BR near campus - May-Aug 2024",
        "Subletting my 1-bedroom apartment from May to August 2024. $1300/month, utilities included. "
        "10-minute walk to campus, in-unit laundry, gym access, parking spot available. Fully furnished. "
        "Available for viewing!",
        [
            "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=800",
            "https://images.unsplash.com/photo-1522771739844-6a9f6d5f14af?w=800",
        ],
        PostStats(views=342, likes=28, stars=15, replies=18),
        "2024-01-14T16:45:00",
    ),
    _post(
        "post-5", 4, PostCategory.SUBLET,
        "Room available in 4BR house - $650/month",
        "One room available in a 4-bedroom house. $650/month + utilities (~$100). Great location, "
        "15-min bus ride to campus. Shared kitchen and living room. Current roommates are all students. "
        "Looking for someone starting February 2024.",
        ["https://images.unsplash.com/photo-1556912173-3bb406ef7e77?w=800"],
        PostStats(views=278, likes=19, stars=11, replies=22),
        "2024-01-16T11:30:00",
    ),
    _post(
        "post-6", 0, PostCategory.SUBLET,
        "Luxury 2BR Condo Sublet - Short Term Available",
        "Subletting my 2BR condo for the summer (May-August 2024). $1800/month. Brand new building with "
        "rooftop pool, gym, study rooms. Walking distance to campus. Fully furnished with modern appliances. "
        "Perfect for couples or friends.",
        [
            "https://images.unsplash.com/photo-1565182999561-18d7dc61c393?w=800",
            "https://images.unsplash.com/photo-1556912172-45b7abe8b7e1?w=800",
            "https://images.unsplash.com/photo-1560185893-a55cbc8c57e8?w=800",
        ],
        PostStats(views=456, likes=42, stars=23, replies=31),
        "2024-01-13T08:00:00",
    ),
]

# Newest first
FIXTURE_POSTS: List[Post] = sorted(
    HOUSING_REQUEST_POSTS + SUBLET_POSTS,
    key=lambda post: post.created_at,
    reverse=True,
)


def find_author(user_id: str) -> Optional[PostAuthor]:
    return next((author for author in FIXTURE_AUTHORS if author.id == user_id), None)


def find_profile(user_id: str) -> Optional[UserProfile]:
    return next((profile for profile in FIXTURE_PROFILES if profile.id == user_id), None)


__all__ = [
    "FIXTURE_USERS",
    "FIXTURE_PROFILES",
    "FIXTURE_AUTHORS",
    "HOUSING_REQUEST_POSTS",
    "SUBLET_POSTS",
    "FIXTURE_POSTS",
    "find_author",
    "find_profile",
]
