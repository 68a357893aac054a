"""Post status transitions: DRAFT -> PUBLISHED -> ARCHIVED, forward only."""
from __future__ import annotations

from waterloo_star.exceptions import ValidationError
from waterloo_star.models.enums import PostStatus

_ORDER = {
    PostStatus.DRAFT: 0,
    PostStatus.PUBLISHED: 1,
    PostStatus.ARCHIVED: 2,
}

CREATABLE_STATUSES = frozenset({PostStatus.DRAFT, PostStatus.PUBLISHED})


def can_transition(current: PostStatus, target: PostStatus) -> bool:
    # Same status is a no-op, not a transition
    return _ORDER[target] >= _ORDER[current]


def ensure_transition(current: PostStatus, target: PostStatus) -> None:
    if not can_transition(current, target):
        raise ValidationError(
            f"Cannot change post status from '{current.value}' to '{target.value}'"
        )


__all__ = ["CREATABLE_STATUSES", "can_transition", "ensure_transition"]
