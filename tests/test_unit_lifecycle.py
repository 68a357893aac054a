import pytest

from waterloo_star.exceptions import ValidationError
from waterloo_star.models.enums import PostStatus
from waterloo_star.services.lifecycle import CREATABLE_STATUSES, can_transition, ensure_transition


def test_forward_transitions_allowed():
    assert can_transition(PostStatus.DRAFT, PostStatus.PUBLISHED)
    assert can_transition(PostStatus.PUBLISHED, PostStatus.ARCHIVED)
    assert can_transition(PostStatus.DRAFT, PostStatus.ARCHIVED)


def test_same_status_is_a_no_op():
    for status in PostStatus:
        ensure_transition(status, status)


@pytest.mark.parametrize("current,target", [
    (PostStatus.PUBLISHED, PostStatus.DRAFT),
    (PostStatus.ARCHIVED, PostStatus.PUBLISHED),
    (PostStatus.ARCHIVED, PostStatus.DRAFT),
])
def test_backward_transitions_rejected(current, target):
    assert can_transition(current, target) is False
    with pytest.raises(ValidationError) as exc:
        ensure_transition(current, target)
    assert current.value in exc.value.message


def test_archived_posts_cannot_be_created():
    assert PostStatus.ARCHIVED not in CREATABLE_STATUSES
