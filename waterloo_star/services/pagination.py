"""Response shaping: pagination, single-item, status and error envelopes.

``paginate`` is a pure function of its arguments: no clock, no ids, so two
calls with the same inputs serialise to identical bytes. The single-item
envelope is the one place request metadata (timestamp, request id) is
attached.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence, TypeVar

from waterloo_star.exceptions import InvalidArgument
from waterloo_star.models.schemas import (
    ApiResponse,
    ApiStatusResponse,
    ErrorResponse,
    PaginatedResponse,
    PaginationMeta,
)
from waterloo_star.utils import utc_now

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def paginate(
    items: Sequence[T],
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
    total_count: Optional[int] = None,
    *,
    code: int = 200,
    message: Optional[str] = None,
) -> PaginatedResponse[T]:
    """Slice ``items`` into one page and describe where that page sits.

    Args:
        items: Full ordered collection (or an already filtered subset).
        page: 1-based page number. Pages past the end yield an empty slice.
        page_size: Items per page, at least 1.
        total_count: True size of the collection when ``items`` is only part
            of it. Defaults to ``len(items)``.

    Raises:
        InvalidArgument: ``page_size < 1``, ``page < 1`` or a negative
            ``total_count``. Checked before any arithmetic.
    """
    if page_size < 1:
        raise InvalidArgument(f"page_size must be >= 1, got {page_size}")
    if page < 1:
        raise InvalidArgument(f"page must be >= 1, got {page}")
    total = len(items) if total_count is None else total_count
    if total < 0:
        raise InvalidArgument(f"total_count must be >= 0, got {total}")

    start = (page - 1) * page_size
    return PaginatedResponse[Any](
        code=code,
        success=True,
        message=message,
        meta=PaginationMeta.build(page, page_size, total),
        data=list(items[start:start + page_size]),
    )


def build_request_meta() -> Dict[str, Any]:
    return {
        "timestamp": utc_now().isoformat(),
        "requestId": f"req-{uuid.uuid4().hex}",
    }


def build_item_response(
    data: T,
    *,
    code: int = 200,
    message: Optional[str] = None,
    request_meta: bool = True,
) -> ApiResponse[T]:
    return ApiResponse[Any](
        code=code,
        success=True,
        message=message,
        meta=build_request_meta() if request_meta else None,
        data=data,
    )


def build_status_response(
    message: str = "Operation completed successfully",
    *,
    code: int = 200,
    success: bool = True,
) -> ApiStatusResponse:
    return ApiStatusResponse(code=code, success=success, message=message)


def build_error_response(
    code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorResponse:
    return ErrorResponse(code=code, success=False, message=message, details=details)


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "paginate",
    "build_request_meta",
    "build_item_response",
    "build_status_response",
    "build_error_response",
]
