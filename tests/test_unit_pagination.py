import math

import pytest

from waterloo_star.exceptions import InvalidArgument
from waterloo_star.models.schemas import PaginationMeta
from waterloo_star.services.pagination import (
    build_error_response,
    build_item_response,
    build_status_response,
    paginate,
)


def test_second_page_of_six_items():
    items = ["a", "b", "c", "d", "e", "f"]
    response = paginate(items, page=2, page_size=3)
    assert response.data == ["d", "e", "f"]
    assert response.meta.total_pages == 2
    assert response.meta.total_count == 6
    assert response.meta.has_next_page is False
    assert response.meta.has_previous_page is True
    assert response.success is True and response.code == 200


def test_empty_collection():
    response = paginate([])
    assert response.data == []
    assert response.meta.total_pages == 0
    assert response.meta.has_next_page is False
    assert response.meta.has_previous_page is False


def test_page_beyond_range_is_empty_not_an_error():
    response = paginate(list(range(5)), page=4, page_size=2)
    assert response.data == []
    assert response.meta.total_pages == 3
    assert response.meta.has_next_page is False
    assert response.meta.has_previous_page is True


@pytest.mark.parametrize("page_size", [0, -1])
def test_non_positive_page_size_rejected(page_size):
    with pytest.raises(InvalidArgument):
        paginate([1, 2, 3], page=1, page_size=page_size)


def test_page_zero_rejected():
    with pytest.raises(InvalidArgument):
        paginate([1, 2, 3], page=0, page_size=2)


def test_negative_total_count_rejected():
    with pytest.raises(InvalidArgument):
        paginate([1], total_count=-1)


def test_explicit_total_count_drives_meta():
    # items is a pre-filtered subset; the true total is larger
    response = paginate([1, 2, 3], page=1, page_size=3, total_count=30)
    assert response.data == [1, 2, 3]
    assert response.meta.total_count == 30
    assert response.meta.total_pages == 10
    assert response.meta.has_next_page is True


@pytest.mark.parametrize("length,page,page_size", [(0, 1, 1), (7, 1, 3), (7, 3, 3), (7, 4, 3), (10, 2, 10), (25, 3, 10)])
def test_slice_length_and_flags(length, page, page_size):
    items = list(range(length))
    response = paginate(items, page=page, page_size=page_size)
    start = (page - 1) * page_size
    assert len(response.data) == min(page_size, max(0, length - start))
    assert response.data == items[start:start + page_size]
    assert response.meta.total_pages == math.ceil(length / page_size)
    assert response.meta.has_next_page == (page < response.meta.total_pages)
    assert response.meta.has_previous_page == (page > 1)


def test_paginate_is_pure():
    items = [{"id": i} for i in range(12)]
    first = paginate(items, page=2, page_size=5)
    second = paginate(items, page=2, page_size=5)
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_meta_serialises_camel_case():
    meta = PaginationMeta.build(page=1, page_size=10, total_count=11).model_dump(by_alias=True)
    assert meta == {
        "page": 1,
        "pageSize": 10,
        "totalPages": 2,
        "totalCount": 11,
        "hasNextPage": True,
        "hasPreviousPage": False,
    }


def test_item_response_carries_request_meta():
    response = build_item_response({"id": "x"})
    assert response.code == 200 and response.success is True
    assert response.data == {"id": "x"}
    assert response.meta["requestId"].startswith("req-")
    assert "timestamp" in response.meta

    bare = build_item_response({"id": "x"}, code=201, request_meta=False)
    assert bare.code == 201 and bare.meta is None


def test_status_and_error_envelopes():
    ok = build_status_response()
    assert ok.model_dump(by_alias=True) == {
        "code": 200,
        "success": True,
        "message": "Operation completed successfully",
    }

    error = build_error_response(404, "The requested resource was not found")
    assert error.success is False
    assert error.code == 404
    assert error.details is None
