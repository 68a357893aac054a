"""
Envelope and request-parameter schemas shared by every resource.

Attribute names are snake_case; the JSON wire format is camelCase.
"""
import math
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..enums import SortOrder

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationParams(CamelModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
    sort_by: Optional[str] = None
    sort_order: Optional[SortOrder] = None


class SearchParams(PaginationParams):
    """Free-text query and field filters on top of pagination."""
    query: Optional[str] = None
    filters: Optional[Dict[str, Union[str, int, float, bool]]] = None


class PaginationMeta(CamelModel):
    page: int
    page_size: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "PaginationMeta":
        total_pages = math.ceil(total_count / page_size)
        return cls(
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            total_count=total_count,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class PaginatedResponse(CamelModel, Generic[T]):
    code: int = 200
    success: bool = True
    message: Optional[str] = None
    meta: PaginationMeta
    data: List[T]


class ApiResponse(CamelModel, Generic[T]):
    code: int = 200
    success: bool = True
    message: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    data: T


class ApiStatusResponse(CamelModel):
    """Acknowledgement for operations without a payload (delete, like)."""
    code: int = 200
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(CamelModel):
    code: int
    success: bool = False
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "code": 404,
            "success": False,
            "message": "The requested resource was not found"
        }
    })
