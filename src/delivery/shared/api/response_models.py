"""
Standard API Response Models
Consistent response structure across all endpoints
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from delivery.shared.domain.pagination import Page

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """
    Error body returned for every failure (4xx, 5xx).

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Additional error context (optional)
        correlation_id: Request id echoed from X-Request-ID (optional)
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error context")
    correlation_id: str | None = Field(None, description="Request correlation id")


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Paginated response wrapper.

    Attributes:
        data: List of items
        total: Total number of items (across all pages)
        page: Current page number (0-indexed)
        page_size: Items per page
        total_pages: Total number of pages
    """

    model_config = ConfigDict(frozen=True)

    data: list[T] = Field(..., description="List of items")
    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number (0-indexed)")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages")

    @classmethod
    def from_page(cls, page: Page[Any], convert: Callable[[Any], T]) -> "PaginatedResponse[T]":
        return cls(
            data=[convert(item) for item in page.items],
            total=page.total,
            page=page.page,
            page_size=page.size,
            total_pages=page.total_pages,
        )


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorDetail, "description": "Invalid argument or validation failure"},
    401: {"model": ErrorDetail, "description": "Missing or invalid credentials"},
    403: {"model": ErrorDetail, "description": "Access denied"},
    404: {"model": ErrorDetail, "description": "Resource not found"},
    409: {"model": ErrorDetail, "description": "Conflict"},
}
