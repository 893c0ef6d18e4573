"""Shared Pydantic schemas for list endpoints."""

from enum import Enum

from pydantic import BaseModel, Field


class SortOrder(str, Enum):
    """Sort direction for list endpoints."""

    ASC = "asc"
    DESC = "desc"


class PaginationParams(BaseModel):
    """Pagination query parameters."""

    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate SQL offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Return page size as SQL limit."""
        return self.page_size


class PaginatedResponse[T](BaseModel):
    """Generic paginated response wrapper."""

    items: list[T] = Field(..., description="Page of items")
    total: int = Field(..., ge=0, description="Total item count matching the filters")
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, description="Items per page")
    pages: int = Field(..., ge=0, description="Total number of pages")
