"""Pagination utilities and models for API responses."""

from pydantic import BaseModel, Field, computed_field


class PaginationParams(BaseModel):
    """Query parameters for pagination.

    Use as a route dependency: `pagination: PaginationParams = Depends()`.
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(default=50, ge=1, le=500, description="Items per page")

    @property
    def skip(self) -> int:
        """Offset for the database query."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class PaginatedResponse[T](BaseModel):
    """Generic paginated response model."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


__all__ = ["PaginatedResponse", "PaginationParams"]
