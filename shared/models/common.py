"""
Common Models
=============

Paging, error envelope and health check models shared by every router.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing."""

    items: list[T]
    total: int
    page: int = 1
    page_size: int = 20
    pages: int = 1


class ErrorResponse(BaseModel):
    """Error envelope returned by every exception handler."""

    success: bool = False
    error: Any
    status_code: int


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    components: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @classmethod
    def from_components(
        cls,
        service: str,
        version: str,
        components: dict[str, dict[str, Any]],
    ) -> "HealthResponse":
        """Healthy only when every component reports healthy."""
        healthy = all(c.get("status") == "healthy" for c in components.values())
        return cls(
            status="healthy" if healthy else "degraded",
            service=service,
            version=version,
            components=components,
        )


class Pagination(BaseModel):
    """Page number and size translated to offset/limit."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def pages_for(self, total: int) -> int:
        """Number of pages needed for ``total`` items (at least one)."""
        if total <= 0:
            return 1
        return (total + self.page_size - 1) // self.page_size
