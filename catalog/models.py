"""
Pydantic models for book records, request payloads and list queries.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ViolationRule(str, Enum):
    """Rule a book field failed."""
    EMPTY_FIELD = "empty_field"
    INVALID_YEAR = "invalid_year"
    INVALID_ISBN = "invalid_isbn"


class FieldViolation(BaseModel):
    """A single field-level validation failure."""
    field: str = Field(..., description="Name of the offending field")
    rule: ViolationRule = Field(..., description="Rule that was violated")
    message: str = Field(..., description="Human-readable explanation")


class Book(BaseModel):
    """
    A stored book record.

    Records are immutable; updates produce a new instance with the same ID.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Clean Code",
                "author": "Robert Martin",
                "year": 2008,
                "isbn": "978-0132350884",
                "available": False,
            }
        },
    )

    id: int = Field(..., description="Server-assigned book identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    year: int = Field(..., description="Publication year")
    isbn: str = Field(..., description="ISBN-13, hyphens allowed")
    available: bool = Field(False, description="Whether the book is available")


class BookCreate(BaseModel):
    """Payload for creating a book. Field constraints live in ``catalog.validation``."""
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    year: int = Field(..., description="Publication year")
    isbn: str = Field(..., description="ISBN-13, hyphens allowed")
    available: bool = Field(False, description="Whether the book is available")


class BookUpdate(BaseModel):
    """Partial update payload; omitted or null fields are left untouched."""
    title: Optional[str] = Field(None, description="New title")
    author: Optional[str] = Field(None, description="New author")
    year: Optional[int] = Field(None, description="New publication year")
    isbn: Optional[str] = Field(None, description="New ISBN-13")
    available: Optional[bool] = Field(None, description="New availability")

    def changes(self) -> Dict[str, Any]:
        """Return only the fields that were supplied with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class FilterSpec(BaseModel):
    """Normalized list filters; ``None`` means no constraint."""
    author: Optional[str] = Field(None, description="Case-insensitive author substring")
    year: Optional[int] = Field(None, description="Exact publication year")
    available: Optional[bool] = Field(None, description="Availability flag")

    def matches(self, book: Book) -> bool:
        if self.author is not None and self.author.lower() not in book.author.lower():
            return False
        if self.year is not None and book.year != self.year:
            return False
        if self.available is not None and book.available != self.available:
            return False
        return True


class PageSpec(BaseModel):
    """Normalized pagination window."""
    page: int = Field(1, ge=1, description="Page number (starts from 1)")
    limit: int = Field(10, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(BaseModel):
    """Pagination block of a list response."""
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Number of books per page")
    total_items: int = Field(..., description="Books matching the filters")
    total_pages: int = Field(..., description="Total number of pages, at least 1")


class BookListResponse(BaseModel):
    """Response model for book list with pagination."""
    data: List[Book] = Field(..., description="Books on the requested page")
    pagination: PaginationMeta


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")
    violations: Optional[List[FieldViolation]] = Field(None, description="Field-level validation failures")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    storage: str = Field(..., description="Active storage backend")
