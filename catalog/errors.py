"""
Exception hierarchy for the book catalog.

Each exception maps to exactly one HTTP status in ``api.main``.
"""

from typing import List, Optional

from catalog.models import FieldViolation


class CatalogError(Exception):
    """Base class for all catalog errors."""


class BookValidationError(CatalogError):
    """One or more book fields violate their constraints."""

    def __init__(self, violations: List[FieldViolation]):
        self.violations = list(violations)
        summary = "; ".join(v.message for v in self.violations)
        super().__init__(f"Validation failed: {summary}")


class InvalidQueryParamError(CatalogError):
    """A query-string parameter could not be parsed."""

    def __init__(self, param: str, value: Optional[str], expected: str):
        self.param = param
        self.value = value
        super().__init__(f"Invalid value '{value}' for query parameter '{param}': expected {expected}")


class BookNotFoundError(CatalogError):
    """No book exists with the requested ID."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with ID '{book_id}' not found")


class StorageError(CatalogError):
    """The underlying storage engine failed."""
