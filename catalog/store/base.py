"""
Storage contract shared by every book store.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from catalog.models import Book, BookCreate
from catalog.validation import ensure_valid, validate_changes


class BookStore(ABC):
    """
    Owner of book records.

    Implementations assign monotonically increasing IDs, never reuse a
    deleted ID, and list records in ascending ID order.
    """

    backend_name = "abstract"

    def __init__(self, verify_isbn_checksum: bool = False):
        self.verify_isbn_checksum = verify_isbn_checksum

    @abstractmethod
    def create(self, book: BookCreate) -> Book:
        """Store a new book and return it with its assigned ID."""

    @abstractmethod
    def get_by_id(self, book_id: int) -> Book:
        """Return the book or raise ``BookNotFoundError``."""

    @abstractmethod
    def list_all(self) -> List[Book]:
        """Return every book ordered by ID."""

    def update(self, book_id: int, changes: Mapping[str, Any]) -> Book:
        """
        Merge ``changes`` into an existing book.

        Only the supplied fields are validated and written.

        Raises:
            BookValidationError: If a supplied field is invalid
            BookNotFoundError: If no book has ``book_id``
        """
        changes = {key: value for key, value in changes.items() if key != "id"}
        ensure_valid(validate_changes(changes, self.verify_isbn_checksum))
        return self._apply_update(book_id, changes)

    @abstractmethod
    def _apply_update(self, book_id: int, changes: Dict[str, Any]) -> Book:
        """Write already-validated changes."""

    @abstractmethod
    def delete(self, book_id: int) -> None:
        """Remove the book or raise ``BookNotFoundError``."""

    def health_check(self) -> bool:
        return True

    def close(self) -> None:
        pass
