"""
Volatile book store backed by a dict.
"""

import threading
from typing import Any, Dict, List

import structlog

from catalog.errors import BookNotFoundError
from catalog.models import Book, BookCreate
from catalog.store.base import BookStore

logger = structlog.get_logger(__name__)


class InMemoryBookStore(BookStore):
    """
    Keeps books in process memory; contents vanish on restart.

    A single lock serializes ID assignment, insertion, update and delete.
    Stored ``Book`` instances are frozen and replaced wholesale, so a
    snapshot taken by ``list_all`` never contains a half-written record.
    """

    backend_name = "memory"

    def __init__(self, verify_isbn_checksum: bool = False):
        super().__init__(verify_isbn_checksum)
        self._books: Dict[int, Book] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, book: BookCreate) -> Book:
        with self._lock:
            record = Book(id=self._next_id, **book.model_dump())
            self._books[record.id] = record
            self._next_id += 1
        logger.info("Book created", book_id=record.id, backend=self.backend_name)
        return record

    def get_by_id(self, book_id: int) -> Book:
        record = self._books.get(book_id)
        if record is None:
            raise BookNotFoundError(book_id)
        return record

    def list_all(self) -> List[Book]:
        with self._lock:
            snapshot = list(self._books.values())
        # dict preserves insertion order, which is ID order
        return snapshot

    def _apply_update(self, book_id: int, changes: Dict[str, Any]) -> Book:
        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                raise BookNotFoundError(book_id)
            updated = current.model_copy(update=changes)
            self._books[book_id] = updated
        logger.info("Book updated", book_id=book_id, fields=sorted(changes), backend=self.backend_name)
        return updated

    def delete(self, book_id: int) -> None:
        with self._lock:
            if self._books.pop(book_id, None) is None:
                raise BookNotFoundError(book_id)
        logger.info("Book deleted", book_id=book_id, backend=self.backend_name)
