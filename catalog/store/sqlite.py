"""
Durable book store on SQLite via SQLAlchemy Core.

Every public operation runs in its own short transaction, so a create is
visible to any read issued after it returns.
"""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import (
    Column, Integer, MetaData, Table, Text, create_engine, text,
)
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from catalog.errors import BookNotFoundError, StorageError
from catalog.models import Book, BookCreate
from catalog.store.base import BookStore

logger = structlog.get_logger(__name__)

# SQLite INTEGER is a signed 64-bit value
SQLITE_MIN_ID = -(2 ** 63)
SQLITE_MAX_ID = 2 ** 63 - 1

metadata = MetaData()

books_table = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("author", Text, nullable=False),
    Column("year", Integer, nullable=False, server_default=text("0")),
    Column("isbn", Text, nullable=False),
    Column("available", Integer, nullable=False, server_default=text("0")),
    sqlite_autoincrement=True,
)


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def build_engine(database_url: str) -> Engine:
    """
    Create an engine usable from the server's worker threads.

    In-memory databases exist per connection, so they are pinned to a
    single shared connection.
    """
    options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if _is_memory_url(database_url):
        options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


def _row_to_book(row: Row) -> Book:
    return Book(
        id=row.id,
        title=row.title,
        author=row.author,
        year=row.year,
        isbn=row.isbn,
        available=bool(row.available),
    )


def _check_id_range(book_id: int) -> None:
    if not SQLITE_MIN_ID <= book_id <= SQLITE_MAX_ID:
        raise BookNotFoundError(book_id)


def _to_columns(changes: Dict[str, Any]) -> Dict[str, Any]:
    columns = dict(changes)
    if "available" in columns:
        columns["available"] = int(columns["available"])
    return columns


class SQLiteBookStore(BookStore):
    """
    Book store persisted in a single ``books`` table.

    AUTOINCREMENT guarantees that IDs of deleted rows are never handed out
    again. No application-level lock is taken; each statement relies on
    SQLite's own atomicity.
    """

    backend_name = "sqlite"

    def __init__(
        self,
        database_url: str = "sqlite:///books.db",
        verify_isbn_checksum: bool = False,
        engine: Optional[Engine] = None,
    ):
        super().__init__(verify_isbn_checksum)
        self.database_url = database_url
        self.engine = engine or build_engine(database_url)
        self._create_schema()

    def _create_schema(self) -> None:
        try:
            metadata.create_all(self.engine)
            logger.info("Books table ready", database_url=self.database_url)
        except SQLAlchemyError as e:
            logger.error("Failed to create books table", error=str(e))
            raise StorageError("Failed to initialize book storage") from e

    def create(self, book: BookCreate) -> Book:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(books_table.insert().values(**_to_columns(book.model_dump())))
                book_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.error("Failed to insert book", title=book.title, error=str(e))
            raise StorageError("Failed to store book") from e

        logger.info("Book created", book_id=book_id, backend=self.backend_name)
        return Book(id=book_id, **book.model_dump())

    def get_by_id(self, book_id: int) -> Book:
        _check_id_range(book_id)
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    books_table.select().where(books_table.c.id == book_id)
                ).first()
        except SQLAlchemyError as e:
            logger.error("Failed to get book by ID", book_id=book_id, error=str(e))
            raise StorageError("Failed to read book") from e

        if row is None:
            raise BookNotFoundError(book_id)
        return _row_to_book(row)

    def list_all(self) -> List[Book]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(books_table.select().order_by(books_table.c.id)).all()
        except SQLAlchemyError as e:
            logger.error("Failed to list books", error=str(e))
            raise StorageError("Failed to read books") from e
        return [_row_to_book(row) for row in rows]

    def _apply_update(self, book_id: int, changes: Dict[str, Any]) -> Book:
        _check_id_range(book_id)
        try:
            with self.engine.begin() as conn:
                row = conn.execute(
                    books_table.select().where(books_table.c.id == book_id)
                ).first()
                if row is not None and changes:
                    conn.execute(
                        books_table.update()
                        .where(books_table.c.id == book_id)
                        .values(**_to_columns(changes))
                    )
        except SQLAlchemyError as e:
            logger.error("Failed to update book", book_id=book_id, error=str(e))
            raise StorageError("Failed to update book") from e

        if row is None:
            raise BookNotFoundError(book_id)
        logger.info("Book updated", book_id=book_id, fields=sorted(changes), backend=self.backend_name)
        return _row_to_book(row).model_copy(update=changes)

    def delete(self, book_id: int) -> None:
        _check_id_range(book_id)
        try:
            with self.engine.begin() as conn:
                deleted = conn.execute(
                    books_table.delete().where(books_table.c.id == book_id)
                ).rowcount
        except SQLAlchemyError as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise StorageError("Failed to delete book") from e

        if deleted == 0:
            raise BookNotFoundError(book_id)
        logger.info("Book deleted", book_id=book_id, backend=self.backend_name)

    def health_check(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error("Database health check failed", error=str(e))
            return False

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Disconnected from SQLite", database_url=self.database_url)
