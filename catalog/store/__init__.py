"""
Book storage backends.

``create_store`` picks the backend named by configuration; everything
above this package depends only on ``BookStore``.
"""

from catalog.store.base import BookStore
from catalog.store.memory import InMemoryBookStore
from catalog.store.sqlite import SQLiteBookStore

BACKENDS = {
    InMemoryBookStore.backend_name: InMemoryBookStore,
    SQLiteBookStore.backend_name: SQLiteBookStore,
}


def create_store(backend: str, database_url: str, verify_isbn_checksum: bool = False) -> BookStore:
    store_class = BACKENDS.get(backend)
    if store_class is None:
        raise ValueError(f"Unknown storage backend '{backend}', expected one of: {sorted(BACKENDS)}")
    if issubclass(store_class, SQLiteBookStore):
        return store_class(database_url, verify_isbn_checksum=verify_isbn_checksum)
    return store_class(verify_isbn_checksum=verify_isbn_checksum)


__all__ = ["BookStore", "InMemoryBookStore", "SQLiteBookStore", "BACKENDS", "create_store"]
