"""
Book endpoints.

Handlers are plain functions so FastAPI runs them in its thread pool; the
store they talk to is whatever ``create_app`` attached to the application.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from catalog.models import (
    Book, BookCreate, BookListResponse, BookUpdate, HealthResponse, PaginationMeta,
)
from catalog.query import apply_query, parse_query
from catalog.store import BookStore
from catalog.validation import ensure_valid, validate_new_book
from utilities.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def get_store(request: Request) -> BookStore:
    """Dependency returning the store owned by the running application."""
    return request.app.state.store


@router.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(request: Request, response: Response, store: BookStore = Depends(get_store)):
    """Health check endpoint."""
    healthy = store.health_check()
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="ok" if healthy else "unhealthy",
        version=request.app.version,
        storage=store.backend_name,
    )


@router.get("/books", response_model=BookListResponse, tags=["Books"])
def list_books(
    author: Optional[str] = Query(None, description="Case-insensitive author substring"),
    year: Optional[str] = Query(None, description="Exact publication year"),
    available: Optional[str] = Query(None, description="'true' or 'false'"),
    page: Optional[str] = Query(None, description="Page number (starts from 1)"),
    limit: Optional[str] = Query(None, description="Items per page (1-100)"),
    store: BookStore = Depends(get_store),
):
    """
    List books with filtering and pagination.

    - **author**: Filter by author, case-insensitive substring match
    - **year**: Filter by exact publication year
    - **available**: Filter by availability
    - **page**: Page number, values below 1 are treated as 1
    - **limit**: Items per page, clamped to 1-100
    """
    filters, pages = parse_query({
        "author": author,
        "year": year,
        "available": available,
        "page": page,
        "limit": limit,
    })
    result = apply_query(store.list_all(), filters, pages)
    logger.debug(
        "Books listed",
        filters=filters.model_dump(exclude_none=True),
        page=pages.page,
        limit=pages.limit,
        total_items=result.total_items,
    )
    return BookListResponse(
        data=result.items,
        pagination=PaginationMeta(
            page=pages.page,
            limit=pages.limit,
            total_items=result.total_items,
            total_pages=result.total_pages,
        ),
    )


@router.post("/books", response_model=Book, status_code=status.HTTP_201_CREATED, tags=["Books"])
def create_book(book: BookCreate, store: BookStore = Depends(get_store)):
    """Create a book. ``available`` defaults to false."""
    ensure_valid(validate_new_book(book, store.verify_isbn_checksum))
    return store.create(book)


@router.get("/books/{book_id}", response_model=Book, tags=["Books"])
def get_book(book_id: int, store: BookStore = Depends(get_store)):
    """Get a single book by ID."""
    return store.get_by_id(book_id)


@router.put("/books/{book_id}", response_model=Book, tags=["Books"])
def update_book(book_id: int, book: BookUpdate, store: BookStore = Depends(get_store)):
    """Update the supplied fields of a book; omitted fields keep their values."""
    return store.update(book_id, book.changes())


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Books"])
def delete_book(book_id: int, store: BookStore = Depends(get_store)):
    """Delete a book. Its ID is never reused."""
    store.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
