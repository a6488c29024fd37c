"""
FastAPI application for the Book Catalog API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.config import APIConfig, config
from api.routes import router
from catalog.errors import (
    BookNotFoundError, BookValidationError, InvalidQueryParamError, StorageError,
)
from catalog.models import ErrorResponse
from catalog.store import BookStore, create_store
from utilities.logger import get_logger

logger = get_logger(__name__)


def _error(status_code: int, error: str, detail: Optional[str] = None, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, status_code=status_code, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI, settings: APIConfig) -> None:
    """Map catalog errors to their HTTP status codes."""

    @app.exception_handler(BookValidationError)
    async def book_validation_handler(request: Request, exc: BookValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc), violations=exc.violations)

    @app.exception_handler(InvalidQueryParamError)
    async def query_param_handler(request: Request, exc: InvalidQueryParamError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _describe_request_error(exc))

    @app.exception_handler(BookNotFoundError)
    async def not_found_handler(request: Request, exc: BookNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure", error=str(exc), cause=str(exc.__cause__), path=request.url.path)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            detail=str(exc) if settings.debug else None,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            detail=str(exc) if settings.debug else None,
        )


def create_app(store: Optional[BookStore] = None, settings: APIConfig = config) -> FastAPI:
    """
    Build the application around a book store.

    Args:
        store: Store to serve; when omitted one is built from ``settings``
            at startup and closed at shutdown
        settings: Configuration to use

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = getattr(app.state, "store", None) is None
        if owns_store:
            app.state.store = create_store(
                settings.storage_backend,
                settings.database_url,
                verify_isbn_checksum=settings.validate_isbn_checksum,
            )
        logger.info("Starting Book Catalog API", storage=app.state.store.backend_name)

        yield

        logger.info("Shutting down Book Catalog API")
        if owns_store:
            app.state.store.close()
            app.state.store = None

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)
    app.include_router(router)
    return app


app = create_app()

