"""FastAPI application entry point."""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.config import get_settings
from core.logging_config import configure_logging
from db.session import engine
from services.exceptions import (
    BookmarkNotFoundError,
    PatchFieldsRequiredError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_body(message: str) -> dict:
    """Structured error payload shared by every JSON error response."""
    return {"error": {"message": message}}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    configure_logging(get_settings())
    logger.info("Bookmarks API starting")

    yield

    await engine.dispose()
    logger.info("Bookmarks API stopped")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log the outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # API responses are never meant to be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Save, rate, and manage bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(PatchFieldsRequiredError)
async def patch_fields_required_handler(
    _request: Request, exc: PatchFieldsRequiredError,
) -> JSONResponse:
    """An update naming no known field gets the structured 400 body."""
    logger.warning("Rejected update: %s", exc.message)
    return JSONResponse(status_code=400, content=error_body(exc.message))


@app.exception_handler(ValidationError)
async def validation_error_handler(
    _request: Request, exc: ValidationError,
) -> PlainTextResponse:
    """Field validation failures are reported as plain text."""
    logger.warning("Rejected bookmark: %s", exc.message)
    return PlainTextResponse(exc.message, status_code=400)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError,
) -> PlainTextResponse:
    """Malformed JSON bodies are a 400, like any other bad payload."""
    logger.warning("Unparseable request body: %s", exc.errors())
    return PlainTextResponse(bookmarks.NOT_A_JSON_OBJECT, status_code=400)


@app.exception_handler(BookmarkNotFoundError)
async def bookmark_not_found_handler(
    _request: Request, exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Missing bookmarks get the structured 404 body."""
    logger.info("Bookmark with id %s not found", exc.bookmark_id)
    return JSONResponse(status_code=404, content=error_body(exc.message))


@app.exception_handler(StorageError)
async def storage_error_handler(
    _request: Request, exc: StorageError,
) -> JSONResponse:
    """Unexpected database failures are a 500; details only leak in DEV_MODE."""
    logger.error("Storage failure during %s", exc.operation, exc_info=exc)
    message = str(exc.__cause__ or exc) if get_settings().dev_mode else "server error"
    return JSONResponse(status_code=500, content=error_body(message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Give framework errors (401, 404 route, 405) the same error shape."""
    content = exc.detail if isinstance(exc.detail, dict) else error_body(str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


# Request logging middleware (innermost, sees the final status code)
app.add_middleware(RequestLoggingMiddleware)

# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
