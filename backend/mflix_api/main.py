"""
Mflix API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn mflix_api.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐             │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │             │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘             │
    │                                                          │
    │  Routes:                                                 │
    │  ┌────────────┐ ┌──────────────────────┐ ┌──────────────┐│
    │  │ /api/movies│ │ /api/movies/…/comments│ │/api/theaters ││
    │  └────────────┘ └──────────────────────┘ └──────────────┘│
    │  ┌────────────┐                                          │
    │  │ GET /health│                                          │
    │  └────────────┘                                          │
    └──────────────────────────────────────────────────────────┘

Every response body is an envelope: {status, message?, data?, error?, errors?}.
Error envelopes are produced here, by the exception handlers.

Lifecycle:
    Startup:  logging → configuration check → MongoDB client
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from mflix_api import __version__
from mflix_api.config import settings
from mflix_api.database import close_client, get_client
from mflix_api.exceptions import (
    DatabaseError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from mflix_api.middleware.logging import RequestLoggingMiddleware
from mflix_api.middleware.request_id import RequestIDMiddleware, RequestIdLogFilter
from mflix_api.routes import comments, health, movies, theaters
from mflix_api.schemas.envelope import envelope_response, format_validation_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: LOG_FORMAT. The request_id field is filled by RequestIdLogFilter
    on the stdout handler.
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIdLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[handler],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Validate critical configuration (logged, not fatal)
        3. Create the MongoDB client (connections open lazily)

    Shutdown sequence:
        1. Close the MongoDB client
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Mflix API starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: /health keeps reporting the database state
        logger.error("Configuration error: %s", str(e))

    get_client()
    logger.info("Database: %s", settings.mongodb_db)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Mflix API shutting down...")
    await close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to envelope responses.

    Handler table:
        RequestValidationError  → 400 "Validation error" + errors
        InvalidIdError          → 400 message + error "ID format is incorrect"
        ValidationError         → 400 message + errors
        NotFoundError           → 404 message (+ error)
        DatabaseError           → 500 "Internal Server Error" + error
        HTTPException 405       → 405 "Method Not Allowed" + "<METHOD> method is not supported"
        HTTPException (other)   → status code + detail
        Exception (fallback)    → 500 "Internal Server Error"
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.warning(
            "Request validation failed on %s %s: %d error(s)",
            request.method, request.url.path, len(errors),
        )
        return envelope_response(400, message="Validation error", errors=errors)

    @app.exception_handler(InvalidIdError)
    async def handle_invalid_id(request: Request, exc: InvalidIdError):
        logger.warning("Invalid identifier: %s | Context: %s", exc.message, exc.context)
        return envelope_response(400, message=exc.message, error=exc.error)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return envelope_response(400, message=exc.message, errors=exc.errors)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return envelope_response(404, message=exc.message, error=exc.detail)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return envelope_response(500, message="Internal Server Error", error=exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return envelope_response(
                405,
                message="Method Not Allowed",
                error=f"{request.method} method is not supported",
                headers=exc.headers,
            )
        return envelope_response(exc.status_code, message=str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Stack trace is logged server-side only.

        Starlette runs this handler outside the middleware chain, after
        RequestIDMiddleware has reset its ContextVar; the id is read back
        from request.state and echoed here instead.
        """
        rid = getattr(request.state, "request_id", None)
        logger.error(
            "[%s] Unexpected error: %s",
            rid or "-",
            str(exc),
            exc_info=True,
        )
        return envelope_response(
            500,
            message="Internal Server Error",
            error="An unexpected error occurred. Please try again later.",
            headers={"X-Request-ID": rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Mflix API",
        description=(
            "CRUD API over the MongoDB sample_mflix dataset: movies, their comments, "
            "and theaters. Every response is a {status, message, data | error} envelope."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(movies.router)
    app.include_router(comments.router)
    app.include_router(theaters.router)
    app.include_router(health.router)

    return app


# uvicorn expects `mflix_api.main:app` to be importable
app = create_app()
