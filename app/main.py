# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Review Board API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3000
#   python scripts/start_server.py
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.exceptions import (
    ReviewBoardException,
    StorageFailureError,
    review_board_exception_handler,
    validation_exception_handler,
)
from app.middleware import BodySizeLimitMiddleware
from app.routers import health, reviews
from core.services import JsonFileReviewStore

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: log configuration, warn about the default admin key, and make
    sure the review file exists.
    """
    logger.info(f"Starting Review Board API in {settings.ENVIRONMENT} mode")
    logger.info(f"Review store: {settings.REVIEWS_DB_FILE}")

    if settings.uses_default_admin_key:
        logger.warning(
            "ADMIN_DELETE_KEY is the built-in default; set it before exposing this service"
        )

    try:
        JsonFileReviewStore(settings.REVIEWS_DB_FILE).ensure_file()
    except StorageFailureError as e:
        # Requests will keep reporting the failure; don't block startup on it
        logger.error(f"Review store not writable at startup: {e.details}")

    yield

    logger.info("Shutting down Review Board API")


# Create FastAPI application
app = FastAPI(
    title="Review Board API",
    description="""
## Customer Review Board

Collects short customer reviews (name, comment, 1-5 stars) and lists the
200 most recent ones.

| Method | Path | Auth |
|--------|------|------|
| GET | /api/reviews | none |
| POST | /api/reviews | none |
| DELETE | /api/reviews/{id} | `x-admin-key` header |
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Reviews",
            "description": "Submit, list and moderate reviews",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Inside CORSMiddleware, so 413 responses get CORS headers too
app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ReviewBoardException)
async def handle_review_board_exception(request: Request, exc: ReviewBoardException):
    """Handle custom Review Board exceptions."""
    return await review_board_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Map malformed bodies to INVALID_PAYLOAD."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    reviews.router,
    prefix="/api/reviews",
    tags=["Reviews"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Static Front-end
# =============================================================================
# Mounted last so /api routes always win.

if settings.STATIC_DIR is not None:
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
