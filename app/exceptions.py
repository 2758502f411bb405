# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the shape {"error": <message>, "code": <CODE>}.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReviewBoardException(Exception):
    """
    Base exception for the Review Board API.

    All custom exceptions inherit from this class. The message is what the
    client sees; details stay server-side and are only logged.
    """

    def __init__(
        self,
        message: str,
        code: str = "REVIEW_BOARD_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "error": self.message,
            "code": self.code,
        }


# =============================================================================
# Validation Exceptions
# =============================================================================

class InvalidPayloadError(ReviewBoardException):
    """Raised when create input is empty, malformed or out of range."""

    def __init__(self, reason: str = ""):
        super().__init__(
            message="Invalid review payload",
            code="INVALID_PAYLOAD",
            status_code=400,
            details={"reason": reason} if reason else None,
        )


class InvalidIdError(ReviewBoardException):
    """Raised when the review id path segment is empty."""

    def __init__(self):
        super().__init__(
            message="Invalid review id",
            code="INVALID_ID",
            status_code=400,
        )


class PayloadTooLargeError(ReviewBoardException):
    """Raised when a request body exceeds MAX_BODY_KB."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            message="Request body too large",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details={"size": size, "max_size": max_size},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(ReviewBoardException):
    """
    Raised when the admin key is missing or wrong.

    Deliberately generic: it never says whether the target review exists.
    """

    def __init__(self):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
        )


# =============================================================================
# Review Exceptions
# =============================================================================

class ReviewNotFoundError(ReviewBoardException):
    """Raised when a delete targets an id that doesn't exist."""

    def __init__(self, review_id: str):
        super().__init__(
            message="Review not found",
            code="REVIEW_NOT_FOUND",
            status_code=404,
            details={"review_id": review_id},
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageFailureError(ReviewBoardException):
    """
    Raised when the review store cannot be read or written.

    The operation that failed picks the client-facing message; the cause is
    kept in details for the server log.
    """

    def __init__(self, error: str, message: str = "Storage failure"):
        super().__init__(
            message=message,
            code="STORAGE_FAILURE",
            status_code=500,
            details={"error": error},
        )

    def for_operation(self, message: str) -> "StorageFailureError":
        """Return a copy carrying the operation-specific client message."""
        return StorageFailureError(self.details.get("error", ""), message=message)


# =============================================================================
# Exception Handlers
# =============================================================================

async def review_board_exception_handler(
    request: Request,
    exc: ReviewBoardException
) -> JSONResponse:
    """Convert ReviewBoardException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    else:
        logger.debug(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    A body that isn't a JSON object is an invalid review payload (400),
    not a framework-level 422.
    """
    logger.debug(f"Request validation failed on {request.url.path}: {exc.errors()}")
    return await review_board_exception_handler(
        request, InvalidPayloadError(reason="malformed request body")
    )
