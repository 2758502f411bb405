# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - review.py: Review record, create request, persisted document
#
# These models define the "contract" between API and clients.
# =============================================================================

from .review import (
    MAX_RATING,
    MIN_RATING,
    NAME_MAX_LENGTH,
    TEXT_MAX_LENGTH,
    DeleteResponse,
    Review,
    ReviewCreateRequest,
    ReviewDocument,
)

__all__ = [
    "MAX_RATING",
    "MIN_RATING",
    "NAME_MAX_LENGTH",
    "TEXT_MAX_LENGTH",
    "DeleteResponse",
    "Review",
    "ReviewCreateRequest",
    "ReviewDocument",
]
