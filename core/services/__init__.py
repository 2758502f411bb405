# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .review_store import (
    MAX_REVIEWS,
    InMemoryReviewStore,
    JsonFileReviewStore,
    ReviewStore,
)
from .review_service import ReviewService, normalize_text, validate_create

__all__ = [
    "MAX_REVIEWS",
    "InMemoryReviewStore",
    "JsonFileReviewStore",
    "ReviewStore",
    "ReviewService",
    "normalize_text",
    "validate_create",
]
