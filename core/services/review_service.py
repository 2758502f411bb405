# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================
# Input sanitation and business rules for reviews, in front of the store:
# - normalize_text: trim, collapse whitespace, cap length
# - validate_create: name/text present, rating an integer in 1..5
# - ReviewService: create / list_recent / delete_review
#
# All validation happens before the store is touched, so invalid input
# never causes a partial write.
# =============================================================================

import hmac
import logging
from typing import Any

from app.exceptions import (
    InvalidIdError,
    InvalidPayloadError,
    ReviewNotFoundError,
    StorageFailureError,
    UnauthorizedError,
)
from core.models.review import (
    MAX_RATING,
    MIN_RATING,
    NAME_MAX_LENGTH,
    TEXT_MAX_LENGTH,
    Review,
)
from core.services.review_store import ReviewStore
from lib.utils import generate_review_id, normalize_text, now_ms

logger = logging.getLogger(__name__)


# =============================================================================
# Validation
# =============================================================================

def _coerce_rating(rating: Any) -> int | None:
    # bool is an int subclass; true/false are not ratings
    if isinstance(rating, bool):
        return None
    if isinstance(rating, int):
        return rating
    # JSON has a single number type, so 5.0 is accepted as 5
    if isinstance(rating, float) and rating.is_integer():
        return int(rating)
    return None


def validate_create(name: Any, text: Any, rating: Any) -> tuple[str, str, int]:
    """
    Validate and normalize create input.

    Returns:
        (name, text, rating) in normalized form

    Raises:
        InvalidPayloadError: If name or text is empty after normalization,
            or rating is not an integer between 1 and 5
    """
    clean_name = normalize_text(name, NAME_MAX_LENGTH)
    clean_text = normalize_text(text, TEXT_MAX_LENGTH)
    clean_rating = _coerce_rating(rating)

    if not clean_name:
        raise InvalidPayloadError(reason="name is empty")
    if not clean_text:
        raise InvalidPayloadError(reason="text is empty")
    if clean_rating is None or not MIN_RATING <= clean_rating <= MAX_RATING:
        raise InvalidPayloadError(reason=f"rating must be an integer {MIN_RATING}-{MAX_RATING}")

    return clean_name, clean_text, clean_rating


# =============================================================================
# Service
# =============================================================================

class ReviewService:
    """
    Service for review operations.

    Provides a clean interface between API routes and the review store.
    Each call is an independent load -> mutate -> save cycle.

    Usage:
        service = ReviewService(JsonFileReviewStore("reviews.db.json"), admin_key="s3cret")
        review = service.create("Ana", "Great service!", 5)
        service.delete_review(review.id, presented_key="s3cret")
    """

    def __init__(self, store: ReviewStore, admin_key: str):
        self.store = store
        self._admin_key = admin_key

    def create(self, name: Any, text: Any, rating: Any) -> Review:
        """
        Validate input and persist a new review.

        Returns:
            The created Review

        Raises:
            InvalidPayloadError: If input fails validation
            StorageFailureError: If the store can't be read or written
        """
        clean_name, clean_text, clean_rating = validate_create(name, text, rating)

        try:
            reviews = self.store.load()
            created_at = now_ms()
            review = Review(
                id=generate_review_id(created_at),
                name=clean_name,
                text=clean_text,
                rating=clean_rating,
                created_at=created_at,
            )
            self.store.save(self.store.insert(reviews, review))
        except StorageFailureError as e:
            raise e.for_operation("Failed to save review") from e

        logger.info(f"Created review {review.id} (rating={review.rating})")
        return review

    def list_recent(self) -> list[Review]:
        """
        Newest reviews first, capped at the store's capacity.

        Raises:
            StorageFailureError: If the store can't be read
        """
        try:
            reviews = self.store.load()
        except StorageFailureError as e:
            raise e.for_operation("Failed to load reviews") from e
        return self.store.list_reviews(reviews)

    def is_authorized(self, presented_key: str | None) -> bool:
        """Constant-time comparison against the configured admin secret."""
        if not presented_key:
            return False
        return hmac.compare_digest(
            presented_key.encode("utf-8"), self._admin_key.encode("utf-8")
        )

    def delete_review(self, review_id: str | None, presented_key: str | None) -> None:
        """
        Delete a review by id.

        Authorization is checked first so an unauthorized caller learns
        nothing about which ids exist.

        Raises:
            UnauthorizedError: If the admin key is missing or wrong
            InvalidIdError: If review_id is empty
            ReviewNotFoundError: If no review has this id
            StorageFailureError: If the store can't be read or written
        """
        if not self.is_authorized(presented_key):
            logger.warning("Rejected review delete with missing or invalid admin key")
            raise UnauthorizedError()

        if not review_id or not review_id.strip():
            raise InvalidIdError()

        try:
            reviews = self.store.load()
            remaining, found = self.store.delete_by_id(reviews, review_id)
            if not found:
                raise ReviewNotFoundError(review_id)
            self.store.save(remaining)
        except StorageFailureError as e:
            raise e.for_operation("Failed to delete review") from e

        logger.info(f"Deleted review {review_id}")
