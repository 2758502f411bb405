# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# Tests replace get_review_store via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services import JsonFileReviewStore, ReviewService, ReviewStore


def get_review_store() -> ReviewStore:
    """
    Get the configured review store.

    The store holds no state between requests, so a fresh instance per
    request is cheap and always reflects the file on disk.
    """
    return JsonFileReviewStore(settings.REVIEWS_DB_FILE)


def get_review_service(
    store: Annotated[ReviewStore, Depends(get_review_store)],
) -> ReviewService:
    """Get a ReviewService bound to the store and the configured admin key."""
    return ReviewService(store, admin_key=settings.ADMIN_DELETE_KEY)


# Type aliases for dependency injection
ReviewStoreDep = Annotated[ReviewStore, Depends(get_review_store)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
