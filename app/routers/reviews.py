# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# Handles listing, creating and deleting reviews.
# Listing and creating are public; deleting requires the x-admin-key header.
#
# Handlers are async and call the synchronous service directly, so within
# one worker a request's load -> mutate -> save never interleaves with
# another request's.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Header, Path, status

from app.dependencies import ReviewServiceDep
from core.models.review import DeleteResponse, Review, ReviewCreateRequest

router = APIRouter()

AdminKeyHeader = Annotated[
    str | None,
    Header(alias="x-admin-key", description="Shared admin secret"),
]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Review])
async def list_reviews(service: ReviewServiceDep):
    """
    List the most recent reviews.

    Returns at most 200 reviews, newest first.
    """
    return service.list_recent()


@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED)
async def create_review(request: ReviewCreateRequest, service: ReviewServiceDep):
    """
    Submit a review.

    Name and text are trimmed and whitespace-collapsed (max 60 and 500
    characters); rating must be an integer from 1 to 5.
    """
    return service.create(request.name, request.text, request.rating)


@router.delete("/", response_model=DeleteResponse, include_in_schema=False)
async def delete_review_without_id(
    service: ReviewServiceDep,
    x_admin_key: AdminKeyHeader = None,
):
    """DELETE with an empty id segment: still authorized first, then rejected."""
    service.delete_review("", presented_key=x_admin_key)
    return DeleteResponse()


@router.delete("/{review_id}", response_model=DeleteResponse)
async def delete_review(
    review_id: Annotated[str, Path(description="Review id")],
    service: ReviewServiceDep,
    x_admin_key: AdminKeyHeader = None,
):
    """
    Delete a review by id.

    Requires the x-admin-key header to match the configured admin secret.
    """
    service.delete_review(review_id, presented_key=x_admin_key)
    return DeleteResponse()
