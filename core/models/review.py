# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================
# These models define the API contract and the persisted record shape:
# - Review: one stored review (also the create/list response body)
# - ReviewCreateRequest: raw POST body, validated by ReviewService
# - ReviewDocument: the whole persisted file {"reviews": [...]}
# - DeleteResponse: body returned after a successful delete
#
# Field names on the wire are camelCase (createdAt) to stay compatible with
# files written by earlier versions of the service.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Field length caps applied by normalize_text
NAME_MAX_LENGTH = 60
TEXT_MAX_LENGTH = 500

MIN_RATING = 1
MAX_RATING = 5


class Review(BaseModel):
    """
    A single user-submitted rating plus comment.

    Reviews are immutable once created; the id is the only delete key and
    created_at (milliseconds since epoch) the only sort key.

    Example:
        {
            "id": "1718000000000-k3j9x2",
            "name": "Ana B",
            "text": "Great service!",
            "rating": 5,
            "createdAt": 1718000000000
        }
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique review identifier (timestamp plus random suffix)"
    )

    name: str = Field(
        ...,
        max_length=NAME_MAX_LENGTH,
        description="Reviewer name, whitespace-normalized"
    )

    text: str = Field(
        ...,
        max_length=TEXT_MAX_LENGTH,
        description="Review comment, whitespace-normalized"
    )

    rating: int = Field(
        ...,
        ge=MIN_RATING,
        le=MAX_RATING,
        description="Star rating from 1 to 5"
    )

    # None only for legacy records stored without a timestamp
    created_at: int | None = Field(
        ...,
        alias="createdAt",
        description="Creation time in milliseconds since epoch"
    )

    @property
    def sort_key(self) -> int:
        return self.created_at if self.created_at is not None else 0

    def to_record(self) -> dict[str, Any]:
        """Serialize for the persisted document (camelCase keys)."""
        record = self.model_dump(by_alias=True)
        if record["createdAt"] is None:
            # Legacy record without a timestamp: keep it absent on disk
            del record["createdAt"]
        return record


class ReviewCreateRequest(BaseModel):
    """
    Body of POST /api/reviews.

    Fields are intentionally untyped: a string rating or a missing name is
    a business-rule failure reported as INVALID_PAYLOAD by ReviewService,
    not a schema error.
    """

    name: Any = Field(default=None, examples=["Ana B"])
    text: Any = Field(default=None, examples=["Great service!"])
    rating: Any = Field(default=None, examples=[5])

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Ana B", "text": "Great service!", "rating": 5},
            ]
        }
    }


class ReviewDocument(BaseModel):
    """The persisted file layout: one field holding the ordered reviews."""

    reviews: list[Review] = Field(default_factory=list)

    def to_record(self) -> dict[str, Any]:
        return {"reviews": [review.to_record() for review in self.reviews]}


class DeleteResponse(BaseModel):
    """Response after a successful delete."""
    ok: bool = True
