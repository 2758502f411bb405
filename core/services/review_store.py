# =============================================================================
# core/services/review_store.py - Review Persistence
# =============================================================================
# Owns the stored representation of the review collection:
# - ReviewStore: abstract load/save plus the pure collection operations
#   (list_reviews, insert, delete_by_id) shared by every backend
# - JsonFileReviewStore: one JSON document on disk, replaced atomically
# - InMemoryReviewStore: same contract without a file
#
# Every mutation rewrites the whole collection. There is no append log and
# no cross-process lock; concurrent writers can lose updates. Stored records
# that can't be read as a Review are carried through every save unchanged.
# =============================================================================

import copy
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.exceptions import StorageFailureError
from core.models.review import NAME_MAX_LENGTH, TEXT_MAX_LENGTH, Review, ReviewDocument
from lib.utils import derive_legacy_id, normalize_text

logger = logging.getLogger(__name__)

# Capacity of the store; older reviews are dropped on insert
MAX_REVIEWS = 200

TEMP_SUFFIX = ".tmp"


# =============================================================================
# Record Upgrade (migration on read)
# =============================================================================

class _Unreadable(Exception):
    """A stored record that can't be turned into a Review."""


def _coerce_created_at(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise _Unreadable("createdAt is not a number")
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (ValueError, OverflowError) as e:
        # "abc", NaN, Infinity
        raise _Unreadable(f"createdAt {value!r} is not a number") from e


def _repair_text(value: Any, max_len: int) -> Any:
    # Anything other than an over-long string is left for validation
    if isinstance(value, str) and len(value) > max_len:
        return normalize_text(value, max_len)
    return value


def _upgrade_record(raw: Any, seen_ids: set[str]) -> tuple[Review, bool]:
    """Returns (review, id_was_backfilled). Raises _Unreadable."""
    if not isinstance(raw, dict):
        raise _Unreadable("not an object")

    record = dict(raw)
    record["createdAt"] = _coerce_created_at(record.get("createdAt"))
    for key, max_len in (("name", NAME_MAX_LENGTH), ("text", TEXT_MAX_LENGTH)):
        if key in record:
            record[key] = _repair_text(record[key], max_len)

    backfilled = False
    review_id = record.get("id")
    if not review_id:
        base_id = derive_legacy_id(record)
        review_id = base_id
        counter = 2
        while review_id in seen_ids:
            review_id = f"{base_id}-{counter}"
            counter += 1
        backfilled = True
    elif not isinstance(review_id, str):
        review_id = str(review_id)
    record["id"] = review_id

    try:
        return Review.model_validate(record), backfilled
    except ValidationError as e:
        raise _Unreadable(f"{e.error_count()} invalid field(s)") from e


def upgrade_records(raw_reviews: list[Any]) -> tuple[list[Review], list[Any]]:
    """
    Turn stored records into Review models, repairing older shapes.

    - a missing id is backfilled with derive_legacy_id(); duplicates
      within one load get a "-<n>" counter. A non-string id is stringified
    - a numeric createdAt is coerced to an int; a missing one stays missing
    - an over-long name or text is normalized down to its cap

    Returns:
        (reviews, unreadable): unreadable holds the raw records that still
        don't make a valid Review, untouched, so a save can write them back

    The repair only exists in memory; it is persisted by the next save.
    """
    reviews: list[Review] = []
    unreadable: list[Any] = []
    seen_ids: set[str] = set()
    backfilled = 0

    for index, raw in enumerate(raw_reviews):
        try:
            review, was_backfilled = _upgrade_record(raw, seen_ids)
        except _Unreadable as e:
            logger.warning(f"Stored review #{index} is unreadable ({e}); keeping it as-is")
            unreadable.append(raw)
            continue

        backfilled += was_backfilled
        seen_ids.add(review.id)
        reviews.append(review)

    if backfilled:
        logger.info(f"Backfilled ids for {backfilled} legacy review(s) (not persisted until next write)")

    return reviews, unreadable


# =============================================================================
# Store Interface
# =============================================================================

class ReviewStore(ABC):
    """
    Persistence abstraction over the review collection.

    Backends implement load() and save(); the collection operations are
    pure functions over lists and shared by all backends.
    """

    max_reviews: int = MAX_REVIEWS

    def __init__(self):
        # Raw records from the last load that are not valid reviews
        self._unreadable: list[Any] = []

    def _carry_unreadable(self, records: list[dict[str, Any]]) -> list[Any]:
        """Append the unreadable records of the last load, unchanged."""
        return [*records, *copy.deepcopy(self._unreadable)]

    @abstractmethod
    def load(self) -> list[Review]:
        """
        Load the full collection.

        Raises:
            StorageFailureError: If the backing medium can't be read
        """

    @abstractmethod
    def save(self, reviews: list[Review]) -> None:
        """
        Replace the full collection.

        Raises:
            StorageFailureError: If the backing medium can't be written
        """

    def list_reviews(self, reviews: list[Review]) -> list[Review]:
        """Newest first by created_at, capped at max_reviews."""
        ordered = sorted(reviews, key=lambda review: review.sort_key, reverse=True)
        return ordered[: self.max_reviews]

    def insert(self, reviews: list[Review], review: Review) -> list[Review]:
        """Prepend a review and drop whatever overflows the cap."""
        updated = [review, *reviews]
        dropped = len(updated) - self.max_reviews
        if dropped > 0:
            logger.debug(f"Store at capacity, dropping {dropped} oldest review(s)")
        return updated[: self.max_reviews]

    def delete_by_id(self, reviews: list[Review], review_id: str) -> tuple[list[Review], bool]:
        """Remove the review with this id. Returns (remaining, found)."""
        remaining = [review for review in reviews if review.id != review_id]
        return remaining, len(remaining) != len(reviews)

    def check(self) -> bool:
        """Readiness check: True if the collection can be loaded."""
        try:
            self.load()
            return True
        except StorageFailureError:
            return False


# =============================================================================
# JSON File Backend
# =============================================================================

class JsonFileReviewStore(ReviewStore):
    """
    Reviews stored as {"reviews": [...]} in a single JSON file.

    save() writes <path>.tmp, fsyncs it, then os.replace()s it over the
    primary path, so readers see either the old or the new document and
    never a partial one. Nothing ever reads the temp file.

    Usage:
        store = JsonFileReviewStore("reviews.db.json")
        reviews = store.load()
        store.save(store.insert(reviews, review))
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.temp_path = self.path.with_name(self.path.name + TEMP_SUFFIX)

    def ensure_file(self) -> None:
        """Create the backing file with an empty document if it's missing."""
        if self.path.exists():
            return
        logger.info(f"Creating review store at {self.path}")
        self.save([])

    def load(self) -> list[Review]:
        try:
            self.ensure_file()
            content = self.path.read_text(encoding="utf-8")
            data = json.loads(content) if content.strip() else {"reviews": []}
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.error(f"Failed to read review store {self.path}: {e}")
            raise StorageFailureError(str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("reviews"), list):
            logger.warning(f"Review store {self.path} has unexpected shape, treating as empty")
            self._unreadable = []
            return []

        reviews, self._unreadable = upgrade_records(data["reviews"])
        return reviews

    def save(self, reviews: list[Review]) -> None:
        document = ReviewDocument(reviews=reviews).to_record()
        document["reviews"] = self._carry_unreadable(document["reviews"])
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.temp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(self.temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write review store {self.path}: {e}")
            raise StorageFailureError(str(e)) from e

        logger.debug(f"Saved {len(reviews)} review(s) to {self.path}")


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryReviewStore(ReviewStore):
    """
    Same contract as JsonFileReviewStore, held in process memory.

    Accepts raw records so tests can seed legacy shapes; they go through
    the same upgrade step as records read from disk.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None):
        super().__init__()
        self._records: list[dict[str, Any]] = copy.deepcopy(records or [])

    def load(self) -> list[Review]:
        reviews, self._unreadable = upgrade_records(copy.deepcopy(self._records))
        return reviews

    def save(self, reviews: list[Review]) -> None:
        self._records = self._carry_unreadable([review.to_record() for review in reviews])

    @property
    def records(self) -> list[dict[str, Any]]:
        """Snapshot of what a file backend would have persisted."""
        return copy.deepcopy(self._records)
