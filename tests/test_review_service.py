# =============================================================================
# tests/test_review_service.py - Review Service Tests
# =============================================================================
# Tests for:
# - normalize_text edge cases
# - validate_create rating and emptiness rules
# - ReviewService create / list_recent / delete_review
# - Storage failures surfacing as StorageFailureError
# =============================================================================

import json
from unittest.mock import MagicMock

import pytest

from app.exceptions import (
    InvalidIdError,
    InvalidPayloadError,
    ReviewNotFoundError,
    StorageFailureError,
    UnauthorizedError,
)
from core.services import (
    MAX_REVIEWS,
    InMemoryReviewStore,
    ReviewService,
    normalize_text,
    validate_create,
)
from lib.utils import now_ms

ADMIN = "unit-admin-key"


@pytest.fixture
def memory_service():
    return ReviewService(InMemoryReviewStore(), admin_key=ADMIN)


# =============================================================================
# normalize_text Tests
# =============================================================================

class TestNormalizeText:

    def test_trims_and_collapses(self):
        assert normalize_text("  Ana   B ", 60) == "Ana B"

    def test_collapses_tabs_and_newlines(self):
        assert normalize_text("line one\n\n\tline two", 500) == "line one line two"

    def test_truncates_after_normalizing(self):
        assert normalize_text("  abc   def  ", 5) == "abc d"

    @pytest.mark.parametrize("raw", [None, 42, 3.5, ["a"], {"a": 1}, True])
    def test_non_string_becomes_empty(self, raw):
        assert normalize_text(raw, 60) == ""

    def test_whitespace_only_becomes_empty(self):
        assert normalize_text(" \t\n ", 60) == ""


# =============================================================================
# validate_create Tests
# =============================================================================

class TestValidateCreate:

    @pytest.mark.parametrize("rating", [1, 5])
    def test_boundary_ratings_accepted(self, rating):
        assert validate_create("Ana", "Nice", rating) == ("Ana", "Nice", rating)

    @pytest.mark.parametrize("rating", [0, 6, 1.5, "3", None, True, -1, [3]])
    def test_invalid_ratings_rejected(self, rating):
        with pytest.raises(InvalidPayloadError):
            validate_create("Ana", "Nice", rating)

    def test_integral_float_rating_accepted(self):
        assert validate_create("Ana", "Nice", 4.0) == ("Ana", "Nice", 4)

    @pytest.mark.parametrize("name, text", [
        ("", "Nice"),
        ("   ", "Nice"),
        (None, "Nice"),
        ("Ana", ""),
        ("Ana", "\n\t"),
        ("Ana", 123),
    ])
    def test_empty_name_or_text_rejected(self, name, text):
        with pytest.raises(InvalidPayloadError) as exc_info:
            validate_create(name, text, 3)

        assert exc_info.value.status_code == 400

    def test_caps_lengths(self):
        name, text, _ = validate_create("n" * 100, "t" * 1000, 3)

        assert len(name) == 60
        assert len(text) == 500


# =============================================================================
# Create / List Tests
# =============================================================================

class TestCreateAndList:

    def test_create_returns_normalized_review(self, memory_service):
        before = now_ms()

        review = memory_service.create("  Ana   B ", "Great service!", 5)

        assert review.name == "Ana B"
        assert review.text == "Great service!"
        assert review.rating == 5
        assert review.id
        assert before <= review.created_at <= now_ms()
        assert review.id.startswith(f"{review.created_at}-")

    def test_created_review_is_listed_first(self, memory_service):
        memory_service.create("First", "one", 3)
        second = memory_service.create("Second", "two", 4)

        listed = memory_service.list_recent()

        assert listed[0].id == second.id
        assert len(listed) == 2

    def test_create_persists_through_file_store(self, service, file_store):
        review = service.create("Ana", "Persisted", 4)

        assert [r.id for r in file_store.load()] == [review.id]

    def test_list_is_non_increasing(self, memory_service):
        for i in range(20):
            memory_service.create(f"User {i}", "text", (i % 5) + 1)

        created = [review.created_at for review in memory_service.list_recent()]

        assert created == sorted(created, reverse=True)

    def test_capacity_keeps_newest(self, memory_service):
        created = [
            memory_service.create(f"User {i}", f"text {i}", 3)
            for i in range(MAX_REVIEWS + 5)
        ]

        listed = memory_service.list_recent()

        assert len(listed) == MAX_REVIEWS
        assert len(memory_service.store.records) == MAX_REVIEWS
        assert {r.id for r in listed} == {r.id for r in created[5:]}

    def test_ids_are_unique(self, memory_service):
        ids = {memory_service.create("A", "B", 3).id for _ in range(50)}
        assert len(ids) == 50

    def test_invalid_create_does_not_touch_store(self):
        store = MagicMock(spec=InMemoryReviewStore)
        service = ReviewService(store, admin_key=ADMIN)

        with pytest.raises(InvalidPayloadError):
            service.create("", "text", 3)

        store.load.assert_not_called()
        store.save.assert_not_called()

    def test_backfill_is_persisted_by_next_write(self, legacy_records):
        store = InMemoryReviewStore(legacy_records)
        service = ReviewService(store, admin_key=ADMIN)

        service.create("New", "entry", 5)

        assert all(record.get("id") for record in store.records)

    def test_create_keeps_legacy_record_with_overlong_name(self, service, store_path):
        store_path.write_text(json.dumps({"reviews": [
            {"id": "old", "name": "N" * 61, "text": "legacy", "rating": 4, "createdAt": 1},
        ]}), encoding="utf-8")

        service.create("Ana", "hi", 5)

        ids = [review.id for review in service.list_recent()]
        assert "old" in ids
        old = json.loads(store_path.read_text(encoding="utf-8"))["reviews"][1]
        assert old["id"] == "old"
        assert len(old["name"]) == 60

    def test_delete_keeps_unreadable_legacy_records(self, legacy_records):
        store = InMemoryReviewStore([*legacy_records, {"id": "broken", "rating": 0}])
        service = ReviewService(store, admin_key=ADMIN)

        service.delete_review(service.list_recent()[0].id, presented_key=ADMIN)

        assert {"id": "broken", "rating": 0} in store.records


# =============================================================================
# Delete Tests
# =============================================================================

class TestDelete:

    def test_delete_existing(self, memory_service):
        review = memory_service.create("Ana", "bye", 2)

        memory_service.delete_review(review.id, presented_key=ADMIN)

        assert memory_service.list_recent() == []

    @pytest.mark.parametrize("key", [None, "", "wrong", ADMIN + " ", ADMIN.upper()])
    def test_bad_key_is_unauthorized(self, memory_service, key):
        review = memory_service.create("Ana", "stay", 2)

        with pytest.raises(UnauthorizedError):
            memory_service.delete_review(review.id, presented_key=key)

        assert len(memory_service.list_recent()) == 1

    def test_auth_checked_before_id(self, memory_service):
        with pytest.raises(UnauthorizedError):
            memory_service.delete_review("", presented_key="wrong")

    @pytest.mark.parametrize("review_id", ["", "   ", None])
    def test_empty_id_is_invalid(self, memory_service, review_id):
        with pytest.raises(InvalidIdError):
            memory_service.delete_review(review_id, presented_key=ADMIN)

    def test_delete_miss_twice(self, memory_service):
        memory_service.create("Ana", "stay", 2)

        for _ in range(2):
            with pytest.raises(ReviewNotFoundError) as exc_info:
                memory_service.delete_review("missing-id", presented_key=ADMIN)
            assert exc_info.value.status_code == 404

        assert len(memory_service.list_recent()) == 1

    def test_delete_legacy_review_by_listed_id(self, legacy_records):
        service = ReviewService(InMemoryReviewStore(legacy_records), admin_key=ADMIN)
        listed_id = service.list_recent()[0].id

        service.delete_review(listed_id, presented_key=ADMIN)

        assert listed_id not in [r.id for r in service.list_recent()]
        assert len(service.list_recent()) == 1


# =============================================================================
# Storage Failure Tests
# =============================================================================

class TestStorageFailures:

    @pytest.fixture
    def broken_service(self):
        store = MagicMock(spec=InMemoryReviewStore)
        store.load.side_effect = StorageFailureError("disk on fire")
        return ReviewService(store, admin_key=ADMIN)

    def test_list_failure_message(self, broken_service):
        with pytest.raises(StorageFailureError) as exc_info:
            broken_service.list_recent()

        assert exc_info.value.message == "Failed to load reviews"
        assert exc_info.value.details == {"error": "disk on fire"}

    def test_create_failure_message(self, broken_service):
        with pytest.raises(StorageFailureError) as exc_info:
            broken_service.create("Ana", "text", 3)

        assert exc_info.value.message == "Failed to save review"

    def test_delete_failure_message(self, broken_service):
        with pytest.raises(StorageFailureError) as exc_info:
            broken_service.delete_review("some-id", presented_key=ADMIN)

        assert exc_info.value.message == "Failed to delete review"
