# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides stores backed by a temp directory and an API client bound to them
# =============================================================================

import os
import sys
import tempfile

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

ADMIN_KEY = "test-admin-key"

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("ADMIN_DELETE_KEY", ADMIN_KEY)
os.environ.setdefault(
    "REVIEWS_DB_FILE",
    os.path.join(tempfile.gettempdir(), "review-board-tests", "reviews.db.json"),
)

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_review_store
from app.main import app
from core.services import JsonFileReviewStore, ReviewService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def admin_key():
    """The admin secret the app was configured with."""
    return os.environ["ADMIN_DELETE_KEY"]


@pytest.fixture
def store_path(tmp_path):
    """Path of a review file that doesn't exist yet."""
    return tmp_path / "reviews.db.json"


@pytest.fixture
def file_store(store_path):
    """JSON file store in a temp directory."""
    return JsonFileReviewStore(store_path)


@pytest.fixture
def service(file_store, admin_key):
    """ReviewService over the temp file store."""
    return ReviewService(file_store, admin_key=admin_key)


@pytest.fixture
def client(file_store):
    """API client whose review store is the temp file store."""
    app.dependency_overrides[get_review_store] = lambda: file_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_review_payload():
    """Valid POST /api/reviews body."""
    return {"name": "  Ana   B ", "text": "Great service!", "rating": 5}


@pytest.fixture
def legacy_records():
    """Stored records written before ids existed."""
    return [
        {"name": "Old Timer", "text": "Been here forever", "rating": 4, "createdAt": 1600000000000},
        {"name": "Older", "text": "Even longer", "rating": 3, "createdAt": 1500000000000},
    ]
