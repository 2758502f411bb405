# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Review Board API:
# - test_models.py: Review model validation and serialization
# - test_review_store.py: Store backends, capacity, ordering, atomic save
# - test_review_service.py: Input normalization and business rules
# - test_api.py: HTTP endpoints through FastAPI's TestClient
# - test_config.py: Settings parsing and the production key guard
#
# Run tests with: pytest
# =============================================================================
