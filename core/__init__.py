# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the review logic behind the API:
# - models/: Pydantic schemas for reviews and the stored document
# - services/: Review store backends and the validating ReviewService
#
# Code in this package only touches FastAPI through app.exceptions,
# which keeps it testable without a running server.
# =============================================================================
