# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - reviews.py: Review list / create / delete endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import reviews

__all__ = [
    "health",
    "reviews",
]
