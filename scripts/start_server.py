#!/usr/bin/env python3
# =============================================================================
# scripts/start_server.py - API Server Entry Point
# =============================================================================
# Starts the Review Board API with uvicorn on the configured host/port.
#
# Usage:
#   python scripts/start_server.py
#
#   # Override port / admin key
#   PORT=8080 ADMIN_DELETE_KEY=s3cret python scripts/start_server.py
# =============================================================================

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from app.config import settings


def main():
    """Start the API server."""
    print("=" * 60)
    print("Review Board API")
    print("=" * 60)
    print()
    print(f"Listening on http://localhost:{settings.PORT}")
    print("Press Ctrl+C to stop")
    print()

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
