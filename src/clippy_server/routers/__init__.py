"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, conversations).
"""

from clippy_server.routers import conversations, health

__all__ = [
    "conversations",
    "health",
]
