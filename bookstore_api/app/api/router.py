"""
Top‑level routers.

``router`` carries the bookstore endpoints and is mounted by the
application under the configured base path.  ``root_router`` carries
routes that live outside the base path, such as the health check.
"""

from fastapi import APIRouter

from .endpoints import bookstore, health

router = APIRouter()
router.include_router(bookstore.router, tags=["bookstore"])

root_router = APIRouter()
root_router.include_router(health.router, tags=["health"])
