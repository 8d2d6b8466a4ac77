"""
Health check endpoint.

Used by containers and orchestrators to determine whether the API
process is up and able to serve requests.  It does not contact the
document store.
"""

from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "service": "bookstore"}
