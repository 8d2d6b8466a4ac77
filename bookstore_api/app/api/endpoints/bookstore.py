"""
Bookstore endpoints.

These routes expose CRUD operations over bookstore records.  They are
mounted under the configured base path (``/api/bookstore`` by
default).  Request bodies are taken as raw JSON and validated by
the service, so an update on an unknown record reports not‑found
before the body is checked.  Successful mutations answer with a short
confirmation string; failures raise ``BookstoreError`` subclasses which
the application renders as ``"Error: ..."`` strings.

Handlers are synchronous functions so FastAPI runs them in its thread
pool while the MongoDB driver blocks.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from pymongo.collection import Collection

from bookstore_api.app.core.db import get_collection
from bookstore_api.app.schemas.bookstore import BookstoreRead
from bookstore_api.app.services.bookstore_service import BookstoreNotFound, BookstoreService

router = APIRouter()


def get_bookstore_service(collection: Collection = Depends(get_collection)) -> BookstoreService:
    return BookstoreService(collection)


@router.get("/", response_model=List[BookstoreRead], response_model_exclude_none=True)
def list_bookstores(service: BookstoreService = Depends(get_bookstore_service)) -> List[BookstoreRead]:
    """Return all bookstore records without filtering or pagination."""
    return service.list_bookstores()


@router.get("/{bookstore_id}", response_model=Optional[BookstoreRead], response_model_exclude_none=True)
def get_bookstore(
    bookstore_id: str,
    service: BookstoreService = Depends(get_bookstore_service),
) -> Optional[BookstoreRead]:
    """Retrieve a single record by ID.

    An unknown but well‑formed ID yields ``null`` with status 200 rather
    than a 404; update and delete do report 404.
    """
    return service.get_bookstore(bookstore_id)


@router.post("/add", response_model=str)
def add_bookstore(
    payload: Any = Body(None),
    service: BookstoreService = Depends(get_bookstore_service),
) -> str:
    """Create a new record from ``Author``, ``Title`` and ``Pages``."""
    service.create_bookstore(payload)
    return "Bookstore added!"


@router.put("/update/{bookstore_id}", response_model=str)
def update_bookstore(
    bookstore_id: str,
    payload: Any = Body(None),
    service: BookstoreService = Depends(get_bookstore_service),
) -> str:
    """Overwrite all fields of a record; omitted fields are removed."""
    if not service.update_bookstore(bookstore_id, payload):
        raise BookstoreNotFound()
    return "Bookstore updated!"


@router.delete("/delete/{bookstore_id}", response_model=str)
def delete_bookstore(
    bookstore_id: str,
    service: BookstoreService = Depends(get_bookstore_service),
) -> str:
    if not service.delete_bookstore(bookstore_id):
        raise BookstoreNotFound()
    return "Bookstore deleted."
