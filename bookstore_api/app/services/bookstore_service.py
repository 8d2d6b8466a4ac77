"""
Service layer for bookstore records.

Each operation issues a single MongoDB call against the
``bookstores`` collection (update issues a lookup followed by a
replace) and converts the result into schema objects.  There is no
caching, pagination or concurrency control: concurrent updates and
deletes on the same record are applied in whatever order the store
receives them.

Failures are reported through the ``BookstoreError`` hierarchy so the
API layer can render them uniformly.  Validation failures and store
failures are deliberately indistinguishable by status code; only the
message text differs.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from bookstore_api.app.schemas.bookstore import BookstoreRead, BookstoreWrite


class BookstoreError(Exception):
    """Base class for failures reported to API clients."""

    status_code = 400


class BookstoreNotFound(BookstoreError):
    """Raised by the API layer when an update or delete matches nothing."""

    status_code = 404

    def __init__(self, message: str = "Bookstore not found"):
        super().__init__(message)


class BookstoreValidationError(BookstoreError):
    """Raised when a record is missing required fields."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        reasons = ", ".join(f"{name}: Path `{name}` is required." for name in missing)
        super().__init__(f"Bookstore validation failed: {reasons}")


class InvalidBookstoreId(BookstoreError):
    """Raised when an identifier is not a valid ObjectId."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f'Cast to ObjectId failed for value "{value}" (type string) at path "_id"')


class BookstoreStoreError(BookstoreError):
    """Raised when the document store rejects or fails a call."""


class BookstoreBodyError(BookstoreError):
    """Raised when a request body does not have the record shape."""

    def __init__(self, errors: Iterable[Mapping[str, Any]]):
        super().__init__(describe_errors(errors))


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Render pydantic-style error entries as one line."""
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Request validation failed: " + "; ".join(parts)


def parse_bookstore_body(payload: Any) -> BookstoreWrite:
    """Validate a decoded JSON body into a ``BookstoreWrite``.

    A missing body is treated as an empty object.
    """
    if payload is None:
        return BookstoreWrite()
    try:
        return BookstoreWrite.model_validate(payload)
    except ValidationError as exc:
        raise BookstoreBodyError(exc.errors()) from None


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidBookstoreId(value) from None


class BookstoreService:
    """CRUD operations over one bookstore collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def list_bookstores(self) -> List[BookstoreRead]:
        """Return every stored record, in natural store order."""
        try:
            documents = list(self.collection.find())
        except PyMongoError as exc:
            raise BookstoreStoreError(str(exc)) from exc
        return [BookstoreRead.from_document(doc) for doc in documents]

    def get_bookstore(self, bookstore_id: str) -> Optional[BookstoreRead]:
        """Retrieve a single record, or ``None`` if it does not exist."""
        oid = parse_object_id(bookstore_id)
        try:
            document = self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise BookstoreStoreError(str(exc)) from exc
        if document is None:
            return None
        return BookstoreRead.from_document(document)

    def create_bookstore(self, payload: Any) -> str:
        """Insert a new record and return its identifier.

        ``payload`` is the decoded request body (or a ``BookstoreWrite``).
        ``Author``, ``Title`` and ``Pages`` must all be present; an
        empty string counts as present.  Values are stored verbatim.
        """
        logger = logging.getLogger(__name__)
        data = parse_bookstore_body(payload)
        missing = data.missing_fields()
        if missing:
            raise BookstoreValidationError(missing)
        try:
            result = self.collection.insert_one(data.to_document())
        except PyMongoError as exc:
            raise BookstoreStoreError(str(exc)) from exc
        bookstore_id = str(result.inserted_id)
        logger.info("Created bookstore %s", bookstore_id)
        return bookstore_id

    def update_bookstore(self, bookstore_id: str, payload: Any) -> bool:
        """Overwrite all three fields of an existing record.

        The record is looked up before ``payload`` is validated, so an
        unknown identifier returns ``False`` whatever the body holds.
        Fields absent from the body are removed from the stored
        document rather than left unchanged.
        """
        logger = logging.getLogger(__name__)
        oid = parse_object_id(bookstore_id)
        try:
            current = self.collection.find_one({"_id": oid})
            if current is None:
                return False
            data = parse_bookstore_body(payload)
            self.collection.replace_one({"_id": oid}, data.to_document())
        except PyMongoError as exc:
            raise BookstoreStoreError(str(exc)) from exc
        logger.info("Updated bookstore %s", bookstore_id)
        return True

    def delete_bookstore(self, bookstore_id: str) -> bool:
        """Remove a record.  Returns ``False`` if nothing matched."""
        logger = logging.getLogger(__name__)
        oid = parse_object_id(bookstore_id)
        try:
            deleted = self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as exc:
            raise BookstoreStoreError(str(exc)) from exc
        if deleted is None:
            return False
        logger.info("Deleted bookstore %s", bookstore_id)
        return True
