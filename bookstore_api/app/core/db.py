"""
MongoDB integration.

This module owns the store handle for the application: ``connect``
creates a :class:`pymongo.MongoClient` and verifies the server is
reachable, ``open_database`` selects the configured database and
``get_collection`` is the FastAPI dependency that hands the
``bookstores`` collection to request handlers.

The client is created once at startup and attached to
``app.state``; it maintains its own connection pool which is shared
by every request.  Nothing here retries: a failed initial ping
propagates to the caller.
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from .config import settings

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "Book"
BOOKSTORE_COLLECTION = "bookstores"


def connect(url: Optional[str] = None, timeout_ms: Optional[int] = None) -> MongoClient:
    """Create a client for ``url`` and ping the server.

    Raises :class:`pymongo.errors.PyMongoError` (typically
    ``ServerSelectionTimeoutError``) when the server cannot be reached
    within ``timeout_ms``.
    """
    url = url or settings.mongodb_url
    timeout_ms = timeout_ms if timeout_ms is not None else settings.mongodb_timeout_ms
    client: MongoClient = MongoClient(url, serverSelectionTimeoutMS=timeout_ms)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB")
    return client


def open_database(client: MongoClient, name: Optional[str] = None) -> Database:
    """Return the database to use on ``client``.

    An explicit ``name`` (or ``settings.mongodb_db``) wins; otherwise
    the database named in the connection string is used, falling back
    to ``Book``.
    """
    name = name or settings.mongodb_db
    if name:
        return client[name]
    return client.get_default_database(default=DEFAULT_DATABASE)


def get_collection(request: Request) -> Collection:
    """FastAPI dependency returning the bookstore collection."""
    database: Database = request.app.state.database
    return database[BOOKSTORE_COLLECTION]
