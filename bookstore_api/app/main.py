"""
Main entrypoint for the Bookstore API.

This module assembles the FastAPI application, sets up logging, CORS
and error rendering, and includes the routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn bookstore_api.app.main:app

or through ``run.py``, which connects to MongoDB before binding the
listener.

When no database handle is supplied, the application connects to
MongoDB during startup; a failed connection aborts startup so the
listener never serves requests.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .api.endpoints.bookstore import list_bookstores
from .api.router import root_router, router as bookstore_router
from .core.config import settings
from .core.db import connect, open_database
from .core.logging_config import setup_logging
from .schemas.bookstore import BookstoreRead
from .services.bookstore_service import BookstoreError, describe_errors

logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    client: Optional[MongoClient] = None,
    base_path: Optional[str] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Database]
        Store handle to serve requests from.  If omitted, a client is
        created from ``settings`` at startup.
    client : Optional[MongoClient]
        Client owning ``database``; closed on shutdown.
    base_path : Optional[str]
        Prefix for the bookstore routes.  Defaults to
        ``settings.base_path``.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "database", None) is None:
            try:
                app.state.client = connect()
            except PyMongoError as exc:
                logger.error("Error connecting to MongoDB: %s", exc)
                raise
            app.state.database = open_database(app.state.client)
        try:
            yield
        finally:
            owned: Optional[MongoClient] = getattr(app.state, "client", None)
            if owned is not None:
                owned.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.database = database
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=f"Error: {exc}")

    # Malformed bodies are reported like every other client error
    # instead of FastAPI's default 422 payload.
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_errors(exc.errors())
        logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content=f"Error: {message}")

    prefix = (base_path or settings.base_path).rstrip("/")
    app.include_router(bookstore_router, prefix=prefix)
    if prefix:
        # Serve the list at the bare base path too, without a slash redirect.
        app.add_api_route(
            prefix,
            list_bookstores,
            methods=["GET"],
            response_model=List[BookstoreRead],
            response_model_exclude_none=True,
            include_in_schema=False,
        )
    app.include_router(root_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
