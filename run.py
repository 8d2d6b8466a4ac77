"""Entry point for the Bookstore API server.

Connects to MongoDB first and only starts the HTTP listener once the
server has answered a ping.  A failed connection is logged and the
process exits with status 1; there is no retry.

Configuration (``MONGODB_URL``, ``PORT``, ``LOG_LEVEL``, ``BASE_PATH``
and friends) is read from environment variables, see
``bookstore_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from fastapi import FastAPI
from pymongo.errors import PyMongoError
from uvicorn import Config, Server

from bookstore_api.app.core.config import settings
from bookstore_api.app.core.db import connect, open_database
from bookstore_api.app.core.logging_config import setup_logging
from bookstore_api.app.main import create_app

logger = logging.getLogger("bookstore_api.run")


async def serve(app: FastAPI) -> None:
    """Serve ``app`` with Uvicorn using the configured host, port and log level."""
    # log_config=None keeps the handlers installed by setup_logging.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    logger.info("Bookstore API Server is running on port %s", settings.port)
    await server.serve()


def main() -> int:
    setup_logging(settings.log_level, settings.log_file or None)
    try:
        client = connect()
    except PyMongoError as exc:
        logger.error("Error connecting to MongoDB: %s", exc)
        return 1

    app = create_app(database=open_database(client), client=client)
    try:
        asyncio.run(serve(app))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
