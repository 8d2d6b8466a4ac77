"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can be started locally against a MongoDB server on
``localhost`` without any configuration.  In a deployment the
connection string, port and base path should be overridden via
environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Bookstore API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Connection string for the document store.  The database name is
    # taken from the path component of the URL unless ``MONGODB_DB`` is
    # set explicitly.
    mongodb_url: str = os.getenv("MONGODB_URL", "mongodb://localhost:27017/Book")
    mongodb_db: str = os.getenv("MONGODB_DB", "")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # Prefix under which all bookstore routes are mounted.
    base_path: str = os.getenv("BASE_PATH", "/api/bookstore")

    # Comma‑separated list of allowed origins; ``*`` allows any origin.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
