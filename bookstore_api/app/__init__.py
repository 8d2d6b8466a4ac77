"""
Application package initializer.

The package is split into ``core`` (configuration, logging, store
handle), ``schemas``, ``services`` and ``api`` (routers).  ``main``
assembles them into the FastAPI application.
"""

from .main import app  # noqa: F401
