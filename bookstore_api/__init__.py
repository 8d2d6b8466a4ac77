"""
Top‑level package for the Bookstore API.

All functionality lives in submodules under ``app``; the application
object is importable as ``bookstore_api.app.main:app``.
"""

__all__ = []
