"""
Logging configuration for the service and its uvicorn server.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it runs, then applies the
configured level to the service's own loggers and to uvicorn's.  The
uvicorn loggers are stripped of their own handlers and left to
propagate, so server, access and application records share one format
and one destination.  ``run.py`` starts uvicorn with
``log_config=None`` so uvicorn does not install its own setup over
this one.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose level follows ``LOG_LEVEL`` even when the root logger
# was configured by someone else (uvicorn, pytest).
SERVICE_LOGGERS = ("bookstore_api", "uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure root, service and uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to, in addition to the console.
        Only honoured the first time the root logger is configured.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        root.setLevel(numeric_level)
        for handler in _build_handlers(logfile):
            root.addHandler(handler)

    for name in SERVICE_LOGGERS:
        service_logger = logging.getLogger(name)
        service_logger.setLevel(numeric_level)
        if name.startswith("uvicorn"):
            service_logger.handlers.clear()
            service_logger.propagate = True
