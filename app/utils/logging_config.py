"""
Root logger configuration.

Called once from ``app.main`` at import time.  Every other module only does
``logger = logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send all records to stdout with a timestamped format.

    Existing root handlers are removed first so the uvicorn reloader does not
    duplicate every line.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).  Unknown
            names fall back to INFO.
    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # SQL echo is far too noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configurado - nivel %s", level.upper())
