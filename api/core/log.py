"""
Logging setup shared by the API process.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        # uvicorn (or a test runner) already installed handlers.
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
