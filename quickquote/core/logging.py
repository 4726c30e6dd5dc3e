"""Logging setup shared by the CLI and the dashboard."""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Third-party loggers that drown out quote transitions at INFO.
QUIET_LOGGERS = ("urllib3",)


def configure_logging(level: str | None = None) -> str:
    """Configure root logging once and return the level name in use.

    ``level`` wins over ``LOG_LEVEL``; both fall back to ``INFO``. HTTP client
    chatter from the invitation backend is held at WARNING either way.
    """

    resolved_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return resolved_level
