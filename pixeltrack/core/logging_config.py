"""
Logging setup
"""
import logging
import sys

from pixeltrack.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the process.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
    """
    log_level = (level or settings.LOG_LEVEL).upper()
    if settings.DEBUG:
        log_level = "DEBUG"

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
