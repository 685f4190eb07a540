"""
Centralized logging configuration.

Every module logs through logging.getLogger(__name__); this sets up the
single console handler they all share.
"""

import logging
import sys
from typing import Optional

from solverhub.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root 'solverhub' logger once."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger("solverhub")
    logger.setLevel(log_level)
    logger.addHandler(handler)
    logger.propagate = False

    # Keep library noise down unless debugging
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("passlib").setLevel(logging.ERROR)

    _configured = True
