"""
Purpose:
- Loguru configuration for the relay and the CLI.
- setup_logger() is idempotent; call it at program start.
"""

from __future__ import annotations
import sys
from typing import Optional

from loguru import logger

from .settings import settings

_INITIALISED = False

def setup_logger(level: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with one stderr sink at *level*
    (settings.log_level when None). Later calls are ignored.
    """
    global _INITIALISED
    if _INITIALISED:
        return

    level = (level or settings.log_level).upper()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> <cyan>{name}</cyan> - <level>{message}</level>",
        colorize=True,
    )
    logger.debug("Logger initialised (level: {})", level)
    _INITIALISED = True
