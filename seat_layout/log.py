from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: Optional[str] = None) -> None:
    """Replace loguru's default sink with a single stderr sink."""
    level = (level or os.environ.get("SEAT_LAYOUT_LOG_LEVEL") or "WARNING").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
