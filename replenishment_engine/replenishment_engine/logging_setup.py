from __future__ import annotations

import logging
from typing import Optional

from . import config


def configure_logging(level: Optional[str] = None) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level or config.LOG_LEVEL, logging.INFO))
    if root_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(handler)
