from __future__ import annotations

import os
from pathlib import Path


DATA_DIR = os.getenv("REPLENISHMENT_DATA_DIR", "")
DEFAULT_LEAD_TIME_DAYS = int(os.getenv("DEFAULT_LEAD_TIME_DAYS", "7"))
DEFAULT_GOAL = os.getenv("DEFAULT_GOAL", "balance")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
REMINDER_WEBHOOK_URL = os.getenv("REMINDER_WEBHOOK_URL", "")
REMINDER_WEBHOOK_TIMEOUT = float(os.getenv("REMINDER_WEBHOOK_TIMEOUT", "10"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(Path(__file__).resolve().parent.parent / "output")))
