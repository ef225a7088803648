from __future__ import annotations

import itertools
import re
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, Protocol, Sequence


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class IdGenerator(Protocol):
    def next_id(self) -> str:
        ...


class SequentialIdGenerator:
    """Issues ``<PREFIX>-<YYYYMMDD>-<seq>`` ids.

    The sequence is shared by all dates and only grows for the lifetime of the
    generator, so ids never collide within a process. Nothing is persisted:
    a restarted process starts counting again from ``start``.
    """

    def __init__(self, prefix: str, start: int = 0, clock: Callable[[], datetime] = utc_now):
        self.prefix = prefix
        self._clock = clock
        self._counter = itertools.count(start + 1)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            seq = next(self._counter)
        day = self._clock().astimezone(timezone.utc).strftime("%Y%m%d")
        return f"{self.prefix}-{day}-{seq:03d}"


def highest_sequence(prefix: str, existing_ids: Iterable[str]) -> int:
    """Largest ``<seq>`` among ids shaped ``<PREFIX>-<YYYYMMDD>-<seq>``, else 0."""
    pattern = re.compile(rf"^{re.escape(prefix)}-\d{{8}}-(\d+)$")
    best = 0
    for value in existing_ids:
        match = pattern.match(value or "")
        if match:
            best = max(best, int(match.group(1)))
    return best


def sequence_start(prefix: str, existing_ids: Sequence[str]) -> int:
    return max(len(existing_ids), highest_sequence(prefix, existing_ids))
