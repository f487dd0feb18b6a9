"""
Shared utility functions.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


class MonotonicIdGenerator:
    """
    Time-based numeric ids.
    
    Ids are milliseconds since the epoch, bumped by one when two calls land
    in the same millisecond, so every id handed out is unique per process.
    """
    
    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()
    
    def next_id(self) -> int:
        now_ms = time.time_ns() // 1_000_000
        with self._lock:
            self._last = max(now_ms, self._last + 1)
            return self._last
