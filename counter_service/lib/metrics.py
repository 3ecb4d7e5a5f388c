"""Minimal in-memory metrics registry for counter operations."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Dict


class MetricsRegistry:
    """Thread-safe tally of named events, exposed on ``/metrics``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: Counter[str] = Counter()

    def increment(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._events[name] += value

    def record(self, operation: str, *, ok: bool) -> None:
        """Count one outcome of a counter operation."""

        outcome = "success" if ok else "error"
        self.increment(f"counter.{operation}.{outcome}")

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._events)

    def reset(self) -> None:
        with self._lock:
            self._events.clear()


METRICS = MetricsRegistry()
