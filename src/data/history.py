"""
src/data/history.py
───────────────────
Bounded, most-recent-first history of {reading, prediction} pairs.

Appends are serialized with a lock: Dash may serve overlapping sync
callbacks from worker threads. Entries are frozen models and are never
mutated after append.
"""
from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator

from src.data.models import HistoryEntry, PredictionResult, SensorReading

DEFAULT_CAPACITY = 30


class History:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, reading: SensorReading, prediction: PredictionResult) -> HistoryEntry:
        """Insert at the front; the oldest entry falls off the back when full."""
        entry = HistoryEntry(reading=reading, prediction=prediction)
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """Snapshot, most recent first."""
        with self._lock:
            return list(self._entries)

    def latest(self) -> HistoryEntry | None:
        with self._lock:
            return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries())
