"""
src/analytics/reliability.py
────────────────────────────
Reliability index: share of SAFE classifications in the recorded history.
"""
from __future__ import annotations

from collections.abc import Iterable

from config.status import SafetyStatus
from src.data.models import HistoryEntry

# Optimistic prior when nothing has been recorded yet
DEFAULT_RELIABILITY = 94.0


def reliability_index(history: Iterable[HistoryEntry]) -> float:
    """round(100 × SAFE entries / all entries), or the prior for no history."""
    statuses = [entry.prediction.status for entry in history]
    if not statuses:
        return DEFAULT_RELIABILITY
    safe = sum(1 for status in statuses if status == SafetyStatus.SAFE)
    return float(round(100.0 * safe / len(statuses)))
