"""
tests/test_history.py
──────────────────────
Tests for the bounded history and the reliability index computed from it.
"""
import threading

import pytest

from config.status import SafetyStatus
from src.analytics.reliability import DEFAULT_RELIABILITY, reliability_index
from src.data.history import History
from src.data.models import PredictionResult


def _prediction(status: SafetyStatus, severity: float = 10.0) -> PredictionResult:
    return PredictionResult(
        severity_score=severity,
        status=status,
        reliability_index=94.0,
        ai_summary="",
        model_type="continuous_deviation",
    )


def _with_id(reading, station_id):
    return reading.model_validate({**reading.model_dump(), "id": station_id})


class TestHistory:
    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            History(capacity=0)

    def test_most_recent_first(self, safe_reading):
        history = History(capacity=5)
        for i in range(3):
            history.append(_with_id(safe_reading, f"STN-{i}"), _prediction(SafetyStatus.SAFE))
        assert [e.reading.id for e in history.entries()] == ["STN-2", "STN-1", "STN-0"]
        assert history.latest().reading.id == "STN-2"

    def test_evicts_oldest_when_full(self, safe_reading):
        history = History(capacity=30)
        for i in range(35):
            history.append(_with_id(safe_reading, f"STN-{i}"), _prediction(SafetyStatus.SAFE))
        ids = [e.reading.id for e in history]
        assert len(history) == 30
        assert ids[0] == "STN-34"
        assert ids[-1] == "STN-5"

    def test_empty(self):
        history = History()
        assert history.latest() is None
        assert history.entries() == []

    def test_concurrent_appends(self, safe_reading):
        history = History(capacity=1_000)
        prediction = _prediction(SafetyStatus.SAFE)

        def worker():
            for _ in range(100):
                history.append(safe_reading, prediction)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(history) == 800

    def test_len_during_appends(self, safe_reading):
        history = History(capacity=1_000)
        prediction = _prediction(SafetyStatus.SAFE)
        done = threading.Event()
        seen = []

        def writer():
            for _ in range(200):
                history.append(safe_reading, prediction)

        def reader():
            while not done.is_set():
                seen.append(len(history))

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        writers = [threading.Thread(target=writer) for _ in range(4)]
        for t in writers:
            t.start()
        for t in writers:
            t.join()
        done.set()
        reader_thread.join()

        assert seen == sorted(seen)
        assert all(0 <= n <= 800 for n in seen)
        assert len(history) == 800


class TestReliabilityIndex:
    def test_empty_history_prior(self):
        assert reliability_index([]) == DEFAULT_RELIABILITY == 94.0

    def test_all_safe(self, safe_reading):
        history = History()
        for _ in range(4):
            history.append(safe_reading, _prediction(SafetyStatus.SAFE))
        assert reliability_index(history.entries()) == 100.0

    def test_none_safe(self, safe_reading):
        history = History()
        history.append(safe_reading, _prediction(SafetyStatus.WARNING, 50.0))
        history.append(safe_reading, _prediction(SafetyStatus.CRITICAL, 90.0))
        assert reliability_index(history.entries()) == 0.0

    def test_rounded_share(self, safe_reading):
        history = History()
        history.append(safe_reading, _prediction(SafetyStatus.SAFE))
        history.append(safe_reading, _prediction(SafetyStatus.SAFE))
        history.append(safe_reading, _prediction(SafetyStatus.CRITICAL, 90.0))
        assert reliability_index(history.entries()) == 67.0
