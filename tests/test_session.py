"""
tests/test_session.py
──────────────────────
Tests for the monitoring session and the dashboard rendering helpers.
"""
import time

import pytest
from pydantic import ValidationError

from config.settings import Settings
from config.status import SafetyStatus
from config.water import MOCK_LOCATIONS, SOURCE_LIMITS, WaterSourceCategory
from src.callbacks.dashboard import ph_trend_figure, render_dashboard, should_sync
from src.callbacks.dataset import decode_upload
from src.callbacks.history import history_frame
from src.analytics.calibration import CalibrationError
from src.narrative.contract import FALLBACK_SUMMARY
from src.session import build_session


@pytest.fixture
def session():
    config = Settings(
        SIMULATION_SEED=42,
        SCORING_POLICY="threshold_additive",
        HISTORY_CAPACITY=5,
        GEMINI_API_KEY="",
    )
    s = build_session(config)
    s.pipeline.log_sink = None
    return s


class TestSession:
    def test_build_from_settings(self, session):
        assert session.pipeline.policy.name == "threshold_additive"
        assert session.pipeline.provider is None
        assert session.history.capacity == 5

    def test_sync_simulated(self, session):
        reading, result = session.sync_simulated()
        assert reading.id.startswith("STN-")
        assert reading.location.name == MOCK_LOCATIONS[0]["name"]
        assert result.narrative_fallback is True
        assert session.history.latest().reading == reading

    def test_select_location_wraps(self, session):
        session.select_location(len(MOCK_LOCATIONS) + 1)
        assert session.location_index == 1
        assert session.location.name == MOCK_LOCATIONS[1]["name"]

    def test_submit_manual(self, session):
        session.category = WaterSourceCategory.DRAINS
        reading, result = session.submit_manual(
            ph=7.0, bod=20.0, dissolved_oxygen=1.5, fecal_coliform=12_000, conductivity=900
        )
        assert reading.id.startswith("MAN-")
        assert reading.category == WaterSourceCategory.DRAINS
        assert result.status == SafetyStatus.CRITICAL

    def test_submit_manual_invalid(self, session):
        with pytest.raises(ValidationError):
            session.submit_manual(ph=20.0, bod=1.0, dissolved_oxygen=6.0, fecal_coliform=10, conductivity=300)
        assert len(session.history) == 0

    def test_history_bounded(self, session):
        for _ in range(8):
            session.sync_simulated()
        assert len(session.history) == 5

    def test_logs_to_store_by_default(self):
        s = build_session(Settings(SIMULATION_SEED=1, GEMINI_API_KEY=""))
        assert s.pipeline.log_sink is not None

    def test_timeout_does_not_wait_for_worker_thread(self, session, safe_reading, blocking_provider):
        session.pipeline.provider = blocking_provider
        session.pipeline.timeout_s = 0.1

        start = time.monotonic()
        result = session.run(safe_reading)
        elapsed = time.monotonic() - start

        assert elapsed < 1.0
        assert result.ai_summary == FALLBACK_SUMMARY
        assert result.narrative_fallback is True
        assert len(session.history) == 1


class TestShouldSync:
    def test_sync_button_always(self):
        assert should_sync("dash-sync-btn", live=False, source="manual", history_empty=False)

    @pytest.mark.parametrize("trigger", ["dash-location", "dash-category"])
    def test_station_change_takes_fresh_reading(self, trigger):
        assert should_sync(trigger, live=False, source="simulated", history_empty=False)

    @pytest.mark.parametrize("trigger", ["dash-location", "dash-category", "interval-live", None])
    def test_manual_source_never_auto_syncs(self, trigger):
        assert not should_sync(trigger, live=True, source="manual", history_empty=True)

    def test_live_tick(self):
        assert should_sync("interval-live", live=True, source="simulated", history_empty=False)
        assert not should_sync("interval-live", live=False, source="simulated", history_empty=False)

    def test_first_load_only_when_empty(self):
        assert should_sync(None, live=False, source="simulated", history_empty=True)
        assert not should_sync(None, live=False, source="simulated", history_empty=False)

    def test_manual_submit_is_not_a_sync(self):
        assert not should_sync("manual-submit-btn", live=True, source="simulated", history_empty=True)


class TestRendering:
    def test_empty_dashboard(self):
        gauge, status, kpis, summary, fig, cards = render_dashboard([])
        assert status == ""
        assert len(fig.data) == 0

    def test_dashboard_with_entries(self, session):
        for _ in range(3):
            session.sync_simulated()
        gauge, status, kpis, summary, fig, cards = render_dashboard(session.history.entries())
        assert len(fig.data) == 1
        assert len(fig.data[0].x) == 3
        assert len(cards.children) == 3

    def test_ph_trend_chronological(self, session):
        for _ in range(3):
            session.sync_simulated()
        entries = session.history.entries()
        fig = ph_trend_figure(entries)
        assert list(fig.data[0].y) == [e.reading.ph for e in reversed(entries)]

    def test_history_frame(self, session):
        session.sync_simulated()
        df = history_frame(session.history.entries())
        assert len(df) == 1
        assert df.iloc[0]["station_id"].startswith("STN-")
        assert df.iloc[0]["status"] in {s.value for s in SafetyStatus}

    def test_history_frame_empty(self):
        assert history_frame([]).empty

    def test_decode_upload(self):
        assert decode_upload("data:text/csv;base64,cEgsQk9ECjcuMCwyLjAK") == b"pH,BOD\n7.0,2.0\n"

    def test_decode_upload_invalid(self):
        with pytest.raises(CalibrationError):
            decode_upload("not-a-data-url")


class TestSourceLimits:
    def test_clean_river_sample(self):
        limits = SOURCE_LIMITS[WaterSourceCategory.RIVER]
        assert limits.breaches(ph=7.2, bod=1.2, tds=300.0, fecal=450.0) == set()

    def test_breaches(self):
        limits = SOURCE_LIMITS[WaterSourceCategory.RIVER]
        assert limits.breaches(ph=8.9, bod=12.5, tds=900.0, fecal=15_000.0) == {"ph", "bod", "tds", "fecal"}

    def test_drains_relaxed(self):
        limits = SOURCE_LIMITS[WaterSourceCategory.DRAINS]
        assert limits.breaches(ph=8.9, bod=12.5, tds=900.0, fecal=5_000.0) == set()
