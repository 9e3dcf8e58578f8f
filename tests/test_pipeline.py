"""
tests/test_pipeline.py
───────────────────────
Tests for the prediction pipeline and its narrative fallback.
"""
import asyncio

import pytest

from config.status import SafetyStatus
from src.analytics.disease import estimate_disease_risks
from src.analytics.scoring import ContinuousDeviationPolicy, ThresholdAdditivePolicy
from src.data.history import History
from src.narrative.contract import FALLBACK_SUMMARY
from src.pipeline import PredictionPipeline


def _run(pipeline, reading):
    return asyncio.run(pipeline.process(reading))


@pytest.fixture
def history():
    return History(capacity=30)


class TestNarrativeFallback:
    def test_failing_service_uses_fallback(self, rng, history, critical_reading, raising_provider):
        pipeline = PredictionPipeline(ThresholdAdditivePolicy(rng=rng), raising_provider, history)
        result = _run(pipeline, critical_reading)

        assert result.ai_summary == FALLBACK_SUMMARY
        assert result.narrative_fallback is True
        assert result.status == SafetyStatus.CRITICAL
        assert result.severity_score >= 90.0
        assert result.confidence == 0.88
        assert result.reliability_index == 94.0
        assert result.disease_risks == estimate_disease_risks(critical_reading)

    def test_no_provider_uses_fallback(self, history, safe_reading):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), None, history)
        result = _run(pipeline, safe_reading)
        assert result.ai_summary == FALLBACK_SUMMARY
        assert result.narrative_fallback is True
        assert result.status == SafetyStatus.SAFE

    def test_timeout_uses_fallback(self, history, safe_reading, slow_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), slow_provider, history, timeout_s=0.05)
        result = _run(pipeline, safe_reading)
        assert result.ai_summary == FALLBACK_SUMMARY
        assert result.narrative_fallback is True
        assert len(history) == 1

    def test_empty_risks_use_local_estimate(self, history, safe_reading, empty_risks_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), empty_risks_provider, history)
        result = _run(pipeline, safe_reading)
        assert result.ai_summary == "Sample STN-SAFE1 reviewed."
        assert result.narrative_fallback is False
        assert len(result.disease_risks) == 3
        assert result.disease_risks[0].disease == "Cholera Outbreak Risk"

    def test_raw_payload_is_validated(self, history, safe_reading, dict_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), dict_provider, history)
        result = _run(pipeline, safe_reading)
        assert result.ai_summary == "ok"
        assert result.narrative_fallback is False
        assert len(result.disease_risks) == 3

    def test_malformed_payload_uses_fallback(self, history, safe_reading, none_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), none_provider, history)
        result = _run(pipeline, safe_reading)
        assert result.ai_summary == FALLBACK_SUMMARY
        assert result.narrative_fallback is True
        assert len(history) == 1


class TestPipelineResult:
    def test_service_output_passed_through(self, history, critical_reading, echo_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), echo_provider, history)
        result = _run(pipeline, critical_reading)

        assert [r.disease for r in result.disease_risks] == ["Dysentery"]
        assert result.root_cause == "Sewage inflow"
        assert result.policy_recommendation == "Boil water"
        assert result.model_type == "continuous_deviation"
        assert result.bio_hazard_score == 100.0

    def test_request_carries_local_scores(self, history, critical_reading, echo_provider):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), echo_provider, history)
        result = _run(pipeline, critical_reading)
        request = echo_provider.requests[0]
        assert request.station_id == critical_reading.id
        assert request.status == result.status
        assert request.severity_score == pytest.approx(result.severity_score, abs=0.01)

    def test_threshold_policy_has_no_bio_hazard(self, rng, history, safe_reading):
        result = _run(PredictionPipeline(ThresholdAdditivePolicy(rng=rng), None, history), safe_reading)
        assert result.bio_hazard_score is None
        assert result.model_type == "threshold_additive"

    def test_severity_rounded(self, history, critical_reading):
        result = _run(PredictionPipeline(ContinuousDeviationPolicy(), None, history), critical_reading)
        assert result.severity_score == round(result.severity_score, 2)


class TestPipelineHistory:
    def test_appends_most_recent_first(self, history, safe_reading, critical_reading):
        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), None, history)
        _run(pipeline, safe_reading)
        _run(pipeline, critical_reading)
        assert [e.reading.id for e in history.entries()] == ["STN-CRIT1", "STN-SAFE1"]

    def test_reliability_from_prior_history(self, rng, history, safe_reading, critical_reading):
        pipeline = PredictionPipeline(ThresholdAdditivePolicy(rng=rng), None, history)
        first = _run(pipeline, critical_reading)
        second = _run(pipeline, safe_reading)
        third = _run(pipeline, safe_reading)
        assert first.reliability_index == 94.0
        assert second.reliability_index == 0.0
        assert third.reliability_index == 50.0


class TestLogSink:
    def test_sink_receives_result(self, history, safe_reading):
        seen = []
        pipeline = PredictionPipeline(
            ContinuousDeviationPolicy(), None, history, log_sink=lambda r, p: seen.append((r.id, p.status))
        )
        _run(pipeline, safe_reading)
        assert seen == [("STN-SAFE1", SafetyStatus.SAFE)]

    def test_sink_failure_does_not_propagate(self, history, safe_reading):
        def broken_sink(reading, prediction):
            raise OSError("disk full")

        pipeline = PredictionPipeline(ContinuousDeviationPolicy(), None, history, log_sink=broken_sink)
        result = _run(pipeline, safe_reading)
        assert result.status == SafetyStatus.SAFE
        assert len(history) == 1
