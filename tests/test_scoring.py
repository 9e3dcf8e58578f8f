"""
tests/test_scoring.py
──────────────────────
Tests for severity / bio-hazard scoring and the named policies.
"""
import numpy as np
import pytest

from config.status import SafetyStatus
from src.analytics.scoring import (
    JITTER_MAX,
    POLICY_NAMES,
    SEVERITY_FLOOR,
    ContinuousDeviationPolicy,
    ThresholdAdditivePolicy,
    bio_hazard_score,
    deviation_severity,
    get_policy,
)
from src.data.simulator import generate_mock_reading


def _with(reading, **changes):
    return reading.model_validate({**reading.model_dump(), **changes})


class TestThresholdAdditive:
    def test_contaminated_sample_is_critical(self, rng, critical_reading):
        policy = ThresholdAdditivePolicy(rng=rng)
        severity = policy.severity(critical_reading)
        assert 90.0 <= severity <= 100.0
        assert policy.classify(severity, critical_reading) == SafetyStatus.CRITICAL

    def test_clean_sample_is_safe(self, rng, safe_reading):
        policy = ThresholdAdditivePolicy(rng=rng)
        severity = policy.severity(safe_reading)
        assert severity <= 15.0
        assert severity == SEVERITY_FLOOR
        assert policy.classify(severity, safe_reading) == SafetyStatus.SAFE

    def test_jitter_bounded(self, safe_reading):
        policy = ThresholdAdditivePolicy(rng=np.random.default_rng(0))
        reading = _with(safe_reading, bod=5.0)  # +15 penalty
        for _ in range(200):
            assert 15.0 <= policy.severity(reading) < 15.0 + JITTER_MAX

    def test_bod_tiers_are_exclusive(self, safe_reading):
        policy = ThresholdAdditivePolicy(rng=np.random.default_rng(0))
        moderate = min(policy.severity(_with(safe_reading, bod=5.0)) for _ in range(50))
        high = min(policy.severity(_with(safe_reading, bod=12.0)) for _ in range(50))
        assert moderate < 20.0
        assert 25.0 <= high < 30.0

    def test_no_bio_hazard_axis(self, rng, critical_reading):
        assert ThresholdAdditivePolicy(rng=rng).bio_hazard(critical_reading) is None

    def test_bounded_over_random_readings(self, rng, location):
        policy = ThresholdAdditivePolicy(rng=rng)
        for _ in range(500):
            severity = policy.severity(generate_mock_reading(location, rng))
            assert 5.0 <= severity <= 100.0


class TestContinuousDeviation:
    def test_clean_sample_is_low(self, safe_reading):
        policy = ContinuousDeviationPolicy()
        severity = policy.severity(safe_reading)
        assert severity <= 15.0
        assert policy.classify(severity, safe_reading) == SafetyStatus.SAFE

    def test_deterministic(self, critical_reading):
        policy = ContinuousDeviationPolicy()
        assert policy.severity(critical_reading) == policy.severity(critical_reading)

    def test_floor(self, safe_reading):
        ideal = _with(safe_reading, ph=7.2, turbidity=0.0, tds=0.0, nitrate=0.0)
        assert deviation_severity(ideal) == SEVERITY_FLOOR

    def test_ceiling(self, safe_reading):
        extreme = _with(safe_reading, ph=1.0, turbidity=40.0, tds=2_000.0, nitrate=20.0)
        assert deviation_severity(extreme) == 100.0

    def test_ph_deviation_symmetric(self, safe_reading):
        acidic = deviation_severity(_with(safe_reading, ph=6.2))
        alkaline = deviation_severity(_with(safe_reading, ph=8.2))
        assert acidic == pytest.approx(alkaline)

    def test_monotone_in_turbidity(self, safe_reading):
        scores = [deviation_severity(_with(safe_reading, turbidity=t)) for t in (0.0, 5.0, 10.0, 20.0)]
        assert scores == sorted(scores)


class TestBioHazard:
    def test_bounds(self, safe_reading, critical_reading):
        assert 0.0 <= bio_hazard_score(safe_reading) <= 100.0
        assert bio_hazard_score(critical_reading) == 100.0

    def test_monotone_in_fecal(self, safe_reading):
        scores = [bio_hazard_score(_with(safe_reading, fecal_coliform=f)) for f in (0, 100, 1_000, 10_000)]
        assert scores == sorted(scores)
        assert scores[0] < scores[-1]

    def test_do_deficit_only_below_reference(self, safe_reading):
        saturated = bio_hazard_score(_with(safe_reading, dissolved_oxygen=9.0))
        at_reference = bio_hazard_score(_with(safe_reading, dissolved_oxygen=7.5))
        assert saturated == at_reference

    def test_zero_coliform(self, safe_reading):
        clean = _with(safe_reading, bod=0.0, fecal_coliform=0.0, dissolved_oxygen=8.0)
        assert bio_hazard_score(clean) == 0.0


class TestGetPolicy:
    @pytest.mark.parametrize("name", POLICY_NAMES)
    def test_known_names(self, rng, name):
        assert get_policy(name, rng).name == name

    def test_unknown_name(self, rng):
        with pytest.raises(ValueError, match="Unknown scoring policy"):
            get_policy("blended", rng)
