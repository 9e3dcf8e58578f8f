"""
src/analytics/scoring.py
────────────────────────
Severity and bio-hazard scoring.

Severity ∈ [5, 100] measures chemical/physical degradation. Two named
policies exist and are never blended:

  threshold_additive    : fixed penalties per exceeded limit + 0–5 jitter,
                          biological indicators folded into severity,
                          classified with raw-value overrides
  continuous_deviation  : linear distance from the ideal operating point,
                          biological indicators scored on a separate
                          bio-hazard axis, classified on severity alone

Bio-hazard ∈ [0, 100] (continuous_deviation only):
  5.5·BOD + 14·log10(fecal + 1) + 6·max(0, 7.5 − DO)
The log term compresses coliform counts spanning several orders of magnitude.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from config.status import SafetyStatus
from src.analytics.classifier import classify_by_severity, classify_with_overrides
from src.data.models import SensorReading

SEVERITY_FLOOR = 5.0
SEVERITY_CEILING = 100.0
JITTER_MAX = 5.0

# ── Threshold-additive penalties ──────────────────────────────────────────────
PH_BAND = (6.5, 8.5)
PENALTIES = {
    "ph": 15.0,
    "do_low": 20.0,          # DO < 4 mg/l
    "bod_moderate": 15.0,    # BOD > 3 mg/l
    "bod_high": 25.0,        # BOD > 10 mg/l
    "fecal_moderate": 20.0,  # fecal > 2500 MPN
    "fecal_high": 30.0,      # fecal > 10000 MPN
    "nitrate": 10.0,         # nitrate > 10 mg/l
}
LIMITS = {
    "do_low": 4.0,
    "bod_moderate": 3.0,
    "bod_high": 10.0,
    "fecal_moderate": 2_500.0,
    "fecal_high": 10_000.0,
    "nitrate": 10.0,
}

# ── Continuous-deviation weights ──────────────────────────────────────────────
IDEAL_PH = 7.2
WEIGHTS = {
    "ph": 12.0,          # per pH unit from ideal
    "turbidity": 1.8,    # per NTU
    "tds": 1.0 / 120.0,  # per ppm
    "nitrate": 2.5,      # per mg/l
}

# ── Bio-hazard weights ────────────────────────────────────────────────────────
BIO_WEIGHTS = {
    "bod": 5.5,
    "fecal_log": 14.0,
    "do_deficit": 6.0,
}
DO_SATURATION_REFERENCE = 7.5


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _penalty_points(reading: SensorReading) -> float:
    points = 0.0
    if not PH_BAND[0] <= reading.ph <= PH_BAND[1]:
        points += PENALTIES["ph"]
    if reading.dissolved_oxygen < LIMITS["do_low"]:
        points += PENALTIES["do_low"]
    if reading.bod > LIMITS["bod_high"]:
        points += PENALTIES["bod_high"]
    elif reading.bod > LIMITS["bod_moderate"]:
        points += PENALTIES["bod_moderate"]
    if reading.fecal_coliform > LIMITS["fecal_high"]:
        points += PENALTIES["fecal_high"]
    elif reading.fecal_coliform > LIMITS["fecal_moderate"]:
        points += PENALTIES["fecal_moderate"]
    if reading.nitrate > LIMITS["nitrate"]:
        points += PENALTIES["nitrate"]
    return points


def deviation_severity(reading: SensorReading) -> float:
    raw = (
        WEIGHTS["ph"] * abs(reading.ph - IDEAL_PH)
        + WEIGHTS["turbidity"] * reading.turbidity
        + WEIGHTS["tds"] * reading.tds
        + WEIGHTS["nitrate"] * reading.nitrate
    )
    return _clamp(raw, SEVERITY_FLOOR, SEVERITY_CEILING)


def bio_hazard_score(reading: SensorReading) -> float:
    raw = (
        BIO_WEIGHTS["bod"] * reading.bod
        + BIO_WEIGHTS["fecal_log"] * math.log10(reading.fecal_coliform + 1.0)
        + BIO_WEIGHTS["do_deficit"] * max(0.0, DO_SATURATION_REFERENCE - reading.dissolved_oxygen)
    )
    return _clamp(raw, 0.0, 100.0)


# ── Policies ──────────────────────────────────────────────────────────────────

class ScoringPolicy(Protocol):
    name: str

    def severity(self, reading: SensorReading) -> float: ...

    def bio_hazard(self, reading: SensorReading) -> float | None: ...

    def classify(self, severity: float, reading: SensorReading) -> SafetyStatus: ...


@dataclass
class ThresholdAdditivePolicy:
    """Penalty table + jitter; one combined severity axis."""

    rng: np.random.Generator
    name: str = "threshold_additive"

    def severity(self, reading: SensorReading) -> float:
        jitter = float(self.rng.random()) * JITTER_MAX
        return _clamp(_penalty_points(reading) + jitter, SEVERITY_FLOOR, SEVERITY_CEILING)

    def bio_hazard(self, reading: SensorReading) -> float | None:
        return None

    def classify(self, severity: float, reading: SensorReading) -> SafetyStatus:
        return classify_with_overrides(severity, reading)


@dataclass
class ContinuousDeviationPolicy:
    """Deterministic deviation score; biology on its own bio-hazard axis."""

    name: str = "continuous_deviation"

    def severity(self, reading: SensorReading) -> float:
        return deviation_severity(reading)

    def bio_hazard(self, reading: SensorReading) -> float | None:
        return bio_hazard_score(reading)

    def classify(self, severity: float, reading: SensorReading) -> SafetyStatus:
        return classify_by_severity(severity)


POLICY_NAMES = ("threshold_additive", "continuous_deviation")


def get_policy(name: str, rng: np.random.Generator) -> ScoringPolicy:
    """Resolve a configured policy name to a policy instance."""
    if name == "threshold_additive":
        return ThresholdAdditivePolicy(rng=rng)
    if name == "continuous_deviation":
        return ContinuousDeviationPolicy()
    raise ValueError(f"Unknown scoring policy {name!r}; expected one of {POLICY_NAMES}")
