"""
src/analytics/classifier.py
───────────────────────────
Memoryless safety-tier classification and classification confidence.
"""
from __future__ import annotations

from config.status import SafetyStatus
from src.data.models import SensorReading

# Severity-only tiers
CRITICAL_SEVERITY = 75.0
WARNING_SEVERITY = 35.0

# Severity + raw-value override tiers
OVERRIDE_WARNING_SEVERITY = 30.0
CRITICAL_OVERRIDES = {"fecal_coliform": 5_000.0, "bod": 15.0, "dissolved_oxygen_below": 2.0}
WARNING_OVERRIDES = {"fecal_coliform": 1_000.0, "bod": 3.0}

BASE_CONFIDENCE = 0.98
HIGH_SEVERITY_PENALTY = 0.10   # severity > 85
EXTREME_PH_PENALTY = 0.05      # pH < 5 or pH > 9.5


def classify_by_severity(severity: float) -> SafetyStatus:
    if severity > CRITICAL_SEVERITY:
        return SafetyStatus.CRITICAL
    if severity > WARNING_SEVERITY:
        return SafetyStatus.WARNING
    return SafetyStatus.SAFE


def classify_with_overrides(severity: float, reading: SensorReading) -> SafetyStatus:
    """
    Severity tiers plus raw biological overrides: a single extreme reading
    forces an elevated tier even when the blended severity is moderate.
    """
    if (
        severity > CRITICAL_SEVERITY
        or reading.fecal_coliform > CRITICAL_OVERRIDES["fecal_coliform"]
        or reading.bod > CRITICAL_OVERRIDES["bod"]
        or reading.dissolved_oxygen < CRITICAL_OVERRIDES["dissolved_oxygen_below"]
    ):
        return SafetyStatus.CRITICAL
    if (
        severity > OVERRIDE_WARNING_SEVERITY
        or reading.fecal_coliform > WARNING_OVERRIDES["fecal_coliform"]
        or reading.bod > WARNING_OVERRIDES["bod"]
    ):
        return SafetyStatus.WARNING
    return SafetyStatus.SAFE


def estimate_confidence(reading: SensorReading, severity: float) -> float:
    """Heuristic trust in the assigned tier, in [0.83, 0.98]."""
    confidence = BASE_CONFIDENCE
    if severity > 85.0:
        confidence -= HIGH_SEVERITY_PENALTY
    if reading.ph < 5.0 or reading.ph > 9.5:
        confidence -= EXTREME_PH_PENALTY
    return round(confidence, 4)
