"""
config/status.py
────────────────
Safety tiers, their ordering, and display configuration.
"""

from enum import Enum


class SafetyStatus(str, Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


# Tier ordering by increasing risk (higher = more severe)
STATUS_ORDER: dict[str, int] = {
    SafetyStatus.SAFE: 1,
    SafetyStatus.WARNING: 2,
    SafetyStatus.CRITICAL: 3,
}

STATUS_COLORS: dict[str, str] = {
    SafetyStatus.SAFE: "#00e676",
    SafetyStatus.WARNING: "#ffd600",
    SafetyStatus.CRITICAL: "#ff1744",
}

STATUS_BG: dict[str, str] = {
    SafetyStatus.SAFE: "rgba(0,230,118,0.12)",
    SafetyStatus.WARNING: "rgba(255,214,0,0.12)",
    SafetyStatus.CRITICAL: "rgba(255,23,68,0.12)",
}

# Severity score display bands (upper bound inclusive)
SEVERITY_BANDS: dict[str, float] = {
    SafetyStatus.SAFE: 30.0,
    SafetyStatus.WARNING: 75.0,
}

# Disease probability display bands (upper bound exclusive)
PROBABILITY_BANDS: dict[str, float] = {
    SafetyStatus.SAFE: 0.3,
    SafetyStatus.WARNING: 0.6,
}


def severity_color(severity: float | None) -> str:
    """Color for a severity score on the gauge / history table."""
    if severity is None:
        return "#8a949d"
    if severity <= SEVERITY_BANDS[SafetyStatus.SAFE]:
        return STATUS_COLORS[SafetyStatus.SAFE]
    if severity <= SEVERITY_BANDS[SafetyStatus.WARNING]:
        return STATUS_COLORS[SafetyStatus.WARNING]
    return STATUS_COLORS[SafetyStatus.CRITICAL]


def probability_color(probability: float) -> str:
    if probability < PROBABILITY_BANDS[SafetyStatus.SAFE]:
        return STATUS_COLORS[SafetyStatus.SAFE]
    if probability < PROBABILITY_BANDS[SafetyStatus.WARNING]:
        return STATUS_COLORS[SafetyStatus.WARNING]
    return STATUS_COLORS[SafetyStatus.CRITICAL]
