"""
src/data/simulator.py
─────────────────────
Synthetic water-quality sensor streams.

Generates:
  - Bounded random-walk steps for a single quantity (rolling_value)
  - Continuous per-station streams where every channel drifts from its
    previous value (RollingSimulator)
  - One-shot "sync" readings with a 40% anomaly chance (generate_mock_reading)
  - Manual-entry readings layered over a mock reading (manual_reading)

Design:
  - All randomness comes from an injected np.random.Generator so tests and
    demos can fix the seed
  - rolling_value keeps no state; RollingState is the caller-owned cursor
"""
from __future__ import annotations

import string
from dataclasses import dataclass, field
from datetime import UTC, datetime

import numpy as np

from config.water import (
    CHANNELS,
    TDS_TO_CONDUCTIVITY,
    TOTAL_COLIFORM_FACTOR,
    ChannelSpec,
    WaterSourceCategory,
)
from src.data.models import Location, SensorReading

DEFAULT_VOLATILITY = 0.05
ANOMALY_PROBABILITY = 0.4

_ID_ALPHABET = list(string.ascii_uppercase + string.digits)


def rolling_value(
    previous: float,
    minimum: float,
    maximum: float,
    rng: np.random.Generator,
    volatility: float = DEFAULT_VOLATILITY,
) -> float:
    """
    One bounded random-walk step.

    The step is a uniform draw in [-1, 1] scaled by volatility × (max − min),
    added to `previous` and clamped back into [min, max].
    """
    if minimum > maximum:
        raise ValueError(f"Invalid range: min {minimum} > max {maximum}")
    step = rng.uniform(-1.0, 1.0) * volatility * (maximum - minimum)
    return float(np.clip(previous + step, minimum, maximum))


def _station_id(prefix: str, rng: np.random.Generator) -> str:
    return prefix + "".join(rng.choice(_ID_ALPHABET, size=5))


# ── Rolling streams ───────────────────────────────────────────────────────────

@dataclass
class RollingState:
    """Current value of each simulated channel for one session."""
    values: dict[str, float] = field(default_factory=dict)

    @classmethod
    def at_midpoints(cls, channels: dict[str, ChannelSpec]) -> RollingState:
        return cls(values={name: spec.midpoint for name, spec in channels.items()})


class RollingSimulator:
    """Steps every channel of a station from its previous value."""

    def __init__(
        self,
        rng: np.random.Generator,
        channels: dict[str, ChannelSpec] | None = None,
    ) -> None:
        self.rng = rng
        self.channels = channels or CHANNELS
        self.state = RollingState.at_midpoints(self.channels)

    def step(
        self,
        location: Location,
        category: WaterSourceCategory = WaterSourceCategory.RIVER,
    ) -> SensorReading:
        for name, spec in self.channels.items():
            self.state.values[name] = rolling_value(
                self.state.values[name], spec.minimum, spec.maximum, self.rng, spec.volatility
            )

        v = self.state.values
        low, high = TOTAL_COLIFORM_FACTOR
        fecal = v["fecal_coliform"]

        return SensorReading(
            id=_station_id("STN-", self.rng),
            timestamp=datetime.now(tz=UTC),
            ph=round(v["ph"], 2),
            turbidity=round(v["turbidity"], 2),
            tds=round(v["tds"], 1),
            temperature=round(v["temperature"], 1),
            dissolved_oxygen=round(v["dissolved_oxygen"], 2),
            conductivity=round(v["tds"] * TDS_TO_CONDUCTIVITY, 1),
            bod=round(v["bod"], 2),
            nitrate=round(v["nitrate"], 2),
            fecal_coliform=round(fecal),
            total_coliform=round(fecal * self.rng.uniform(low, high)),
            location=location,
            category=category,
        )


# ── One-shot readings ─────────────────────────────────────────────────────────

def generate_mock_reading(
    location: Location,
    rng: np.random.Generator,
    category: WaterSourceCategory = WaterSourceCategory.RIVER,
) -> SensorReading:
    """
    Independent synthetic reading. With probability ANOMALY_PROBABILITY the
    biological channels (turbidity, BOD, coliforms) come from a contaminated
    regime instead of the baseline one.
    """
    anomaly = rng.random() < ANOMALY_PROBABILITY

    return SensorReading(
        id=_station_id("STN-", rng),
        timestamp=datetime.now(tz=UTC),
        ph=round(6.5 + rng.random() * 2.0, 2),
        turbidity=round(rng.random() * (30.0 if anomaly else 5.0), 2),
        tds=round(200.0 + rng.random() * 1_200.0, 1),
        temperature=round(24.0 + rng.random() * 8.0, 1),
        dissolved_oxygen=round(3.0 + rng.random() * 5.0, 2),
        conductivity=round(400.0 + rng.random() * 800.0, 1),
        bod=round(8.0 + rng.random() * 20.0 if anomaly else 1.0 + rng.random() * 3.0, 2),
        nitrate=round(rng.random() * 15.0, 2),
        fecal_coliform=round(5_000.0 + rng.random() * 50_000.0 if anomaly else 100.0 + rng.random() * 1_500.0),
        total_coliform=round(10_000.0 + rng.random() * 100_000.0 if anomaly else 500.0 + rng.random() * 4_000.0),
        location=location,
        category=category,
    )


def manual_reading(
    location: Location,
    rng: np.random.Generator,
    *,
    ph: float,
    bod: float,
    dissolved_oxygen: float,
    fecal_coliform: float,
    conductivity: float,
    category: WaterSourceCategory = WaterSourceCategory.RIVER,
) -> SensorReading:
    """Mock reading with the five manually entered fields overridden."""
    base = generate_mock_reading(location, rng, category)
    # Re-validate: model_copy(update=...) would skip field constraints
    return SensorReading.model_validate(
        {
            **base.model_dump(),
            "id": "MAN-" + base.id.removeprefix("STN-"),
            "ph": ph,
            "bod": bod,
            "dissolved_oxygen": dissolved_oxygen,
            "fecal_coliform": fecal_coliform,
            "conductivity": conductivity,
        }
    )
