"""
src/session.py
──────────────
Monitoring session: the explicit context handed to the Dash callbacks.

Bundles the prediction pipeline (and its history), the rolling simulator,
and the selected station. Built once in app.py and passed to each
callback registrar.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import numpy as np

from config.settings import Settings
from config.water import MOCK_LOCATIONS, WaterSourceCategory
from src.analytics.scoring import get_policy
from src.data import store
from src.data.history import History
from src.data.models import Location, PredictionResult, SensorReading
from src.data.simulator import RollingSimulator, manual_reading
from src.narrative.gemini import build_provider
from src.pipeline import PredictionPipeline


@dataclass
class MonitoringSession:
    pipeline: PredictionPipeline
    simulator: RollingSimulator
    rng: np.random.Generator
    location_index: int = 0
    location: Location = field(default_factory=lambda: Location(**MOCK_LOCATIONS[0]))
    category: WaterSourceCategory = WaterSourceCategory.RIVER
    source: str = "simulated"

    @property
    def history(self) -> History:
        return self.pipeline.history

    def select_location(self, index: int) -> Location:
        self.location_index = index % len(MOCK_LOCATIONS)
        self.location = Location(**MOCK_LOCATIONS[self.location_index])
        return self.location

    def run(self, reading: SensorReading) -> PredictionResult:
        """
        Drive one pipeline pass from synchronous (Dash callback) code.

        A private loop is closed without joining its default executor, so a
        narrative SDK call still blocking in a worker thread after the
        timeout does not hold up the callback.
        """
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(self.pipeline.process(reading))
        finally:
            loop.close()

    def sync_simulated(self) -> tuple[SensorReading, PredictionResult]:
        reading = self.simulator.step(self.location, self.category)
        return reading, self.run(reading)

    def submit_manual(
        self,
        *,
        ph: float,
        bod: float,
        dissolved_oxygen: float,
        fecal_coliform: float,
        conductivity: float,
    ) -> tuple[SensorReading, PredictionResult]:
        reading = manual_reading(
            self.location,
            self.rng,
            ph=ph,
            bod=bod,
            dissolved_oxygen=dissolved_oxygen,
            fecal_coliform=fecal_coliform,
            conductivity=conductivity,
            category=self.category,
        )
        return reading, self.run(reading)


def build_session(config: Settings) -> MonitoringSession:
    rng = np.random.default_rng(config.SIMULATION_SEED)
    pipeline = PredictionPipeline(
        policy=get_policy(config.SCORING_POLICY, rng),
        provider=build_provider(config),
        history=History(capacity=config.HISTORY_CAPACITY),
        timeout_s=config.NARRATIVE_TIMEOUT_S,
        log_sink=store.log_prediction,
    )
    return MonitoringSession(pipeline=pipeline, simulator=RollingSimulator(rng), rng=rng)
