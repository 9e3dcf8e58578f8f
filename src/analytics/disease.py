"""
src/analytics/disease.py
────────────────────────
Local disease-risk estimator and the AI-vs-local resolution step.

Each probability is an independent ratio of a biological indicator,
capped per disease:
  Cholera    min(0.99, 1.2 × fecal / 10000)
  Typhoid    min(0.95, fecal / 15000 + BOD / 50)
  Hepatitis  min(0.90, total coliform / 20000)
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from src.data.models import DiseaseRisk, SensorReading

logger = logging.getLogger(__name__)

CAPS = {
    "cholera": 0.99,
    "typhoid": 0.95,
    "hepatitis": 0.90,
}


def estimate_disease_risks(reading: SensorReading) -> list[DiseaseRisk]:
    """Exactly three risks, Cholera first."""
    fecal_factor = reading.fecal_coliform / 10_000.0

    return [
        DiseaseRisk(
            disease="Cholera Outbreak Risk",
            probability=min(CAPS["cholera"], fecal_factor * 1.2),
            description="Direct correlation with high Fecal Coliform counts and low Dissolved Oxygen.",
        ),
        DiseaseRisk(
            disease="Typhoid Fever",
            probability=min(CAPS["typhoid"], reading.fecal_coliform / 15_000.0 + reading.bod / 50.0),
            description="Risk high in domestic waste contaminated zones (high B.O.D).",
        ),
        DiseaseRisk(
            disease="Infectious Hepatitis",
            probability=min(CAPS["hepatitis"], reading.total_coliform / 20_000.0),
            description="Based on total biological contamination levels.",
        ),
    ]


def resolve_disease_risks(
    ai_risks: Sequence[DiseaseRisk] | None,
    reading: SensorReading,
) -> list[DiseaseRisk]:
    """Use the narrative service's risks unless it supplied none."""
    if ai_risks:
        return list(ai_risks)
    logger.info("No disease risks from narrative service for %s; using local estimate", reading.id)
    return estimate_disease_risks(reading)
