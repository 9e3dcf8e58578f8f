"""
src/pipeline.py
───────────────
Prediction pipeline: reading → scores → tier → narrative → history.

Sequence for one reading:
  1. severity                 (policy)
  2. bio-hazard               (policy; None under threshold_additive)
  3. safety tier              (policy)
  4. confidence               (reading + severity)
  5. reliability              (history before this reading)
  6. narrative                (external, bounded by timeout_s)
  7. disease risks            (AI list, else local estimate)
  8. history append + optional log sink

Steps 1–5 and 7 are synchronous. A narrative failure or timeout is caught
once, logged, and replaced by fallback_narrative(); callers of process()
always receive a complete PredictionResult.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from src.analytics.classifier import estimate_confidence
from src.analytics.disease import resolve_disease_risks
from src.analytics.reliability import reliability_index
from src.analytics.scoring import ScoringPolicy
from src.data.history import History
from src.data.models import PredictionResult, SensorReading
from src.narrative.contract import (
    NarrativeProvider,
    NarrativeRequest,
    NarrativeResponse,
    fallback_narrative,
)

logger = logging.getLogger(__name__)

LogSink = Callable[[SensorReading, PredictionResult], object]

DEFAULT_TIMEOUT_S = 20.0


class PredictionPipeline:
    def __init__(
        self,
        policy: ScoringPolicy,
        provider: NarrativeProvider | None,
        history: History,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        log_sink: LogSink | None = None,
    ) -> None:
        self.policy = policy
        self.provider = provider
        self.history = history
        self.timeout_s = timeout_s
        self.log_sink = log_sink

    async def process(self, reading: SensorReading) -> PredictionResult:
        severity = self.policy.severity(reading)
        bio_hazard = self.policy.bio_hazard(reading)
        status = self.policy.classify(severity, reading)
        confidence = estimate_confidence(reading, severity)
        reliability = reliability_index(self.history.entries())

        request = NarrativeRequest.from_scores(
            reading,
            severity=severity,
            bio_hazard=bio_hazard,
            status=status,
            confidence=confidence,
            reliability=reliability,
        )
        narrative, used_fallback = await self._narrate(request)

        result = PredictionResult(
            severity_score=round(severity, 2),
            bio_hazard_score=round(bio_hazard, 2) if bio_hazard is not None else None,
            status=status,
            confidence=confidence,
            reliability_index=reliability,
            disease_risks=resolve_disease_risks(narrative.disease_risks, reading),
            ai_summary=narrative.ai_summary,
            root_cause=narrative.root_cause,
            counterfactual=narrative.counterfactual,
            policy_recommendation=narrative.policy_recommendation,
            model_type=self.policy.name,
            narrative_fallback=used_fallback,
        )

        self.history.append(reading, result)
        self._forward(reading, result)
        return result

    async def _narrate(self, request: NarrativeRequest) -> tuple[NarrativeResponse, bool]:
        if self.provider is None:
            return fallback_narrative(), True
        try:
            response = await asyncio.wait_for(self.provider.narrate(request), timeout=self.timeout_s)
            # Providers may hand back a camelCase dict or an arbitrary object
            response = NarrativeResponse.model_validate(response)
        except TimeoutError:
            logger.warning("Narrative service timed out after %.1fs for %s", self.timeout_s, request.station_id)
            return fallback_narrative(), True
        except Exception as e:
            logger.warning("Narrative service failed for %s: %s", request.station_id, e)
            return fallback_narrative(), True
        return response, False

    def _forward(self, reading: SensorReading, result: PredictionResult) -> None:
        if self.log_sink is None:
            return
        try:
            self.log_sink(reading, result)
        except Exception as e:
            logger.warning("Field log write failed for %s: %s", reading.id, e)
