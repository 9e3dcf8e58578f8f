"""
src/narrative/contract.py
─────────────────────────
Typed request/response contract for the narrative service and the
capability interface every provider implements.

The service sees the reading plus the locally computed scores and returns
human-readable text and (optionally) up to three disease risks. Providers
raise NarrativeServiceError on any failure; the pipeline substitutes
fallback_narrative() and never lets the error reach its caller.
"""
from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.status import SafetyStatus
from src.data.models import DiseaseRisk, SensorReading

MAX_AI_RISKS = 3

FALLBACK_SUMMARY = (
    "The system detected critical biological contamination. "
    "Immediate boil-water advisory recommended."
)


class NarrativeServiceError(RuntimeError):
    """Narrative provider failed: network, SDK, or malformed response."""


class NarrativeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    station_id: str
    location_name: str
    category: str
    ph: float
    turbidity: float
    tds: float
    temperature: float
    dissolved_oxygen: float
    conductivity: float
    bod: float
    nitrate: float
    fecal_coliform: float
    total_coliform: float
    severity_score: float
    bio_hazard_score: float | None
    status: SafetyStatus
    confidence: float | None
    reliability_index: float

    @classmethod
    def from_scores(
        cls,
        reading: SensorReading,
        *,
        severity: float,
        bio_hazard: float | None,
        status: SafetyStatus,
        confidence: float | None,
        reliability: float,
    ) -> NarrativeRequest:
        return cls(
            station_id=reading.id,
            location_name=reading.location.name,
            category=reading.category.value,
            ph=reading.ph,
            turbidity=reading.turbidity,
            tds=reading.tds,
            temperature=reading.temperature,
            dissolved_oxygen=reading.dissolved_oxygen,
            conductivity=reading.conductivity,
            bod=reading.bod,
            nitrate=reading.nitrate,
            fecal_coliform=reading.fecal_coliform,
            total_coliform=reading.total_coliform,
            severity_score=severity,
            bio_hazard_score=bio_hazard,
            status=status,
            confidence=confidence,
            reliability_index=reliability,
        )


class NarrativeResponse(BaseModel):
    """Service output. Accepts the camelCase keys the model is prompted with."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ai_summary: str = Field(alias="aiSummary")
    disease_risks: list[DiseaseRisk] = Field(default_factory=list, alias="diseaseRisks")
    root_cause: str = Field(default="", alias="rootCause")
    counterfactual: str = ""
    policy_recommendation: str = Field(default="", alias="policyRecommendation")

    @field_validator("disease_risks")
    @classmethod
    def _at_most_three(cls, risks: list[DiseaseRisk]) -> list[DiseaseRisk]:
        return risks[:MAX_AI_RISKS]


class NarrativeProvider(Protocol):
    async def narrate(self, request: NarrativeRequest) -> NarrativeResponse: ...


def fallback_narrative() -> NarrativeResponse:
    """Safe default used whenever the service is unavailable."""
    return NarrativeResponse(
        ai_summary=FALLBACK_SUMMARY,
        disease_risks=[],
        root_cause="Narrative service unavailable; diagnosis based on local sensor scoring only.",
        counterfactual="Not available without the narrative service.",
        policy_recommendation="Issue a precautionary boil-water advisory and schedule manual sampling.",
    )
