"""
src/data/models.py
──────────────────
Pydantic v2 data models for sensor readings, predictions, and history entries.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from config.status import SafetyStatus
from config.water import WaterSourceCategory


class Location(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)
    name: str
    state: str | None = None


class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    timestamp: datetime
    ph: float = Field(ge=0.0, le=14.0)
    turbidity: float = Field(ge=0.0)              # NTU
    tds: float = Field(ge=0.0)                    # ppm
    temperature: float                            # °C
    dissolved_oxygen: float = Field(ge=0.0)       # mg/l
    conductivity: float = Field(ge=0.0)           # µmhos/cm
    bod: float = Field(ge=0.0)                    # mg/l
    nitrate: float = Field(ge=0.0)                # mg/l
    fecal_coliform: float = Field(ge=0.0)         # MPN/100ml
    total_coliform: float = Field(ge=0.0)         # MPN/100ml
    location: Location
    category: WaterSourceCategory = WaterSourceCategory.RIVER


class DiseaseRisk(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    disease: str
    probability: float = Field(ge=0.0, le=1.0)
    description: str


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    severity_score: float = Field(ge=0.0, le=100.0)
    bio_hazard_score: float | None = Field(default=None, ge=0.0, le=100.0)
    status: SafetyStatus
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    reliability_index: float = Field(ge=0.0, le=100.0)
    disease_risks: list[DiseaseRisk] = Field(default_factory=list)
    ai_summary: str
    root_cause: str = ""
    counterfactual: str = ""
    policy_recommendation: str = ""
    model_type: str
    narrative_fallback: bool = False


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    reading: SensorReading
    prediction: PredictionResult
