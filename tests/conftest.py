"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the AQUAI test suite.
"""
import asyncio
import os
import time
import pytest
import numpy as np
from datetime import datetime, timezone

# Use in-memory SQLite for tests
os.environ.setdefault("DATABASE_URL", ":memory:")
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("GEMINI_API_KEY", "")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def location():
    from src.data.models import Location
    return Location(lat=28.6139, lng=77.209, name="Yamuna River - Delhi", state="Delhi")


@pytest.fixture
def safe_reading(now, location):
    """Clean river sample: every quantity inside its limits."""
    from src.data.models import SensorReading
    return SensorReading(
        id="STN-SAFE1",
        timestamp=now,
        ph=7.2,
        turbidity=1.0,
        tds=300.0,
        temperature=24.0,
        dissolved_oxygen=6.5,
        conductivity=450.0,
        bod=1.2,
        nitrate=2.0,
        fecal_coliform=450.0,
        total_coliform=1_200.0,
        location=location,
    )


@pytest.fixture
def critical_reading(now, location):
    """Sewage-contaminated sample: pH, DO, BOD and coliforms all out of limits."""
    from src.data.models import SensorReading
    return SensorReading(
        id="STN-CRIT1",
        timestamp=now,
        ph=8.9,
        turbidity=12.0,
        tds=900.0,
        temperature=31.0,
        dissolved_oxygen=2.1,
        conductivity=1_350.0,
        bod=12.5,
        nitrate=6.0,
        fecal_coliform=15_000.0,
        total_coliform=40_000.0,
        location=location,
    )


# ── Narrative provider stubs ──────────────────────────────────────────────────

class RaisingProvider:
    async def narrate(self, request):
        from src.narrative.contract import NarrativeServiceError
        raise NarrativeServiceError("service down")


class EmptyRisksProvider:
    async def narrate(self, request):
        from src.narrative.contract import NarrativeResponse
        return NarrativeResponse(ai_summary=f"Sample {request.station_id} reviewed.", disease_risks=[])


class EchoProvider:
    """Returns one disease risk and records every request it sees."""

    def __init__(self):
        self.requests = []

    async def narrate(self, request):
        from src.data.models import DiseaseRisk
        from src.narrative.contract import NarrativeResponse
        self.requests.append(request)
        return NarrativeResponse(
            ai_summary=f"Status {request.status.value}",
            disease_risks=[DiseaseRisk(disease="Dysentery", probability=0.42, description="Echo")],
            root_cause="Sewage inflow",
            counterfactual="Lower fecal coliform below 1000",
            policy_recommendation="Boil water",
        )


class SlowProvider:
    async def narrate(self, request):
        await asyncio.sleep(5)


class BlockingThreadProvider:
    """Blocks a worker thread the way the synchronous SDK call does."""

    def __init__(self, seconds: float = 1.5):
        self.seconds = seconds

    async def narrate(self, request):
        await asyncio.to_thread(time.sleep, self.seconds)


class DictProvider:
    """Hands back the raw camelCase payload instead of a response model."""

    async def narrate(self, request):
        return {"aiSummary": "ok", "diseaseRisks": []}


class NoneProvider:
    async def narrate(self, request):
        return None


@pytest.fixture
def raising_provider():
    return RaisingProvider()


@pytest.fixture
def empty_risks_provider():
    return EmptyRisksProvider()


@pytest.fixture
def echo_provider():
    return EchoProvider()


@pytest.fixture
def slow_provider():
    return SlowProvider()


@pytest.fixture
def blocking_provider():
    return BlockingThreadProvider()


@pytest.fixture
def dict_provider():
    return DictProvider()


@pytest.fixture
def none_provider():
    return NoneProvider()
