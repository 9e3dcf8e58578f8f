"""
config/water.py
───────────────
Water source categories, regulatory limits, monitoring stations and
simulator channel definitions.

Regulatory limits follow the CPCB designated-best-use criteria:
  River / Ponds / Ground Water → bathing & drinking-source classes
  Drains / Medium-Mineral Rivers → relaxed discharge classes

Limits are display-only. The scorers in src/analytics never read them.
"""
from dataclasses import dataclass
from enum import Enum


class WaterSourceCategory(str, Enum):
    RIVER = "River"
    GROUND_WATER = "Ground Water"
    MED_MIN_RIVERS = "Med Min Rivers"
    PONDS_LAKES = "Ponds/Lakes"
    DRAINS = "Drains"


@dataclass(frozen=True)
class SourceLimits:
    ph: tuple[float, float]   # acceptable pH band
    bod: float                # mg/l
    tds: float                # ppm
    fecal: float              # MPN/100ml

    def breaches(self, *, ph: float, bod: float, tds: float, fecal: float) -> set[str]:
        """Names of the quantities outside this source's limits."""
        out = set()
        if not self.ph[0] <= ph <= self.ph[1]:
            out.add("ph")
        if bod > self.bod:
            out.add("bod")
        if tds > self.tds:
            out.add("tds")
        if fecal > self.fecal:
            out.add("fecal")
        return out


SOURCE_LIMITS: dict[str, SourceLimits] = {
    WaterSourceCategory.RIVER: SourceLimits(ph=(6.5, 8.5), bod=3.0, tds=500.0, fecal=500.0),
    WaterSourceCategory.GROUND_WATER: SourceLimits(ph=(6.5, 8.5), bod=1.0, tds=1_000.0, fecal=0.0),
    WaterSourceCategory.DRAINS: SourceLimits(ph=(5.5, 9.0), bod=30.0, tds=2_100.0, fecal=10_000.0),
    WaterSourceCategory.PONDS_LAKES: SourceLimits(ph=(6.5, 8.5), bod=5.0, tds=500.0, fecal=1_000.0),
    WaterSourceCategory.MED_MIN_RIVERS: SourceLimits(ph=(6.0, 9.0), bod=10.0, tds=1_500.0, fecal=2_500.0),
}


# ── Monitoring stations ───────────────────────────────────────────────────────
MOCK_LOCATIONS: list[dict] = [
    {"lat": 28.6139, "lng": 77.2090, "name": "Yamuna River - Nizamuddin, Delhi", "state": "Delhi"},
    {"lat": 26.8467, "lng": 80.9462, "name": "Gomti River - Lucknow", "state": "Uttar Pradesh"},
    {"lat": 25.3176, "lng": 83.0061, "name": "Ganga River - Varanasi", "state": "Uttar Pradesh"},
]


# ── Simulator channels ────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ChannelSpec:
    """Plausible range and random-walk volatility for one simulated quantity."""
    minimum: float
    maximum: float
    volatility: float = 0.05

    @property
    def midpoint(self) -> float:
        return (self.minimum + self.maximum) / 2.0


CHANNELS: dict[str, ChannelSpec] = {
    "ph": ChannelSpec(5.5, 9.5),
    "bod": ChannelSpec(0.5, 30.0, volatility=0.06),
    "fecal_coliform": ChannelSpec(50.0, 60_000.0, volatility=0.08),
    "tds": ChannelSpec(100.0, 2_000.0),
    "turbidity": ChannelSpec(0.0, 40.0, volatility=0.07),
    "dissolved_oxygen": ChannelSpec(1.0, 10.0),
    "nitrate": ChannelSpec(0.0, 20.0),
    "temperature": ChannelSpec(18.0, 35.0, volatility=0.02),
}

# Electrical conductivity (µmhos/cm) per ppm of TDS
TDS_TO_CONDUCTIVITY = 1.5

# Total coliform as a multiple of fecal coliform
TOTAL_COLIFORM_FACTOR = (1.5, 3.0)
