"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


def _optional_int(raw: str) -> int | None:
    return int(raw) if raw.strip() else None


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Field-log store (SQLite path)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "aquai_logs.db")

    # Live sync interval in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "15000"))

    # Simulation (empty seed → fresh entropy on every start)
    SIMULATION_SEED: int | None = _optional_int(os.getenv("SIMULATION_SEED", ""))

    # Scoring
    SCORING_POLICY: str = os.getenv("SCORING_POLICY", "continuous_deviation")
    HISTORY_CAPACITY: int = int(os.getenv("HISTORY_CAPACITY", "30"))

    # Narrative service
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    NARRATIVE_TIMEOUT_S: float = float(os.getenv("NARRATIVE_TIMEOUT_S", "20"))


settings = Settings()
