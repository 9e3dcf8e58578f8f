"""
src/data/store.py
─────────────────
SQLite field-log store.

Provides:
  - initialize_db()    : Create the logs table (idempotent)
  - insert_log()       : Append one log record, returns it with id + timestamp
  - log_prediction()   : Pipeline sink: reading + prediction → log record
  - get_logs()         : Most recent logs as a DataFrame
  - count_logs()       : Number of stored logs

Append-only and best-effort: nothing reads logs back into scoring.
Thread safety: uses check_same_thread=False + a module-level lock.
"""
from __future__ import annotations

import json
import sqlite3
import threading
from datetime import UTC, datetime

import pandas as pd

from config.settings import settings
from src.data.models import PredictionResult, SensorReading

_lock = threading.RLock()
_DB: sqlite3.Connection | None = None


# ── Connection ────────────────────────────────────────────────────────────────

def _get_conn() -> sqlite3.Connection:
    global _DB
    if _DB is None:
        _DB = sqlite3.connect(settings.DATABASE_URL, check_same_thread=False)
        _DB.row_factory = sqlite3.Row
    return _DB


def is_connected() -> bool:
    try:
        with _lock:
            _get_conn().execute("SELECT 1").fetchone()
    except sqlite3.Error:
        return False
    return True


# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_LOGS = """
CREATE TABLE IF NOT EXISTS water_logs (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    station_id  TEXT NOT NULL,
    location    TEXT NOT NULL,
    severity    REAL NOT NULL,
    status      TEXT NOT NULL,
    timestamp   TEXT NOT NULL,
    data        TEXT NOT NULL DEFAULT '{}'
);
CREATE INDEX IF NOT EXISTS idx_water_logs_ts ON water_logs (timestamp);
"""


def initialize_db() -> None:
    """Create tables. Safe to call multiple times."""
    conn = _get_conn()
    with _lock, conn:
        conn.executescript(_CREATE_LOGS)


# ── Public API ────────────────────────────────────────────────────────────────

def insert_log(record: dict) -> dict:
    """
    Persist one log record.

    Expects stationId, location, severity, status; optional timestamp
    (ISO string, defaults to now) and data (any JSON-serializable payload).
    Raises KeyError / ValueError on missing or invalid fields.
    """
    timestamp = record.get("timestamp") or datetime.now(tz=UTC).isoformat()
    row = (
        str(record["stationId"]),
        str(record["location"]),
        float(record["severity"]),
        str(record["status"]),
        str(timestamp),
        json.dumps(record.get("data") or {}),
    )
    initialize_db()
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            """INSERT INTO water_logs (station_id, location, severity, status, timestamp, data)
               VALUES (?,?,?,?,?,?)""",
            row,
        )
        log_id = cur.lastrowid

    return {
        "id": log_id,
        "stationId": row[0],
        "location": row[1],
        "severity": row[2],
        "status": row[3],
        "timestamp": row[4],
        "data": record.get("data") or {},
    }


def log_prediction(reading: SensorReading, result: PredictionResult) -> dict:
    return insert_log(
        {
            "stationId": reading.id,
            "location": reading.location.name,
            "severity": result.severity_score,
            "status": result.status.value,
            "timestamp": reading.timestamp.isoformat(),
            "data": {
                "reading": reading.model_dump(mode="json"),
                "bioHazard": result.bio_hazard_score,
                "reliability": result.reliability_index,
                "model": result.model_type,
            },
        }
    )


def get_logs(limit: int = 50) -> pd.DataFrame:
    """Fetch the most recent logs, newest first."""
    initialize_db()
    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(
            "SELECT * FROM water_logs ORDER BY id DESC LIMIT ?",
            conn,
            params=(limit,),
        )
    if not df.empty:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
    return df


def count_logs() -> int:
    initialize_db()
    conn = _get_conn()
    with _lock:
        return conn.execute("SELECT COUNT(*) FROM water_logs").fetchone()[0]
