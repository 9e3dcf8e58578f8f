"""
src/analytics/calibration.py
────────────────────────────
Descriptive calibration statistics from uploaded monitoring spreadsheets.

Column headers are fuzzy-matched against synonyms for pH, BOD, fecal
coliform and dissolved oxygen. Means of the recognized columns produce
suggested scoring weights for display on the Dataset page. Advisory only:
the scorers never read these weights.
"""
from __future__ import annotations

import io
import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime

import pandas as pd
from pydantic import BaseModel

from config.water import WaterSourceCategory

logger = logging.getLogger(__name__)

# Synonym patterns per quantity, checked in this order
COLUMN_MAP: dict[str, list[re.Pattern]] = {
    "ph": [re.compile(p, re.IGNORECASE) for p in (r"ph", r"p\.h", r"acidity")],
    "bod": [
        re.compile(p, re.IGNORECASE)
        for p in (r"bod", r"b\.o\.d", r"biological", r"biochemical", r"oxygen demand")
    ],
    "fecal": [
        re.compile(p, re.IGNORECASE)
        for p in (r"fecal", r"coliform", r"fc", r"f\.c", r"bacteria", r"microbial")
    ],
    "do": [
        re.compile(p, re.IGNORECASE) for p in (r"do", r"d\.o", r"dissolved oxygen", r"oxygen")
    ],
}

DEFAULT_MEANS = {"ph": 7.0, "bod": 2.0}


class CalibrationError(ValueError):
    """Dataset cannot be calibrated (empty, unrecognized, or non-numeric)."""


class TrainingStats(BaseModel):
    ph_weight: float
    bod_weight: float
    fecal_weight: float
    do_weight: float
    data_points: int
    fidelity: float
    seasonal_variance: float
    last_trained: datetime
    mean_values: dict[str, float]
    virtual_path: str
    identified_columns: list[str]


def map_columns(columns: Iterable) -> dict[str, str]:
    """
    First header matching each quantity's synonyms, checked in COLUMN_MAP
    order. A header already claimed by an earlier quantity is not reused
    ("Oxygen Demand" is BOD, not DO), so one header never feeds two
    quantities even when it matches both synonym lists.
    """
    headers = [str(c) for c in columns]
    mapping: dict[str, str] = {}
    for quantity, patterns in COLUMN_MAP.items():
        for header in headers:
            if header in mapping.values():
                continue
            if any(p.search(header) for p in patterns):
                mapping[quantity] = header
                break
    return mapping


def calibrate(frame: pd.DataFrame, category: WaterSourceCategory) -> TrainingStats:
    if frame.empty:
        raise CalibrationError("Dataset is empty.")

    frame = frame.rename(columns=str)
    mapping = map_columns(frame.columns)
    if not mapping:
        preview = ", ".join(list(frame.columns)[:5])
        raise CalibrationError(f"Column Mapping Failed. Available columns: {preview}...")

    numeric = {
        quantity: pd.to_numeric(frame[mapping[quantity]], errors="coerce")
        for quantity in ("ph", "bod", "fecal")
        if quantity in mapping
    }
    if numeric:
        has_data = pd.concat(numeric.values(), axis=1).notna().any(axis=1)
        valid_rows = int(has_data.sum())
    else:
        valid_rows = 0
    if valid_rows == 0:
        raise CalibrationError("Numerical Parsing Error: Columns found but contain no numeric data.")

    means = {}
    for quantity, default in DEFAULT_MEANS.items():
        total = float(numeric[quantity].sum()) if quantity in numeric else 0.0
        means[quantity] = total / valid_rows or default

    drains = category == WaterSourceCategory.DRAINS
    folder = re.sub(r"\s", "_", category.value.lower())
    stats = TrainingStats(
        ph_weight=max(0.5, min(2.5, abs(means["ph"] - 7.0) * 1.5 + 1.0)),
        bod_weight=max(1.0, min(5.0, means["bod"] / 2.0 + 0.5)),
        fecal_weight=6.5 if drains else 3.2,
        do_weight=2.5,
        data_points=valid_rows,
        fidelity=min(99.9, 97.0 + valid_rows / 1000.0),
        seasonal_variance=0.45 if drains else 0.15,
        last_trained=datetime.now(tz=UTC),
        mean_values=means,
        virtual_path=f"assets/{folder}/",
        identified_columns=[mapping[q] for q in COLUMN_MAP if q in mapping],
    )
    logger.info("Calibrated %d rows (%s) from columns %s", valid_rows, category.value, stats.identified_columns)
    return stats


# ── Loading ───────────────────────────────────────────────────────────────────

def read_table(filename: str, payload: bytes) -> pd.DataFrame:
    """First sheet of an Excel workbook, or a CSV file."""
    buffer = io.BytesIO(payload)
    if filename.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(buffer, sheet_name=0)
    return pd.read_csv(buffer)


def calibrate_files(
    files: Iterable[tuple[str, bytes]],
    category: WaterSourceCategory,
) -> TrainingStats:
    frames = []
    for filename, payload in files:
        try:
            frames.append(read_table(filename, payload))
        except (ValueError, OSError) as e:
            raise CalibrationError(f"Could not read {filename}: {e}") from e
    if not frames:
        raise CalibrationError("Dataset is empty.")
    return calibrate(pd.concat(frames, ignore_index=True), category)


def calibrate_from_url(url: str, category: WaterSourceCategory) -> TrainingStats:
    try:
        if url.lower().endswith((".xlsx", ".xls")):
            frame = pd.read_excel(url, sheet_name=0)
        else:
            frame = pd.read_csv(url)
    except (ValueError, OSError) as e:
        raise CalibrationError("Dataset unreachable.") from e
    return calibrate(frame, category)
