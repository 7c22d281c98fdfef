"""
Load and normalise hourly usage readings.

Planning-tool exports arrive as spreadsheets with a text ``Time`` column
(``"Sep 18, 2019 01:00:00 AM"``), a numeric ``Usage`` column in kW and, for the
index layout, an ``Id`` column that is often typed as a category. Rows are not
guaranteed to be sorted.

The normalised frame has ``Id`` (1-based), ``Time``, ``Usage`` and ``Hour``
columns, sorted ascending, with a fresh ``RangeIndex``.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import pandas as pd

from peakviz.config import (
    HOUR_COL,
    HOUR_FORMAT,
    HOURS_PER_DAY,
    ID_COL,
    INDEX_VARIANT,
    TIME_COL,
    TIME_FORMAT,
    USAGE_COL,
    VARIANTS,
)
from peakviz.errors import ReadingsError

logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def read_table(path: str | Path, sheet: str | int | None = None) -> pd.DataFrame:
    """Read a spreadsheet or CSV export into a raw DataFrame."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in _EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0)
    elif suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise ReadingsError(f"Unsupported input type {suffix or '<none>'!r} for {path.name}")
    # Clean up column names
    df.columns = [str(c).strip() for c in df.columns]
    logger.debug("Read raw table", extra={"path": str(path), "row_count": len(df)})
    return df


def parse_time(series: pd.Series) -> pd.Series:
    """Parse export timestamps; rows that do not match become NaT."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return series
    return pd.to_datetime(series.astype(str).str.strip(), format=TIME_FORMAT, errors="coerce")


def id_to_numeric(series: pd.Series) -> pd.Series:
    """Convert an ``Id`` column to numbers by way of its text labels.

    Going through ``str`` matters for categoricals: their numeric view is the
    internal category code, not the label. Labels that are not numbers become
    NaN. The result is ``int64`` whenever every value is a whole number.
    """
    numeric = pd.to_numeric(series.astype(str).str.strip(), errors="coerce")
    if numeric.notna().all() and np.all(np.mod(numeric, 1) == 0):
        return numeric.astype("int64")
    return numeric


def _require_columns(df: pd.DataFrame, variant: str) -> None:
    required = [TIME_COL, USAGE_COL]
    if variant == INDEX_VARIANT:
        required.append(ID_COL)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ReadingsError(f"Missing required columns for {variant} layout", missing)


def normalize_readings(df: pd.DataFrame, variant: str = INDEX_VARIANT) -> pd.DataFrame:
    """Return a typed copy of ``df`` sorted by ``Id`` (index) or ``Time`` (time)."""
    if variant not in VARIANTS:
        raise ReadingsError(f"Unknown variant {variant!r}; expected one of {', '.join(VARIANTS)}")
    _require_columns(df, variant)

    out = df.copy()
    out[TIME_COL] = parse_time(out[TIME_COL])
    out[USAGE_COL] = pd.to_numeric(out[USAGE_COL], errors="coerce")

    if variant == INDEX_VARIANT:
        out[ID_COL] = id_to_numeric(out[ID_COL])
        out = out.sort_values(ID_COL, kind="mergesort")
    else:
        out = out.sort_values(TIME_COL, kind="mergesort")
        out[ID_COL] = range(1, len(out) + 1)
    out = out.reset_index(drop=True)

    if HOUR_COL in out.columns:
        out[HOUR_COL] = out[HOUR_COL].astype(str)
    else:
        out[HOUR_COL] = out[TIME_COL].dt.strftime(HOUR_FORMAT)

    return out[[ID_COL, TIME_COL, USAGE_COL, HOUR_COL]]


def count_days(readings: pd.DataFrame, variant: str = INDEX_VARIANT) -> int:
    """Number of days to shade.

    The index layout partitions rows in blocks of 24; the time layout counts
    calendar days from midnight of the first reading to the last reading.
    """
    if variant == INDEX_VARIANT:
        return math.ceil(len(readings) / HOURS_PER_DAY)
    times = readings[TIME_COL].dropna()
    if times.empty:
        return 0
    span = times.max() - times.min().normalize()
    return int(span // pd.Timedelta(hours=HOURS_PER_DAY)) + 1


def _day_counts(readings: pd.DataFrame, variant: str) -> pd.Series:
    if variant == INDEX_VARIANT:
        ids = readings[ID_COL].dropna()
        return ((ids - 1) // HOURS_PER_DAY + 1).astype("int64").value_counts().sort_index()
    return readings[TIME_COL].dropna().dt.normalize().value_counts().sort_index()


def validate_readings(
    readings: pd.DataFrame,
    variant: str = INDEX_VARIANT,
    total_days: int | None = None,
    strict: bool = False,
) -> list[str]:
    """Check the 24-readings-per-day contract.

    Problems are logged as warnings and returned. With ``strict`` they raise
    ``ReadingsError`` instead, since a chart built on them is mis-shaded.
    """
    problems: list[str] = []

    bad_times = int(readings[TIME_COL].isna().sum())
    if bad_times:
        problems.append(f"{bad_times} unparseable timestamp(s)")

    bad_usage = int(readings[USAGE_COL].isna().sum())
    if bad_usage:
        problems.append(f"{bad_usage} non-numeric usage value(s)")

    ids = readings[ID_COL]
    bad_ids = int(ids.isna().sum())
    if bad_ids:
        problems.append(f"{bad_ids} non-numeric Id value(s)")
    dupes = sorted(ids[ids.duplicated() & ids.notna()].unique().tolist())
    if dupes:
        problems.append(f"duplicate Id value(s): {dupes}")
    if variant == INDEX_VARIANT and not bad_ids and not dupes:
        expected = list(range(1, len(ids) + 1))
        if ids.tolist() != expected:
            problems.append("Id values are not a gap-free sequence starting at 1")

    days = total_days if total_days is not None else count_days(readings, variant)
    counts = _day_counts(readings, variant)
    if variant == INDEX_VARIANT:
        for day in range(1, days + 1):
            n = int(counts.get(day, 0))
            if n != HOURS_PER_DAY:
                problems.append(f"day {day} has {n} readings, expected {HOURS_PER_DAY}")
    elif not counts.empty:
        # calendar days from midnight of the first reading, empty days included
        origin = counts.index.min()
        for day in range(1, days + 1):
            day_start = origin + pd.Timedelta(hours=(day - 1) * HOURS_PER_DAY)
            n = int(counts.get(day_start, 0))
            if n != HOURS_PER_DAY:
                problems.append(f"{day_start:%Y-%m-%d} has {n} readings, expected {HOURS_PER_DAY}")

    if problems and strict:
        raise ReadingsError("Usage readings failed validation", problems)
    for problem in problems:
        logger.warning("Readings check failed", extra={"variant": variant, "reason": problem})
    return problems


def load_readings(
    path: str | Path,
    variant: str = INDEX_VARIANT,
    sheet: str | int | None = None,
    strict: bool = False,
    total_days: int | None = None,
) -> pd.DataFrame:
    """Read, normalise and check a usage export.

    ``total_days`` is the number of days that will be drawn; it defaults to
    the count derived from the data.
    """
    raw = read_table(path, sheet=sheet)
    readings = normalize_readings(raw, variant)
    validate_readings(readings, variant, total_days=total_days, strict=strict)
    logger.info(
        "Loaded usage readings",
        extra={"path": str(path), "variant": variant, "row_count": len(readings)},
    )
    return readings


__all__ = [
    "count_days",
    "id_to_numeric",
    "load_readings",
    "normalize_readings",
    "parse_time",
    "read_table",
    "validate_readings",
]
