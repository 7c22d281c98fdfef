"""
Peak / off-peak colour bands under the usage line.

Each day is split by offset from its start: ``[0h, 14h]`` off-peak,
``[14h, 19h]`` peak and ``[19h, 24h]`` off-peak; weekends are one off-peak
band. Every band is a separate slice of the readings filled down to zero, so
the bands only look like shading under the line.

Slices are selected inclusively on both ends, so neighbouring bands share
their boundary reading.
"""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from peakviz.config import (
    BAND_ALPHA,
    HOURS_PER_DAY,
    ID_COL,
    INDEX_VARIANT,
    OFF_PEAK_COLOR,
    PEAK_COLOR,
    PEAK_END,
    PEAK_START,
    TIME_COL,
    USAGE_COL,
    WEEKEND_DAYS,
)
from peakviz.layers import Band, LayerStack
from peakviz.shading import day_start

logger = logging.getLogger(__name__)

OFF_PEAK = "off-peak"
PEAK = "peak"
ROLE_COLORS = {OFF_PEAK: OFF_PEAK_COLOR, PEAK: PEAK_COLOR}


def is_weekend(ts: pd.Timestamp) -> bool:
    if pd.isna(ts):
        return False
    return ts.dayofweek in WEEKEND_DAYS


def day_segments(day: int, weekend: bool, variant: str,
                 origin: pd.Timestamp | None = None) -> list[tuple[str, Any, Any]]:
    """(role, lower, upper) bounds for one day's bands, in chronological order."""
    start = day_start(day, variant, origin)

    def at(hours: int) -> Any:
        if variant == INDEX_VARIANT:
            return start + hours
        return start + pd.Timedelta(hours=hours)

    if weekend:
        return [(OFF_PEAK, start, at(HOURS_PER_DAY))]
    return [
        (OFF_PEAK, start, at(PEAK_START)),
        (PEAK, at(PEAK_START), at(PEAK_END)),
        (OFF_PEAK, at(PEAK_END), at(HOURS_PER_DAY)),
    ]


def select_segment(readings: pd.DataFrame, lower: Any, upper: Any, key: str) -> pd.DataFrame:
    """Rows whose ``key`` falls in ``[lower, upper]``."""
    column = readings[key]
    return readings[(column >= lower) & (column <= upper)]


def _first_timestamp(readings: pd.DataFrame, day: int, variant: str,
                     origin: pd.Timestamp | None) -> pd.Timestamp:
    if variant == INDEX_VARIANT:
        row = (day - 1) * HOURS_PER_DAY
        return readings[TIME_COL].iloc[row] if row < len(readings) else pd.NaT
    return day_start(day, variant, origin)


def add_peak_bands(
    stack: LayerStack,
    readings: pd.DataFrame,
    total_days: int,
    variant: str,
    origin: pd.Timestamp | None = None,
) -> None:
    """Append each day's bands, days in order and bands chronological within a day."""
    key = ID_COL if variant == INDEX_VARIANT else TIME_COL
    for day in range(1, total_days + 1):
        weekend = is_weekend(_first_timestamp(readings, day, variant, origin))
        for role, lower, upper in day_segments(day, weekend, variant, origin):
            subset = select_segment(readings, lower, upper, key)
            stack.append(
                Band(
                    day=day,
                    role=role,
                    lower=lower,
                    upper=upper,
                    x=subset[key],
                    y=subset[USAGE_COL],
                    color=ROLE_COLORS[role],
                    alpha=BAND_ALPHA,
                )
            )
        logger.debug("Added peak bands", extra={"day": day, "reason": "weekend" if weekend else "weekday"})
