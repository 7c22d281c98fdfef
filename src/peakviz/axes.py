from __future__ import annotations

import calendar
from dataclasses import dataclass

import matplotlib.dates as mdates
import pandas as pd
from matplotlib.axes import Axes

from peakviz.config import HOURS_PER_DAY, TIME_COL, USAGE_LIMITS, USAGE_UNIT

# Calendar month abbreviations, except September reads "Sept"
MONTH_LABELS = {i: ("Sept" if i == 9 else calendar.month_abbr[i]) for i in range(1, 13)}


@dataclass(frozen=True)
class AxisSpec:
    limits: tuple[float, float]
    ticks: tuple[float, ...]
    labels: tuple[str, ...]


def usage_axis() -> AxisSpec:
    """Fixed 0-10 kW axis with one zero-padded tick per unit ("03 kW")."""
    lo, hi = USAGE_LIMITS
    ticks = tuple(range(lo, hi + 1))
    return AxisSpec(
        limits=(lo, hi),
        ticks=ticks,
        labels=tuple(f"{t:02d} {USAGE_UNIT}" for t in ticks),
    )


def date_label(ts: pd.Timestamp) -> str:
    if pd.isna(ts):
        return ""
    return f"{MONTH_LABELS[ts.month]} {ts.day}"


def day_tick(day: int) -> int:
    """Tick position for a day in Id units; the first day ticks at the origin."""
    return 0 if day == 1 else (day - 1) * HOURS_PER_DAY + 1


def index_axis(readings: pd.DataFrame, total_days: int) -> AxisSpec:
    """Day ticks along the Id axis, labelled from each day's first timestamp."""
    ticks = []
    labels = []
    times = readings[TIME_COL]
    for day in range(1, total_days + 1):
        first_row = (day - 1) * HOURS_PER_DAY
        ts = times.iloc[first_row] if first_row < len(times) else pd.NaT
        ticks.append(day_tick(day))
        labels.append(date_label(ts))
    return AxisSpec(
        limits=(0, total_days * HOURS_PER_DAY),
        ticks=tuple(ticks),
        labels=tuple(labels),
    )


def apply_axis(ax: Axes, spec: AxisSpec, which: str) -> None:
    if which == "x":
        ax.set_xlim(*spec.limits)
        ax.set_xticks(list(spec.ticks))
        ax.set_xticklabels(list(spec.labels))
    elif which == "y":
        ax.set_ylim(*spec.limits)
        ax.set_yticks(list(spec.ticks))
        ax.set_yticklabels(list(spec.labels))
    else:
        raise ValueError(f"Unknown axis {which!r}")


def apply_time_axis(ax: Axes, readings: pd.DataFrame) -> None:
    """Continuous date axis over the data's span, one tick per day."""
    times = readings[TIME_COL].dropna()
    if not times.empty:
        ax.set_xlim(times.min(), times.max())
    ax.xaxis.set_major_locator(mdates.DayLocator())
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%m/%d"))
