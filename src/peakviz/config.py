from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

# ── Input ─────────────────────────────────────────────────────────────────
# Planning exports send dates as text like "Jan 1, 2019 01:01:01 PM".
TIME_FORMAT  = "%b %d, %Y %I:%M:%S %p"
HOUR_FORMAT  = "%I:%M %p"
TIME_COL     = "Time"
USAGE_COL    = "Usage"
ID_COL       = "Id"
HOUR_COL     = "Hour"

INDEX_VARIANT = "index"
TIME_VARIANT  = "time"
VARIANTS      = (INDEX_VARIANT, TIME_VARIANT)

# ── Calendar ──────────────────────────────────────────────────────────────
HOURS_PER_DAY = 24
DEFAULT_DAYS  = 8
NIGHT_HOURS   = 5      # 00:00-05:00 and 19:00-24:00
EVENING_START = 19
PEAK_START    = 14     # offsets from day start: [14h, 19h) is peak on weekdays
PEAK_END      = 19
WEEKEND_DAYS  = (5, 6)  # pandas dayofweek: Sat, Sun

# ── Y axis ────────────────────────────────────────────────────────────────
USAGE_LIMITS = (0, 10)
USAGE_UNIT   = "kW"

# ── Styling ───────────────────────────────────────────────────────────────
OFF_PEAK_COLOR = "#6CA6CD"   # skyblue3
PEAK_COLOR     = "#00CD66"   # springgreen3
BAND_ALPHA     = 0.8
NIGHT_COLOR    = "black"
NIGHT_ALPHA    = 0.08
LABEL_COLOR    = "#949494"   # gray58
LABEL_TEXT     = "night"
LABEL_Y        = 9.7
LABEL_SIZE     = 11
LABEL_NUDGE    = 0.2         # index variant: label sits just left of the rectangle
LABEL_OFFSET_H = 3           # time variant: label sits 3h into the morning window
LINE_COLOR     = "steelblue"
LINE_WIDTH     = 1.5
FIGSIZE        = (12, 5)

_LOG_LEVEL_ENV = "PEAKVIZ_LOG_LEVEL"
_DPI_ENV       = "PEAKVIZ_DPI"
_OUTPUT_ENV    = "PEAKVIZ_OUTPUT"
_STYLE_ENV     = "PEAKVIZ_STYLE"


@dataclass(frozen=True)
class Settings:
    log_level: str
    dpi: int
    output_path: Path
    style: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_dpi(default: int) -> int:
    value = os.getenv(_DPI_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_str_env(_LOG_LEVEL_ENV, "INFO").upper(),
        dpi=_read_dpi(150),
        output_path=Path(_read_str_env(_OUTPUT_ENV, "usage_chart.png")),
        style=_read_str_env(_STYLE_ENV, "white"),
    )
