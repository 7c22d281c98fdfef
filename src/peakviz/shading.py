"""Night shading: 00:00-05:00 and 19:00-24:00 of every day, with a label."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd

from peakviz.config import (
    EVENING_START,
    HOURS_PER_DAY,
    INDEX_VARIANT,
    LABEL_COLOR,
    LABEL_NUDGE,
    LABEL_OFFSET_H,
    LABEL_SIZE,
    LABEL_TEXT,
    LABEL_Y,
    NIGHT_ALPHA,
    NIGHT_COLOR,
    NIGHT_HOURS,
)
from peakviz.layers import LayerStack, ShadingRect, TextLabel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NightWindows:
    day: int
    morning: tuple[Any, Any]
    night: tuple[Any, Any]
    label_x: Any


def day_start(day: int, variant: str, origin: pd.Timestamp | None = None) -> Any:
    """Start of ``day`` (1-based) as an Id or as a timestamp."""
    if variant == INDEX_VARIANT:
        return (day - 1) * HOURS_PER_DAY + 1
    if origin is None:
        raise ValueError("time layout needs an origin timestamp")
    return origin + pd.Timedelta(hours=(day - 1) * HOURS_PER_DAY)


def _offset(variant: str, hours: float) -> Any:
    return hours if variant == INDEX_VARIANT else pd.Timedelta(hours=hours)


def night_windows(day: int, variant: str, origin: pd.Timestamp | None = None) -> NightWindows:
    morning_begin = day_start(day, variant, origin)
    morning_end = morning_begin + _offset(variant, NIGHT_HOURS)
    night_begin = morning_begin + _offset(variant, EVENING_START)
    night_end = night_begin + _offset(variant, NIGHT_HOURS)
    if variant == INDEX_VARIANT:
        label_x = morning_begin - LABEL_NUDGE
    else:
        label_x = morning_begin + _offset(variant, LABEL_OFFSET_H)
    return NightWindows(
        day=day,
        morning=(morning_begin, morning_end),
        night=(night_begin, night_end),
        label_x=label_x,
    )


def add_night_shading(
    stack: LayerStack,
    total_days: int,
    variant: str,
    origin: pd.Timestamp | None = None,
) -> None:
    """Append two rectangles per day, then that day's label on top of them."""
    for day in range(1, total_days + 1):
        w = night_windows(day, variant, origin)
        stack.append(ShadingRect(day, *w.morning, color=NIGHT_COLOR, alpha=NIGHT_ALPHA))
        stack.append(ShadingRect(day, *w.night, color=NIGHT_COLOR, alpha=NIGHT_ALPHA))
        stack.append(
            TextLabel(
                day=day,
                x=w.label_x,
                y=LABEL_Y,
                text=LABEL_TEXT,
                color=LABEL_COLOR,
                rotation=-90,
                size=LABEL_SIZE,
            )
        )
    logger.debug("Added night shading", extra={"variant": variant, "day_count": total_days})
