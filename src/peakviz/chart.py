from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from peakviz.axes import apply_axis, apply_time_axis, index_axis, usage_axis
from peakviz.bands import add_peak_bands
from peakviz.config import (
    FIGSIZE,
    ID_COL,
    INDEX_VARIANT,
    LINE_COLOR,
    LINE_WIDTH,
    TIME_COL,
    USAGE_COL,
    VARIANTS,
    get_settings,
)
from peakviz.errors import ReadingsError
from peakviz.layers import LayerStack, UsageLine
from peakviz.loader import count_days
from peakviz.shading import add_night_shading

logger = logging.getLogger(__name__)

pd.plotting.register_matplotlib_converters()


def _origin(readings: pd.DataFrame, variant: str) -> pd.Timestamp | None:
    if variant == INDEX_VARIANT:
        return None
    times = readings[TIME_COL].dropna()
    if times.empty:
        raise ReadingsError("time layout needs at least one parseable timestamp")
    return times.min().normalize()


def build_layers(readings: pd.DataFrame, variant: str = INDEX_VARIANT,
                 total_days: int | None = None) -> LayerStack:
    """Assemble the chart's layers in paint order: shading, bands, line."""
    if variant not in VARIANTS:
        raise ReadingsError(f"Unknown variant {variant!r}; expected one of {', '.join(VARIANTS)}")
    days = total_days if total_days is not None else count_days(readings, variant)
    origin = _origin(readings, variant)
    key = ID_COL if variant == INDEX_VARIANT else TIME_COL

    stack = LayerStack()
    add_night_shading(stack, days, variant, origin)
    add_peak_bands(stack, readings, days, variant, origin)
    # Line goes on last so it sits above every band and rectangle
    stack.append(UsageLine(x=readings[key], y=readings[USAGE_COL], color=LINE_COLOR, width=LINE_WIDTH))

    logger.info("Built chart layers", extra={"variant": variant, "day_count": days, "layer_count": len(stack)})
    return stack


def render_chart(
    readings: pd.DataFrame,
    variant: str = INDEX_VARIANT,
    total_days: int | None = None,
    title: str | None = None,
) -> Figure:
    """Draw the shaded usage chart onto a new figure."""
    days = total_days if total_days is not None else count_days(readings, variant)
    stack = build_layers(readings, variant, days)

    sns.set_theme(style=get_settings().style)
    fig, ax = plt.subplots(figsize=FIGSIZE)
    stack.render(ax)

    apply_axis(ax, usage_axis(), "y")
    if variant == INDEX_VARIANT:
        apply_axis(ax, index_axis(readings, days), "x")
    else:
        apply_time_axis(ax, readings)
    ax.set_xlabel("")
    ax.set_ylabel("")
    if title:
        ax.set_title(title)

    fig.tight_layout()
    return fig


def save_chart(fig: Figure, path: str | Path, dpi: int | None = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi or get_settings().dpi, bbox_inches="tight")
    logger.info("Saved chart", extra={"path": str(path.resolve())})
    return path
