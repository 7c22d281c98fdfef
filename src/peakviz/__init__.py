"""Peak/off-peak shaded charts of hourly energy usage."""

from peakviz.chart import build_layers, count_days, render_chart, save_chart
from peakviz.errors import PeakvizError, ReadingsError
from peakviz.loader import load_readings, normalize_readings

__all__ = [
    "PeakvizError",
    "ReadingsError",
    "build_layers",
    "count_days",
    "load_readings",
    "normalize_readings",
    "render_chart",
    "save_chart",
]

__version__ = "0.1.0"
