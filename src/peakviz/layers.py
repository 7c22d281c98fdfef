"""
Ordered draw layers.

A chart is a ``LayerStack``: layers are appended in paint order and rendered
with ``zorder`` increasing with their position, so a later layer always draws
above an earlier one. All layer zorders stay inside ``LAYER_ZORDERS``, below the
axis spines and ticks (2.5). Callers rely on two orderings:

* each day's ``"night"`` label is appended after both of its rectangles,
* the usage line is appended last.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

import pandas as pd
from matplotlib.axes import Axes

# open interval; spines and ticks draw at 2.5
LAYER_ZORDERS = (1.0, 2.0)


@dataclass(frozen=True)
class ShadingRect:
    """Full-height translucent rectangle over ``[start, end]`` on the x axis."""

    day: int
    start: Any
    end: Any
    color: str
    alpha: float
    kind: str = field(default="rect", init=False)

    def draw(self, ax: Axes, zorder: float) -> None:
        ax.axvspan(self.start, self.end, ymin=0, ymax=1, color=self.color,
                   alpha=self.alpha, linewidth=0, zorder=zorder)


@dataclass(frozen=True)
class TextLabel:
    day: int
    x: Any
    y: float
    text: str
    color: str
    rotation: float
    size: float
    kind: str = field(default="text", init=False)

    def draw(self, ax: Axes, zorder: float) -> None:
        ax.text(self.x, self.y, self.text, color=self.color, rotation=self.rotation,
                fontsize=self.size, ha="left", va="top", zorder=zorder)


@dataclass(frozen=True, eq=False)
class Band:
    """Area between the usage values and a zero baseline for one slice of a day.

    ``lower``/``upper`` are the inclusive bounds the slice was selected with, in
    x-axis units (Id or timestamp).
    """

    day: int
    role: str
    lower: Any
    upper: Any
    x: pd.Series
    y: pd.Series
    color: str
    alpha: float
    kind: str = field(default="band", init=False)

    def draw(self, ax: Axes, zorder: float) -> None:
        ax.fill_between(self.x, 0, self.y, color=self.color, alpha=self.alpha,
                        linewidth=0, zorder=zorder)


@dataclass(frozen=True, eq=False)
class UsageLine:
    x: pd.Series
    y: pd.Series
    color: str
    width: float
    kind: str = field(default="line", init=False)

    def draw(self, ax: Axes, zorder: float) -> None:
        ax.plot(self.x, self.y, color=self.color, linewidth=self.width, zorder=zorder)


class LayerStack:
    """Append-only list of layers; position is paint order."""

    def __init__(self) -> None:
        self._layers: list[Any] = []

    def append(self, layer: Any) -> int:
        self._layers.append(layer)
        return len(self._layers) - 1

    def position(self, layer: Any) -> int:
        for i, candidate in enumerate(self._layers):
            if candidate is layer:
                return i
        raise ValueError(f"{layer!r} is not in this stack")

    def of_kind(self, kind: str) -> list[Any]:
        return [layer for layer in self._layers if layer.kind == kind]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __getitem__(self, i: int) -> Any:
        return self._layers[i]

    def zorder(self, position: int) -> float:
        lo, hi = LAYER_ZORDERS
        return lo + (hi - lo) * (position + 1) / (len(self._layers) + 1)

    def render(self, ax: Axes) -> None:
        # ticks sit with the spines at 2.5, above every layer
        ax.set_axisbelow(False)
        for i, layer in enumerate(self._layers):
            layer.draw(ax, zorder=self.zorder(i))
