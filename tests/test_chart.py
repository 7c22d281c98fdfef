from __future__ import annotations

import logging

import pandas as pd
import pytest

from peakviz.axes import apply_axis, date_label, day_tick, index_axis, usage_axis
from peakviz.chart import build_layers, render_chart, save_chart
from peakviz.errors import ReadingsError
from peakviz.layers import LayerStack
from peakviz.loader import normalize_readings


@pytest.fixture()
def readings(export: pd.DataFrame) -> pd.DataFrame:
    return normalize_readings(export)


def test_layer_order_is_shading_bands_line(readings: pd.DataFrame) -> None:
    stack = build_layers(readings)

    kinds = [layer.kind for layer in stack]
    assert len(stack) == 24 + 20 + 1
    assert kinds[-1] == "line"
    assert kinds.count("line") == 1
    last_shading = max(i for i, k in enumerate(kinds) if k in ("rect", "text"))
    first_band = kinds.index("band")
    assert last_shading < first_band


def test_line_is_drawn_above_everything(readings: pd.DataFrame) -> None:
    fig = render_chart(readings)
    ax = fig.axes[0]

    line_z = ax.lines[-1].get_zorder()
    others = [a.get_zorder() for a in ax.patches + ax.collections + ax.texts]
    assert others
    assert line_z > max(others)


def test_labels_render_above_rectangles(readings: pd.DataFrame) -> None:
    fig = render_chart(readings)
    ax = fig.axes[0]

    label_z = [t.get_zorder() for t in ax.texts if t.get_text() == "night"]
    rect_z = [p.get_zorder() for p in ax.patches]
    assert len(label_z) == 8
    assert len(rect_z) == 16
    # each day is morning rectangle, night rectangle, label
    for day, z in enumerate(label_z):
        assert z > rect_z[2 * day + 1] > rect_z[2 * day]


def test_layers_stay_below_the_axis_frame(readings: pd.DataFrame) -> None:
    fig = render_chart(readings)
    ax = fig.axes[0]

    layer_z = [a.get_zorder() for a in ax.patches + ax.collections + ax.texts + ax.lines]
    frame_z = min(spine.get_zorder() for spine in ax.spines.values())
    assert max(layer_z) < frame_z
    assert max(layer_z) < ax.xaxis.get_zorder()


def test_usage_axis_labels() -> None:
    spec = usage_axis()

    assert spec.limits == (0, 10)
    assert spec.ticks == tuple(range(11))
    assert spec.labels[3] == "03 kW"
    assert spec.labels[-1] == "10 kW"


def test_index_axis_labels_come_from_timestamps(readings: pd.DataFrame) -> None:
    spec = index_axis(readings, 8)

    assert spec.limits == (0, 192)
    assert spec.ticks == (0, 25, 49, 73, 97, 121, 145, 169)
    assert spec.labels[0] == "Sept 18"
    assert dict(zip(spec.ticks, spec.labels))[25] == "Sept 19"
    assert spec.labels[-1] == "Sept 25"


def test_rendered_ticks(readings: pd.DataFrame) -> None:
    fig = render_chart(readings, title="Usage")
    ax = fig.axes[0]
    fig.canvas.draw()

    xlabels = dict(zip(ax.get_xticks(), [t.get_text() for t in ax.get_xticklabels()]))
    assert xlabels[25] == "Sept 19"
    assert [t.get_text() for t in ax.get_yticklabels()][3] == "03 kW"
    assert ax.get_xlim() == (0, 192)
    assert ax.get_title() == "Usage"


def test_date_label_edge_cases() -> None:
    assert date_label(pd.Timestamp("2019-10-01")) == "Oct 1"
    assert date_label(pd.NaT) == ""
    assert day_tick(1) == 0
    assert day_tick(2) == 25


def test_apply_axis_rejects_unknown_axis(readings: pd.DataFrame) -> None:
    fig = render_chart(readings)

    with pytest.raises(ValueError):
        apply_axis(fig.axes[0], usage_axis(), "z")


def test_time_layout_renders(export: pd.DataFrame) -> None:
    by_time = normalize_readings(export.drop(columns=["Id"]), "time")

    stack = build_layers(by_time, "time")
    fig = render_chart(by_time, "time")

    assert isinstance(stack, LayerStack)
    assert len(stack.of_kind("text")) == 8
    assert len(stack.of_kind("band")) == 20
    assert len(fig.axes[0].texts) == 8


def test_time_layout_needs_a_timestamp() -> None:
    empty = pd.DataFrame({"Id": [1], "Time": [pd.NaT], "Usage": [1.0], "Hour": ["nan"]})

    with pytest.raises(ReadingsError):
        build_layers(empty, "time", total_days=1)


def test_explicit_day_count_limits_layers(readings: pd.DataFrame) -> None:
    stack = build_layers(readings, total_days=2)

    assert len(stack.of_kind("rect")) == 4
    assert len(stack.of_kind("band")) == 6


def test_save_chart_writes_png(tmp_path, readings: pd.DataFrame) -> None:
    fig = render_chart(readings)

    saved = save_chart(fig, tmp_path / "figs" / "usage.png", dpi=50)

    assert saved.exists()
    assert saved.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_build_layers_logs_day_count(readings: pd.DataFrame, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="peakviz.chart"):
        build_layers(readings, total_days=3)

    (record,) = [r for r in caplog.records if r.name == "peakviz.chart"]
    assert record.day_count == 3
    assert not hasattr(record, "day")
