from __future__ import annotations

import pandas as pd

from peakviz.layers import LayerStack
from peakviz.shading import add_night_shading, day_start, night_windows


def test_index_windows_for_first_and_third_day() -> None:
    first = night_windows(1, "index")
    third = night_windows(3, "index")

    assert first.morning == (1, 6)
    assert first.night == (20, 25)
    assert first.label_x == 0.8
    assert third.morning == (49, 54)
    assert third.night == (68, 73)


def test_time_windows_are_offsets_from_midnight() -> None:
    origin = pd.Timestamp("2019-09-18")

    w = night_windows(2, "time", origin)

    start = pd.Timestamp("2019-09-19")
    assert day_start(2, "time", origin) == start
    assert w.morning == (start, start + pd.Timedelta(hours=5))
    assert w.night == (start + pd.Timedelta(hours=19), start + pd.Timedelta(hours=24))
    assert w.label_x == start + pd.Timedelta(hours=3)


def test_shading_is_the_same_on_weekends() -> None:
    origin = pd.Timestamp("2019-09-18")
    saturday = night_windows(4, "time", origin)

    assert saturday.morning[0].dayofweek == 5
    assert saturday.morning[1] - saturday.morning[0] == pd.Timedelta(hours=5)
    assert saturday.night[0] - saturday.morning[0] == pd.Timedelta(hours=19)


def test_each_label_follows_its_rectangles() -> None:
    stack = LayerStack()

    add_night_shading(stack, 8, "index")

    assert len(stack) == 24
    for label in stack.of_kind("text"):
        rects = [r for r in stack.of_kind("rect") if r.day == label.day]
        assert len(rects) == 2
        assert all(stack.position(label) > stack.position(r) for r in rects)
        assert label.text == "night"
        assert label.rotation == -90
