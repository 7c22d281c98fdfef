from __future__ import annotations

import matplotlib

matplotlib.use("agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from peakviz.config import TIME_FORMAT, get_settings  # noqa: E402
from peakviz.logging_config import reset_logging  # noqa: E402

START = pd.Timestamp("2019-09-18")  # a Wednesday


def make_export(days: int = 8, start: pd.Timestamp = START, seed: int = 7) -> pd.DataFrame:
    """Shuffled export with text timestamps and a categorical Id column."""
    n = days * 24
    times = pd.date_range(start, periods=n, freq="h")
    rng = np.random.default_rng(seed)
    df = pd.DataFrame(
        {
            "Id": pd.Categorical([str(i) for i in range(1, n + 1)]),
            "Time": times.strftime(TIME_FORMAT),
            "Usage": rng.uniform(0.5, 9.0, size=n).round(2),
        }
    )
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


@pytest.fixture()
def export() -> pd.DataFrame:
    return make_export()


@pytest.fixture(autouse=True)
def _reset_state():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_logging()
    plt.close("all")
