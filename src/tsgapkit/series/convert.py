"""pandas interop for series.

Frames use the same column names everywhere: ``ds`` (timestamp), ``y``
(value, NaN where missing), ``flag`` and ``duration``.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.series.access import SeriesAccess
from tsgapkit.series.irregular import IrregularSeries
from tsgapkit.series.missing import MissingPolicy
from tsgapkit.series.regular import RegularSeries
from tsgapkit.time import TimeInterval, parse_interval

FRAME_COLUMNS = ["ds", "y", "flag", "duration"]


def to_frame(series: SeriesAccess, start: Any = None, end: Any = None) -> pd.DataFrame:
    """Return the series as a DataFrame ``[ds, y, flag, duration]``.

    Missing values are reported as NaN whatever the series sentinel is.
    """
    rows = []
    for date in series.iter_dates(start, end):
        point = series.get_point(date)
        value = np.nan if series.is_missing(point.value) else point.value
        rows.append((point.date, value, point.flag, point.duration))
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["y"] = df["y"].astype(float)
    df["duration"] = df["duration"].astype(int)
    return df


def _columns(data: pd.Series | pd.DataFrame) -> tuple[pd.DatetimeIndex, np.ndarray, list[str] | None]:
    """Split input data into sorted dates, values and (optional) flags."""
    if isinstance(data, pd.DataFrame):
        missing = [c for c in ("ds", "y") if c not in data.columns]
        if missing:
            raise EInvalidInput(
                f"Missing required columns: {missing}",
                context={"required": ["ds", "y"], "found": list(data.columns)},
            )
        frame = data.assign(ds=pd.to_datetime(data["ds"])).sort_values("ds", kind="stable")
        dates = pd.DatetimeIndex(frame["ds"])
        values = frame["y"].to_numpy(dtype=float)
        flags = None
        if "flag" in frame.columns:
            flags = ["" if pd.isna(f) else str(f) for f in frame["flag"]]
        return dates, values, flags
    if not isinstance(data.index, pd.DatetimeIndex):
        raise EInvalidInput(
            "Series must have a DatetimeIndex.",
            context={"index_type": type(data.index).__name__},
        )
    data = data.sort_index(kind="stable")
    return data.index, data.to_numpy(dtype=float), None


def regular_from_pandas(
    data: pd.Series | pd.DataFrame,
    interval: TimeInterval | str,
    missing: float | MissingPolicy = math.nan,
    name: str = "",
    units: str = "",
) -> RegularSeries:
    """Build a RegularSeries spanning the first to the last timestamp.

    Accepts a ``pd.Series`` with a DatetimeIndex or a frame with ``ds``/``y``
    (and optionally ``flag``) columns. Slots without a row stay missing.
    """
    dates, values, flags = _columns(data)
    if len(dates) == 0:
        raise EInvalidInput("Cannot build a series from empty data.")
    interval = parse_interval(interval)
    series = RegularSeries(
        interval,
        interval.floor(dates[0]),
        interval.floor(dates[-1]),
        missing=missing,
        name=name,
        units=units,
        flags=flags is not None,
    )
    for i, (ds, y) in enumerate(zip(dates, values)):
        if np.isnan(y):
            continue
        series.set(ds, float(y), "" if flags is None else flags[i])
    series.add_genesis(f"Created from pandas data ({len(dates)} rows)")
    return series


def irregular_from_pandas(
    data: pd.Series | pd.DataFrame,
    missing: float | MissingPolicy = math.nan,
    precision: TimeInterval | str = "Day",
    name: str = "",
    units: str = "",
) -> IrregularSeries:
    """Build an IrregularSeries with one point per row.

    Rows with a NaN value become points holding the missing sentinel.
    Duplicate timestamps keep the last row.
    """
    dates, values, flags = _columns(data)
    series = IrregularSeries(missing=missing, precision=precision, name=name, units=units)
    for i, (ds, y) in enumerate(zip(dates, values)):
        series.set(ds, None if np.isnan(y) else float(y), "" if flags is None else flags[i])
    series.add_genesis(f"Created from pandas data ({len(dates)} rows)")
    return series


__all__ = [
    "FRAME_COLUMNS",
    "irregular_from_pandas",
    "regular_from_pandas",
    "to_frame",
]
