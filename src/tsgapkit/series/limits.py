"""Aggregate statistics (data limits) for a series.

Series memoize a :class:`SeriesLimits` and recompute it through
:func:`compute_limits` only when their dirty flag is set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from tsgapkit.series.access import SeriesAccess


@dataclass(frozen=True)
class SeriesLimits:
    """Summary statistics over the non-missing values of a series.

    Attributes:
        count: Number of non-missing values
        missing_count: Number of missing slots visited
        min_value: Minimum value (None if no data)
        max_value: Maximum value (None if no data)
        mean: Mean value (None if no data)
        total: Sum of values (None if no data)
        min_date: Date of the first occurrence of the minimum
        max_date: Date of the first occurrence of the maximum
        first_date: First date with a non-missing value
        last_date: Last date with a non-missing value
    """

    count: int
    missing_count: int
    min_value: float | None = None
    max_value: float | None = None
    mean: float | None = None
    total: float | None = None
    min_date: pd.Timestamp | None = None
    max_date: pd.Timestamp | None = None
    first_date: pd.Timestamp | None = None
    last_date: pd.Timestamp | None = None

    @property
    def found(self) -> bool:
        return self.count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "missing_count": self.missing_count,
            "min": self.min_value,
            "max": self.max_value,
            "mean": self.mean,
            "sum": self.total,
            "min_date": self.min_date,
            "max_date": self.max_date,
            "first_date": self.first_date,
            "last_date": self.last_date,
        }


def compute_limits(
    series: SeriesAccess,
    start: Any = None,
    end: Any = None,
) -> SeriesLimits:
    """Compute data limits for a series over an optional window.

    Args:
        series: Series to analyze
        start: First date to include (default: series start)
        end: Last date to include (default: series end)

    Returns:
        SeriesLimits for the non-missing values in the window
    """
    dates: list[pd.Timestamp] = []
    values: list[float] = []
    missing_count = 0

    for date in series.iter_dates(start, end):
        value = series.get(date)
        if series.is_missing(value):
            missing_count += 1
            continue
        dates.append(date)
        values.append(value)

    if not values:
        return SeriesLimits(count=0, missing_count=missing_count)

    arr = np.asarray(values, dtype=float)
    imin = int(np.argmin(arr))
    imax = int(np.argmax(arr))
    total = float(arr.sum())

    return SeriesLimits(
        count=len(values),
        missing_count=missing_count,
        min_value=float(arr[imin]),
        max_value=float(arr[imax]),
        mean=total / len(values),
        total=total,
        min_date=dates[imin],
        max_date=dates[imax],
        first_date=dates[0],
        last_date=dates[-1],
    )


__all__ = ["SeriesLimits", "compute_limits"]
