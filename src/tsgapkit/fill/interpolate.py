"""Linear interpolation across gaps."""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import finish_fill, prepare_flags, require_series, resolve_window, write_fill
from tsgapkit.series.access import SeriesAccess, is_regular

logger = logging.getLogger(__name__)


def _positions(series: SeriesAccess, first: pd.Timestamp, last: pd.Timestamp) -> tuple[list[pd.Timestamp], list[float]]:
    """Dates to visit and the coordinate used to weight each one.

    Regular series visit their slots and weight by slot index, so month and
    year steps count as equal steps. Irregular series visit the precision
    grid anchored at ``first`` plus any stored point off that grid, weighted
    by elapsed seconds.
    """
    if is_regular(series):
        dates = list(series.iter_dates(first, last))
        return dates, [float(i) for i in range(len(dates))]

    grid = set(series.grid_interval.iter_dates(first, last))
    grid.update(series.iter_dates(first, last))
    dates = sorted(grid)
    return dates, [(date - first).total_seconds() for date in dates]


def fill_interpolate(
    series: SeriesAccess,
    max_gap: int = 0,
    start: Any = None,
    end: Any = None,
    flag: str = "",
) -> FillResult:
    """Fill gaps by linear interpolation between the known values around them.

    A gap is a run of missing slots with a known value on each side inside
    the window. Gaps touching the window edge, and gaps longer than
    ``max_gap`` slots when ``max_gap`` is non-zero, are left missing.

    On an irregular series the gap slots are the ``precision`` steps between
    the two known points; filling them inserts new points.

    Args:
        series: Series to fill in place
        max_gap: Largest number of consecutive missing slots to fill (0 = no limit)
        start: First date of the window (default: series start)
        end: Last date of the window (default: series end)
        flag: Flag merged into filled values

    Returns:
        FillResult with the number of values filled and left missing.

    Examples:
        >>> from tsgapkit.series import RegularSeries
        >>> ts = RegularSeries.from_values("Day", "2024-01-01", [10.0, None, None, 20.0])
        >>> fill_interpolate(ts).filled_count
        2
    """
    series = require_series(series)
    if max_gap < 0:
        raise EInvalidInput(f"max_gap must be non-negative, got {max_gap}", context={"max_gap": max_gap})
    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)

    dates, coords = _positions(series, first, last)
    values = [series.get(date) for date in dates]
    known = [not series.is_missing(value) for value in values]

    filled = 0
    skipped = 0
    i = 0
    n = len(dates)
    while i < n:
        if known[i]:
            i += 1
            continue
        gap_start = i
        while i < n and not known[i]:
            i += 1
        gap_end = i - 1
        width = gap_end - gap_start + 1

        if gap_start == 0 or i >= n:
            logger.debug("Gap %s - %s touches the window edge", dates[gap_start], dates[gap_end])
            skipped += width
            continue
        if max_gap and width > max_gap:
            logger.debug("Gap of %d slots exceeds max_gap=%d", width, max_gap)
            skipped += width
            continue

        before = gap_start - 1
        after = i
        span = coords[after] - coords[before]
        rise = values[after] - values[before]
        for k in range(gap_start, gap_end + 1):
            value = values[before] + rise * (coords[k] - coords[before]) / span
            filled += write_fill(series, dates[k], value, flag)

    return finish_fill(series, "interpolate", filled, skipped, first, last)


__all__ = ["fill_interpolate"]
