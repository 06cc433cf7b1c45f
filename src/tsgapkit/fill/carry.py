"""Carry-forward and constant fills."""

from __future__ import annotations

import logging
from typing import Any

from tsgapkit.core.config import Direction
from tsgapkit.core.errors import EInvalidInput
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import finish_fill, prepare_flags, require_series, resolve_window, write_fill
from tsgapkit.series.access import SeriesAccess

logger = logging.getLogger(__name__)


def fill_carry_forward(
    series: SeriesAccess,
    start: Any = None,
    end: Any = None,
    direction: Direction = "forward",
    flag: str = "",
) -> FillResult:
    """Replace missing values with the last known value in scan order.

    With ``direction="backward"`` the scan runs from ``end`` to ``start`` so
    later values are carried back. Slots before the first known value (in
    scan order) stay missing.

    Args:
        series: Series to fill in place
        start: First date of the window (default: series start)
        end: Last date of the window (default: series end)
        direction: ``"forward"`` or ``"backward"``
        flag: Flag merged into filled values

    Returns:
        FillResult with the number of values filled and left missing.
    """
    series = require_series(series)
    if direction not in ("forward", "backward"):
        raise EInvalidInput(f"Unknown fill direction {direction!r}", context={"direction": direction})
    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)

    dates = list(series.iter_dates(first, last))
    if direction == "backward":
        dates.reverse()

    filled = 0
    skipped = 0
    carried: float | None = None
    for date in dates:
        value = series.get(date)
        if not series.is_missing(value):
            carried = value
            continue
        if carried is None:
            skipped += 1
            continue
        filled += write_fill(series, date, carried, flag)

    return finish_fill(series, f"carry_{direction}", filled, skipped, first, last)


def fill_constant(
    series: SeriesAccess,
    value: float,
    start: Any = None,
    end: Any = None,
    flag: str = "",
) -> FillResult:
    """Replace every missing value in the window with ``value``."""
    series = require_series(series)
    if series.is_missing(value):
        raise EInvalidInput(
            "Constant fill value is itself a missing value.",
            context={"value": value, "missing": series.missing},
        )
    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)

    filled = 0
    for date in list(series.iter_dates(first, last)):
        if series.is_missing(series.get(date)):
            filled += write_fill(series, date, value, flag)

    return finish_fill(series, "constant", filled, 0, first, last)


__all__ = ["fill_carry_forward", "fill_constant"]
