"""Ratio (prorate) fill against a correlated independent series.

Two factor policies are supported:

* ``"nearest"``: a running ratio ``target / independent`` is updated at
  every date where both series have data, and each missing target value
  becomes ``independent * ratio`` using the most recent ratio in scan order.
* ``"average"``: one ratio is averaged over an analysis window and applied to
  every missing value in the fill window.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from tsgapkit.core.config import Direction, Divisor, FactorMode, SeedMode
from tsgapkit.core.errors import EInvalidInput
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import (
    check_same_interval,
    finish_fill,
    prepare_flags,
    require_series,
    resolve_window,
    write_fill,
)
from tsgapkit.series.access import SeriesAccess

logger = logging.getLogger(__name__)


def parse_seed(seed_value: float | str | None) -> float:
    """Return the seed as a float.

    Raises:
        EInvalidInput: If the seed is absent or not a number.
    """
    if seed_value is None:
        raise EInvalidInput("A seed value is required for seed_mode='value'.")
    try:
        seed = float(seed_value)
    except (TypeError, ValueError) as exc:
        raise EInvalidInput(
            f"Cannot parse seed value {seed_value!r} as a number.",
            context={"seed_value": repr(seed_value)},
        ) from exc
    if np.isnan(seed):
        raise EInvalidInput("Seed value must not be NaN.", context={"seed_value": repr(seed_value)})
    return seed


def _known(series: SeriesAccess, date: pd.Timestamp) -> float | None:
    value = series.get(date)
    return None if series.is_missing(value) else value


def _seed_ratio(
    target: SeriesAccess,
    independent: SeriesAccess,
    dates: list[pd.Timestamp],
    seed_mode: SeedMode,
    seed_value: float | str | None,
) -> float | None:
    if seed_mode == "none":
        return None

    if seed_mode == "value":
        seed = parse_seed(seed_value)
        for date in dates:
            x = _known(independent, date)
            if x is None:
                continue
            if x == 0:
                logger.warning("First independent value at %s is zero, seed ratio not set", date)
                return None
            return seed / x
        return None

    ordered = dates if seed_mode == "search_forward" else list(reversed(dates))
    for date in ordered:
        y = _known(target, date)
        x = _known(independent, date)
        if y is not None and x is not None and x != 0:
            logger.debug("Seed ratio %s found at %s", y / x, date)
            return y / x
    return None


def fill_prorate(
    series: SeriesAccess,
    independent: SeriesAccess,
    factor_mode: FactorMode = "nearest",
    direction: Direction = "forward",
    seed_mode: SeedMode = "none",
    seed_value: float | str | None = None,
    divisor: Divisor = "independent",
    start: Any = None,
    end: Any = None,
    analysis_start: Any = None,
    analysis_end: Any = None,
    flag: str = "",
) -> FillResult:
    """Fill missing values of ``series`` in proportion to ``independent``.

    Args:
        series: Dependent series, filled in place
        independent: Independent series read at each missing date
        factor_mode: ``"nearest"`` (running ratio) or ``"average"``
        direction: Scan direction for ``"nearest"``
        seed_mode: Initial ratio for ``"nearest"``: ``"none"``,
            ``"search_forward"``, ``"search_backward"`` or ``"value"``
            (``seed_value`` divided by the first known independent value)
        seed_value: Seed used with ``seed_mode="value"``; numeric strings accepted
        divisor: For ``"average"``, ``"independent"`` averages
            ``target/independent`` and fills ``independent*ratio``;
            ``"target"`` averages ``independent/target`` and fills
            ``independent/ratio``
        start: First date of the fill window (default: series start)
        end: Last date of the fill window (default: series end)
        analysis_start: First date used to compute the average ratio
        analysis_end: Last date used to compute the average ratio
        flag: Flag merged into filled values

    Returns:
        FillResult; dates where the independent value or the ratio is
        unavailable are counted as skipped.

    Raises:
        EInvalidInput: Missing series, bad option or unparseable seed.
        EIntervalMismatch: The two series have different regular intervals.
    """
    series = require_series(series)
    independent = require_series(independent, "independent series")
    check_same_interval(series, independent)
    if factor_mode not in ("nearest", "average"):
        raise EInvalidInput(f"Unknown factor mode {factor_mode!r}", context={"factor_mode": factor_mode})
    if direction not in ("forward", "backward"):
        raise EInvalidInput(f"Unknown fill direction {direction!r}", context={"direction": direction})
    if seed_mode not in ("none", "search_forward", "search_backward", "value"):
        raise EInvalidInput(f"Unknown seed mode {seed_mode!r}", context={"seed_mode": seed_mode})
    if divisor not in ("independent", "target"):
        raise EInvalidInput(f"Unknown divisor {divisor!r}", context={"divisor": divisor})

    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)
    dates = list(series.iter_dates(first, last))

    if factor_mode == "average":
        filled, skipped = _fill_average(
            series, independent, dates, divisor, analysis_start, analysis_end, flag
        )
    else:
        filled, skipped = _fill_nearest(
            series, independent, dates, direction, seed_mode, seed_value, flag
        )

    return finish_fill(series, f"prorate_{factor_mode}", filled, skipped, first, last)


def _fill_nearest(
    series: SeriesAccess,
    independent: SeriesAccess,
    dates: list[pd.Timestamp],
    direction: Direction,
    seed_mode: SeedMode,
    seed_value: float | str | None,
    flag: str,
) -> tuple[int, int]:
    ratio = _seed_ratio(series, independent, dates, seed_mode, seed_value)
    ordered = dates if direction == "forward" else list(reversed(dates))

    filled = 0
    skipped = 0
    for date in ordered:
        y = _known(series, date)
        x = _known(independent, date)
        if y is not None:
            if x is not None and x != 0:
                ratio = y / x
            continue
        if x is None or ratio is None:
            skipped += 1
            continue
        filled += write_fill(series, date, x * ratio, flag)

    if ratio is None and skipped > 0:
        logger.warning("No usable ratio for %s, %d value(s) left missing", series.name or "<unnamed>", skipped)
    return filled, skipped


def _fill_average(
    series: SeriesAccess,
    independent: SeriesAccess,
    dates: list[pd.Timestamp],
    divisor: Divisor,
    analysis_start: Any,
    analysis_end: Any,
    flag: str,
) -> tuple[int, int]:
    a_first, a_last = resolve_window(series, analysis_start, analysis_end)
    ratios: list[float] = []
    for date in series.iter_dates(a_first, a_last):
        y = _known(series, date)
        x = _known(independent, date)
        if y is None or x is None:
            continue
        if divisor == "independent":
            if x != 0:
                ratios.append(y / x)
        elif y != 0:
            ratios.append(x / y)

    if not ratios:
        missing = sum(1 for date in dates if _known(series, date) is None)
        logger.warning(
            "No usable pairs in %s - %s to average, %d value(s) left missing", a_first, a_last, missing
        )
        return 0, missing

    ratio = float(np.mean(ratios))
    logger.debug("Average ratio %s from %d pair(s)", ratio, len(ratios))

    filled = 0
    skipped = 0
    for date in dates:
        if _known(series, date) is not None:
            continue
        x = _known(independent, date)
        if x is None or (divisor == "target" and ratio == 0):
            skipped += 1
            continue
        value = x * ratio if divisor == "independent" else x / ratio
        filled += write_fill(series, date, value, flag)
    return filled, skipped


__all__ = ["fill_prorate", "parse_seed"]
