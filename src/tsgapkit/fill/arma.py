"""ARMA recursive filter.

The filter runs on a grid whose step is the greatest common divisor of the
data interval and the ARMA interval. Input values are replicated onto that
grid, filtered with

    out[t] = sum(a[i] * out[t - (i + 1) * r]) + sum(b[j] * in[t - j * r])

where ``r`` is the ARMA interval in grid steps, and the result is averaged
back to the data interval.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from tsgapkit.contracts.specs import ARMASpec, build_spec
from tsgapkit.core.errors import EIntervalIncompatible, EInvalidInput, EUnsupportedOperation
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import (
    check_same_interval,
    finish_fill,
    prepare_flags,
    require_regular,
    require_series,
    resolve_window,
    write_fill,
)
from tsgapkit.series.access import SeriesAccess
from tsgapkit.time import TimeInterval, to_timestamp

logger = logging.getLogger(__name__)


def grid_ratios(data_interval: TimeInterval, arma_interval: TimeInterval) -> tuple[int, int]:
    """Return ``(interval_ratio, arma_ratio)``: both intervals in shared grid steps.

    Raises:
        EUnsupportedOperation: The data interval has no fixed length.
        EIntervalIncompatible: The ARMA interval has no fixed length or the
            two lengths have no usable common divisor.
    """
    data_seconds = data_interval.to_seconds()
    if data_seconds is None:
        raise EUnsupportedOperation(
            "ARMA filtering requires a fixed-length data interval.",
            context={"interval": str(data_interval)},
        )
    arma_seconds = arma_interval.to_seconds()
    if arma_seconds is None:
        raise EIntervalIncompatible(
            "ARMA interval must have a fixed length.",
            context={"arma_interval": str(arma_interval)},
        )
    if data_seconds == arma_seconds:
        return 1, 1
    step = math.gcd(data_seconds, arma_seconds)
    if step == 1 and min(data_seconds, arma_seconds) > 1:
        raise EIntervalIncompatible(
            "Data and ARMA intervals have no common divisor.",
            context={"interval": str(data_interval), "arma_interval": str(arma_interval)},
        )
    return data_seconds // step, arma_seconds // step


def run_arma(
    values: np.ndarray,
    spec: ARMASpec,
    interval_ratio: int,
    arma_ratio: int,
) -> np.ndarray:
    """Filter ``values`` (data interval, NaN = missing) and return the result.

    The returned array has one value per input value, NaN where the output
    could not be computed. ``spec.input_previous`` values each cover one
    ARMA interval ahead of the first data value.
    """
    previous = np.repeat(np.asarray(spec.input_previous, dtype=float), arma_ratio)
    fine_in = np.concatenate([previous, np.repeat(values, interval_ratio)])
    t0 = len(previous)
    out = np.full(len(fine_in), np.nan)
    out_prev = spec.output_previous

    for t in range(t0, len(fine_in)):
        total = 0.0
        for i, coef in enumerate(spec.a):
            tpos = t - (i + 1) * arma_ratio
            if tpos >= t0:
                dependency = out[tpos]
            elif out_prev:
                back = -((tpos - t0) // arma_ratio)
                dependency = out_prev[len(out_prev) - back]
            else:
                dependency = np.nan
            if np.isnan(dependency) and tpos >= 0:
                dependency = fine_in[tpos]
            if np.isnan(dependency):
                total = np.nan
                break
            total += coef * dependency
        if np.isnan(total):
            continue
        for j, coef in enumerate(spec.b):
            tpos = t - j * arma_ratio
            if tpos < 0 or np.isnan(fine_in[tpos]):
                total = np.nan
                break
            total += coef * fine_in[tpos]
        if np.isnan(total):
            continue
        if spec.output_min is not None:
            total = max(total, spec.output_min)
        if spec.output_max is not None:
            total = min(total, spec.output_max)
        out[t] = total

    blocks = out[t0:].reshape(len(values), interval_ratio)
    result = np.full(len(values), np.nan)
    complete = ~np.isnan(blocks).any(axis=1)
    result[complete] = blocks[complete].mean(axis=1)
    return result


def arma_filter(
    series: SeriesAccess,
    spec: ARMASpec | dict[str, Any],
    output: SeriesAccess | None = None,
    start: Any = None,
    end: Any = None,
    output_start: Any = None,
    output_end: Any = None,
    flag: str = "",
) -> FillResult:
    """Apply an ARMA filter to ``series``.

    Args:
        series: Regular input series
        spec: ARMA coefficients, interval and startup values (model or dict)
        output: Series receiving the result (default: ``series`` itself)
        start: First input date (default: series start)
        end: Last input date (default: series end)
        output_start: First date written (default: ``start``)
        output_end: Last date written (default: ``end``)
        flag: Flag merged into written values

    Returns:
        FillResult on the output series; steps whose result is missing are
        written as the output's missing value and counted as skipped.

    Raises:
        EInvalidInput: Invalid spec or empty window.
        EIntervalMismatch: ``output`` interval differs from ``series``.
        EIntervalIncompatible: ARMA and data intervals are not commensurate.
        EUnsupportedOperation: Irregular or variable-length (month/year) series.
    """
    series = require_series(series)
    require_regular(series, "ARMA filtering")
    arma: ARMASpec = build_spec(ARMASpec, spec)
    target = series if output is None else output
    if output is not None:
        require_regular(output, "ARMA filtering")
        check_same_interval(series, output)

    interval_ratio, arma_ratio = grid_ratios(series.interval, arma.interval)
    first, last = resolve_window(series, start, end)
    dates = list(series.iter_dates(first, last))
    if not dates:
        raise EInvalidInput(
            "ARMA window contains no data slots.",
            context={"start": str(first), "end": str(last)},
        )
    values = np.array(
        [np.nan if series.is_missing(v) else v for v in (series.get(d) for d in dates)],
        dtype=float,
    )
    logger.debug(
        "ARMA on %s: %d values, interval_ratio=%d arma_ratio=%d", series.name, len(values), interval_ratio, arma_ratio
    )

    result = run_arma(values, arma, interval_ratio, arma_ratio)

    out_first = first if output_start is None else max(first, to_timestamp(output_start))
    out_last = last if output_end is None else min(last, to_timestamp(output_end))
    if out_first > out_last:
        raise EInvalidInput(
            "ARMA output window does not overlap the input window.",
            context={"output_start": str(out_first), "output_end": str(out_last)},
        )
    prepare_flags(target, flag)

    filled = 0
    skipped = 0
    for date, value in zip(dates, result):
        if date < out_first or date > out_last:
            continue
        if np.isnan(value):
            point = target.get_point(date)
            target.set(date, target.missing, point.flag, point.duration)
            skipped += 1
            continue
        filled += write_fill(target, date, float(value), flag)

    if skipped:
        target.mark_dirty()

    return finish_fill(target, "arma", filled, skipped, out_first, out_last)


__all__ = ["arma_filter", "grid_ratios", "run_arma"]
