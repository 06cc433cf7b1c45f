"""Regression fill: ``y = a + b*x`` from an independent series."""

from __future__ import annotations

import logging
import math
from typing import Any

from tsgapkit.contracts.specs import RegressionCoefficients, build_spec
from tsgapkit.core.config import Transform
from tsgapkit.core.errors import EInvalidInput, EUnsupportedOperation
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import (
    check_same_interval,
    finish_fill,
    prepare_flags,
    require_series,
    resolve_window,
    write_fill,
)
from tsgapkit.series.access import SeriesAccess, is_regular

logger = logging.getLogger(__name__)


def fill_regression(
    series: SeriesAccess,
    independent: SeriesAccess,
    coefficients: RegressionCoefficients | dict[str, Any],
    start: Any = None,
    end: Any = None,
    transform: Transform | None = None,
    flag: str = "",
) -> FillResult:
    """Fill missing values by applying regression coefficients.

    With ``transform="log"`` the relation is applied in log10 space:
    ``x`` becomes ``log10(x)`` (``log10(le_zero_value)`` when ``x <= 0``)
    and the result is ``10**y``.

    Args:
        series: Dependent series, filled in place
        independent: Series supplying ``x`` at each missing date
        coefficients: Single or monthly coefficients (model or dict)
        start: First date of the window (default: series start)
        end: Last date of the window (default: series end)
        transform: Overrides ``coefficients.transform`` when given
        flag: Flag merged into filled values

    Raises:
        EInvalidInput: Missing series or invalid coefficients.
        EIntervalMismatch: The two series have different regular intervals.
        EUnsupportedOperation: Monthly coefficients with an irregular series.
    """
    series = require_series(series)
    independent = require_series(independent, "independent series")
    coefs: RegressionCoefficients = build_spec(RegressionCoefficients, coefficients)
    transform = transform or coefs.transform
    if transform not in ("linear", "log"):
        raise EInvalidInput(f"Unknown transform {transform!r}", context={"transform": transform})
    if coefs.monthly and not (is_regular(series) and is_regular(independent)):
        raise EUnsupportedOperation(
            "Monthly regression requires regular-interval series.",
            context={"series": str(series.interval), "independent": str(independent.interval)},
        )
    check_same_interval(series, independent)

    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)
    log_floor = math.log10(coefs.le_zero_value)

    filled = 0
    skipped = 0
    for date in list(series.iter_dates(first, last)):
        if not series.is_missing(series.get(date)):
            continue
        x = independent.get(date)
        if independent.is_missing(x):
            skipped += 1
            continue
        pair = coefs.for_month(date.month)
        if pair is None:
            skipped += 1
            continue
        a, b = pair
        if transform == "log":
            x = math.log10(x) if x > 0 else log_floor
            try:
                value = 10.0 ** (a + b * x)
            except OverflowError:
                value = math.inf
        else:
            value = a + b * x
        if not math.isfinite(value):
            logger.debug("Regression result at %s is not finite, skipped", date)
            skipped += 1
            continue
        filled += write_fill(series, date, value, flag)

    return finish_fill(series, "regression", filled, skipped, first, last)


__all__ = ["fill_regression"]
