"""Shared plumbing for the fill algorithms.

Every algorithm resolves its window the same way, writes synthesized values
through :func:`write_fill` so flags merge consistently, and reports through
:func:`finish_fill`.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from tsgapkit.core.errors import EIntervalMismatch, EInvalidInput, EUnsupportedOperation
from tsgapkit.core.results import FillResult
from tsgapkit.series.access import SeriesAccess, is_regular
from tsgapkit.series.data import append_flag
from tsgapkit.time import to_timestamp

logger = logging.getLogger(__name__)


def require_series(series: SeriesAccess | None, role: str = "series") -> SeriesAccess:
    if series is None:
        raise EInvalidInput(f"No {role} given.", context={"role": role})
    return series


def require_regular(series: SeriesAccess, operation: str) -> None:
    """Raise ``EUnsupportedOperation`` unless ``series`` has a fixed interval."""
    if not is_regular(series):
        raise EUnsupportedOperation(
            f"{operation} requires a regular-interval series.",
            context={"series": series.name, "interval": str(series.interval)},
        )


def check_same_interval(dependent: SeriesAccess, independent: SeriesAccess) -> None:
    """Two regular series in one operation must share base and multiplier."""
    if is_regular(dependent) and is_regular(independent) and dependent.interval != independent.interval:
        raise EIntervalMismatch(
            "Dependent and independent series intervals differ.",
            context={
                "dependent": str(dependent.interval),
                "independent": str(independent.interval),
            },
        )


def resolve_window(
    series: SeriesAccess,
    start: Any = None,
    end: Any = None,
) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Return ``[start, end]`` defaulting each side to the series bounds.

    Raises:
        EInvalidInput: If the series has no bounds or ``start > end``.
    """
    date1, date2 = series.bounds()
    first = date1 if start is None else to_timestamp(start)
    last = date2 if end is None else to_timestamp(end)
    if first is None or last is None:
        raise EInvalidInput(
            "Series has no data and no declared period.",
            context={"series": series.name},
            fix_hint="Pass start/end explicitly or add data to the series first.",
        )
    if first > last:
        raise EInvalidInput(
            "Fill window start is after its end.",
            context={"start": str(first), "end": str(last)},
        )
    return first, last


def prepare_flags(series: SeriesAccess, flag: str | None) -> None:
    if flag:
        series.allocate_flags()


def write_fill(series: SeriesAccess, date: pd.Timestamp, value: float, flag: str | None) -> int:
    """Write a synthesized value, merging ``flag`` into the existing flag."""
    point = series.get_point(date)
    merged = append_flag(point.flag, flag) if flag else point.flag
    return series.set(date, value, merged, point.duration)


def finish_fill(
    series: SeriesAccess,
    method: str,
    filled: int,
    skipped: int,
    start: pd.Timestamp,
    end: pd.Timestamp,
) -> FillResult:
    """Mark the series dirty, record genesis and build the result."""
    if filled > 0:
        series.mark_dirty()
        series.add_genesis(f"Filled {filled} value(s) using {method} from {start} to {end}")
    logger.info(
        "%s on %s: filled=%d skipped=%d window=%s..%s",
        method,
        series.name or "<unnamed>",
        filled,
        skipped,
        start,
        end,
    )
    return FillResult(method=method, filled_count=filled, skipped_count=skipped, start=start, end=end)


__all__ = [
    "check_same_interval",
    "finish_fill",
    "prepare_flags",
    "require_regular",
    "require_series",
    "resolve_window",
    "write_fill",
]
