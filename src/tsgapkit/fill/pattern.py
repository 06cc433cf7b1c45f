"""Pattern fill: replace missing values with per-category monthly averages.

A :class:`PatternSeries` assigns a categorical indicator (for example
``"WET"``, ``"AVG"``, ``"DRY"``) to each period. A :class:`PatternStats`
table holds the average value for each indicator and month; the averages
are estimated elsewhere and only applied here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.core.results import FillResult
from tsgapkit.fill.common import finish_fill, prepare_flags, require_series, resolve_window, write_fill
from tsgapkit.series.access import SeriesAccess
from tsgapkit.time import TimeInterval, parse_interval, to_timestamp

logger = logging.getLogger(__name__)


class PatternSeries:
    """Categorical indicator per period (monthly by default).

    Dates are floored to the interval precision, so with a monthly interval
    any date in March 2024 reads the indicator stored for March 2024.
    """

    def __init__(
        self,
        interval: TimeInterval | str = "Month",
        data: Mapping[Any, str] | None = None,
        name: str = "",
    ) -> None:
        self.interval = parse_interval(interval)
        if not self.interval.is_regular:
            raise EInvalidInput("Pattern series interval must be regular.", context={"interval": str(self.interval)})
        self.name = name
        self._data: dict[pd.Timestamp, str] = {}
        for date, indicator in (data or {}).items():
            self.set_pattern(date, indicator)

    def __len__(self) -> int:
        return len(self._data)

    def set_pattern(self, date: Any, indicator: str) -> None:
        self._data[self.interval.floor(to_timestamp(date))] = indicator.strip().upper()

    def get_pattern(self, date: Any) -> str | None:
        """Return the indicator for the period containing ``date``."""
        return self._data.get(self.interval.floor(to_timestamp(date)))

    @property
    def indicators(self) -> list[str]:
        return sorted(set(self._data.values()))


class PatternStats:
    """Average value per indicator and month (1-12).

    Averages are either supplied directly (:meth:`from_averages`) or built
    from observations with :meth:`add` followed by :meth:`refresh`.

    Examples:
        >>> stats = PatternStats.from_averages({"WET": {1: 10.0}})
        >>> stats.get_average("wet", 1)
        10.0
        >>> stats.get_average("WET", 2) is None
        True
    """

    def __init__(self, indicators: Iterable[str] = ()) -> None:
        self._indicators = [i.strip().upper() for i in indicators]
        self._sums: dict[tuple[str, int], float] = {}
        self._counts: dict[tuple[str, int], int] = {}
        self._averages: dict[tuple[str, int], float] = {}

    @classmethod
    def from_averages(cls, averages: Mapping[str, Mapping[int, float]]) -> PatternStats:
        stats = cls(averages.keys())
        for indicator, by_month in averages.items():
            for month, value in by_month.items():
                stats._averages[(indicator.strip().upper(), _check_month(month))] = float(value)
        return stats

    @property
    def indicators(self) -> list[str]:
        return list(self._indicators)

    def add(self, indicator: str, month: int, value: float) -> None:
        """Accumulate an observation; call :meth:`refresh` to update averages."""
        key = (indicator.strip().upper(), _check_month(month))
        if key[0] not in self._indicators:
            self._indicators.append(key[0])
        self._sums[key] = self._sums.get(key, 0.0) + value
        self._counts[key] = self._counts.get(key, 0) + 1

    def refresh(self) -> None:
        for key, count in self._counts.items():
            self._averages[key] = self._sums[key] / count

    def get_average(self, indicator: str, month: int) -> float | None:
        return self._averages.get((indicator.strip().upper(), month))


def _check_month(month: int) -> int:
    month = int(month)
    if not 1 <= month <= 12:
        raise EInvalidInput(f"Month must be 1-12, got {month}", context={"month": month})
    return month


def fill_pattern(
    series: SeriesAccess,
    pattern: PatternSeries,
    stats: PatternStats,
    start: Any = None,
    end: Any = None,
    flag: str = "",
) -> FillResult:
    """Fill each missing value with the average for its indicator and month.

    Dates with no indicator, or an indicator/month without an average, stay
    missing and are counted as skipped.
    """
    series = require_series(series)
    if pattern is None or stats is None:
        raise EInvalidInput("Pattern fill needs both a pattern series and pattern statistics.")
    first, last = resolve_window(series, start, end)
    prepare_flags(series, flag)

    filled = 0
    skipped = 0
    for date in list(series.iter_dates(first, last)):
        if not series.is_missing(series.get(date)):
            continue
        indicator = pattern.get_pattern(date)
        if indicator is None:
            logger.debug("No pattern indicator for %s", date)
            skipped += 1
            continue
        average = stats.get_average(indicator, date.month)
        if average is None:
            logger.debug("No average for indicator %s month %d", indicator, date.month)
            skipped += 1
            continue
        filled += write_fill(series, date, average, flag)

    return finish_fill(series, "pattern", filled, skipped, first, last)


__all__ = ["PatternSeries", "PatternStats", "fill_pattern"]
