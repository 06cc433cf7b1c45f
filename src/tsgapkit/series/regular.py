"""Fixed-interval time series backed by a numpy array.

The period is declared at allocation and never moves; the slot for a date is
its number of whole intervals from ``date1``.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Iterable, Iterator
from typing import Any

import numpy as np
import pandas as pd

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.series.data import DatedValue
from tsgapkit.series.limits import SeriesLimits, compute_limits
from tsgapkit.series.missing import MissingPolicy
from tsgapkit.time import IntervalBase, TimeInterval, parse_interval, to_timestamp

logger = logging.getLogger(__name__)


def _as_policy(missing: float | MissingPolicy) -> MissingPolicy:
    if isinstance(missing, MissingPolicy):
        return missing
    return MissingPolicy(float(missing))


class RegularSeries:
    """Regular-interval series over a fixed period ``[date1, date2]``.

    Args:
        interval: Data interval (``TimeInterval`` or string such as ``"6Hour"``)
        date1: First date of the period (truncated to the interval precision)
        date2: Last date of the period (must fall on the interval grid)
        missing: Missing sentinel or a full ``MissingPolicy``
        name: Identifier used in logs and genesis
        units: Data units
        flags: Allocate the data flag channel up front

    Examples:
        >>> ts = RegularSeries("Day", "2024-01-01", "2024-01-04")
        >>> ts.set("2024-01-02", 5.0)
        1
        >>> ts.get("2024-01-02")
        5.0
    """

    def __init__(
        self,
        interval: TimeInterval | str,
        date1: Any,
        date2: Any,
        missing: float | MissingPolicy = math.nan,
        name: str = "",
        units: str = "",
        flags: bool = False,
    ) -> None:
        self._interval = parse_interval(interval)
        if not self._interval.is_regular:
            raise EInvalidInput(
                "RegularSeries requires a regular interval.",
                context={"interval": str(self._interval)},
                fix_hint="Use IrregularSeries for irregular data.",
            )
        self._date1 = self._interval.floor(to_timestamp(date1))
        self._date2 = self._interval.floor(to_timestamp(date2))
        if self._date2 < self._date1:
            raise EInvalidInput(
                "Period end precedes period start.",
                context={"date1": str(self._date1), "date2": str(self._date2)},
            )
        steps = self._interval.steps_between(self._date1, self._date2)
        if steps is None:
            raise EInvalidInput(
                "Period end does not fall on the interval grid.",
                context={
                    "date1": str(self._date1),
                    "date2": str(self._date2),
                    "interval": str(self._interval),
                },
            )

        self._policy = _as_policy(missing)
        self._values = np.full(steps + 1, self._policy.value, dtype=float)
        self._flags: list[str] | None = [""] * (steps + 1) if flags else None
        self._dirty = True
        self._limits: SeriesLimits | None = None

        self.name = name
        self.units = units
        self.genesis: list[str] = []

    @classmethod
    def from_values(
        cls,
        interval: TimeInterval | str,
        start: Any,
        values: Iterable[float | None],
        missing: float | MissingPolicy = math.nan,
        name: str = "",
        units: str = "",
    ) -> RegularSeries:
        """Create a series starting at ``start`` holding ``values`` in order.

        ``None`` entries are stored as the missing sentinel.
        """
        interval = parse_interval(interval)
        items = list(values)
        if not items:
            raise EInvalidInput("Cannot create a RegularSeries from an empty value list.")
        date1 = interval.floor(to_timestamp(start))
        date2 = interval.add(date1, len(items) - 1)
        series = cls(interval, date1, date2, missing=missing, name=name, units=units)
        for i, value in enumerate(items):
            if value is not None:
                series._values[i] = float(value)
        return series

    def __repr__(self) -> str:
        return (
            f"RegularSeries(name={self.name!r}, interval={self._interval}, "
            f"date1={self._date1}, date2={self._date2}, size={len(self)})"
        )

    def __len__(self) -> int:
        return len(self._values)

    # ------------------------------------------------------------------
    # Header properties
    # ------------------------------------------------------------------

    @property
    def interval(self) -> TimeInterval:
        return self._interval

    @property
    def grid_interval(self) -> TimeInterval:
        return self._interval

    @property
    def date1(self) -> pd.Timestamp:
        return self._date1

    @property
    def date2(self) -> pd.Timestamp:
        return self._date2

    def bounds(self) -> tuple[pd.Timestamp, pd.Timestamp]:
        return self._date1, self._date2

    @property
    def missing_policy(self) -> MissingPolicy:
        return self._policy

    @property
    def missing(self) -> float:
        return self._policy.value

    def is_missing(self, value: float | None) -> bool:
        return self._policy.is_missing(value)

    @property
    def has_flags(self) -> bool:
        return self._flags is not None

    def allocate_flags(self, initial: str = "") -> None:
        """Allocate the flag channel; existing flags are retained."""
        if self._flags is None:
            self._flags = [initial] * len(self._values)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def add_genesis(self, message: str) -> None:
        self.genesis.append(message)

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def position(self, date: Any) -> int | None:
        """Return the array slot containing ``date`` or None if outside the period."""
        ts = to_timestamp(date)
        if ts < self._date1:
            return None
        seconds = self._interval.to_seconds()
        if seconds is not None:
            pos = int((ts - self._date1) // pd.Timedelta(seconds=seconds))
        else:
            pos = self._first_position_at_or_after(ts)
            if self._interval.add(self._date1, pos) > ts:
                pos -= 1
        if pos >= len(self._values):
            return None
        return pos

    def slot_date(self, pos: int) -> pd.Timestamp:
        return self._interval.add(self._date1, pos)

    def get(self, date: Any) -> float:
        pos = self.position(date)
        if pos is None:
            return self._policy.value
        return float(self._values[pos])

    def get_point(self, date: Any) -> DatedValue:
        ts = to_timestamp(date)
        pos = self.position(ts)
        if pos is None:
            return DatedValue(ts, self._policy.value)
        flag = self._flags[pos] if self._flags is not None else ""
        return DatedValue(self.slot_date(pos), float(self._values[pos]), flag, 0)

    def set(self, date: Any, value: float | None, flag: str = "", duration: int = 0) -> int:
        """Set the value (and flag, if allocated) for a date.

        ``duration`` is accepted for contract compatibility and ignored.

        Returns:
            1 if the value was set, 0 if the date is outside the period.
        """
        pos = self.position(date)
        if pos is None:
            logger.debug("Date %s is outside %s - %s, not set", date, self._date1, self._date2)
            return 0
        self._values[pos] = self._policy.value if value is None else value
        if self._flags is not None and flag is not None:
            self._flags[pos] = flag
        self._dirty = True
        return 1

    def _first_position_at_or_after(self, ts: pd.Timestamp) -> int:
        if ts <= self._date1:
            return 0
        seconds = self._interval.to_seconds()
        if seconds is not None:
            step = pd.Timedelta(seconds=seconds)
            return int(-((self._date1 - ts) // step))
        months = (ts.year - self._date1.year) * 12 + (ts.month - self._date1.month)
        unit = self._interval.mult * (12 if self._interval.base == IntervalBase.YEAR else 1)
        pos = max(months // unit, 0)
        while self._interval.add(self._date1, pos) < ts:
            pos += 1
        return pos

    def iter_dates(self, start: Any = None, end: Any = None) -> Iterator[pd.Timestamp]:
        """Yield slot dates in ``[start, end]`` clipped to the period."""
        first = self._date1 if start is None else max(to_timestamp(start), self._date1)
        last = self._date2 if end is None else min(to_timestamp(end), self._date2)
        pos = self._first_position_at_or_after(first)
        date = self._interval.add(self._date1, pos)
        while date <= last:
            yield date
            pos += 1
            date = self._interval.add(self._date1, pos)

    def iter_points(self, start: Any = None, end: Any = None) -> Iterator[DatedValue]:
        for date in self.iter_dates(start, end):
            yield self.get_point(date)

    def to_numpy(self) -> np.ndarray:
        return self._values.copy()

    @property
    def flags(self) -> list[str] | None:
        return None if self._flags is None else list(self._flags)

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Recompute the data limits if the data changed since the last refresh."""
        if not self._dirty:
            return
        self._limits = compute_limits(self)
        self._dirty = False

    @property
    def limits(self) -> SeriesLimits:
        self.refresh()
        assert self._limits is not None
        return self._limits

    def copy(self) -> RegularSeries:
        clone = copy.copy(self)
        clone._values = self._values.copy()
        clone._flags = None if self._flags is None else list(self._flags)
        clone.genesis = list(self.genesis)
        clone._dirty = True
        clone._limits = None
        return clone


__all__ = ["RegularSeries"]
