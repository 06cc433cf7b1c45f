"""Time utilities: interval arithmetic, interval parsing, and timestamps."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import pandas as pd

from tsgapkit.core.errors import EInvalidInput, EUnsupportedOperation


class IntervalBase(StrEnum):
    """Base unit of a data interval."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    IRREGULAR = "irregular"


_BASE_SECONDS: dict[IntervalBase, int] = {
    IntervalBase.SECOND: 1,
    IntervalBase.MINUTE: 60,
    IntervalBase.HOUR: 3600,
    IntervalBase.DAY: 86400,
    IntervalBase.WEEK: 7 * 86400,
}

_BASE_LABELS: dict[IntervalBase, str] = {
    IntervalBase.SECOND: "Sec",
    IntervalBase.MINUTE: "Min",
    IntervalBase.HOUR: "Hour",
    IntervalBase.DAY: "Day",
    IntervalBase.WEEK: "Week",
    IntervalBase.MONTH: "Month",
    IntervalBase.YEAR: "Year",
    IntervalBase.IRREGULAR: "Irregular",
}

_BASE_ALIASES: dict[str, IntervalBase] = {
    "s": IntervalBase.SECOND,
    "sec": IntervalBase.SECOND,
    "second": IntervalBase.SECOND,
    "seconds": IntervalBase.SECOND,
    "min": IntervalBase.MINUTE,
    "minute": IntervalBase.MINUTE,
    "minutes": IntervalBase.MINUTE,
    "h": IntervalBase.HOUR,
    "hr": IntervalBase.HOUR,
    "hour": IntervalBase.HOUR,
    "hours": IntervalBase.HOUR,
    "d": IntervalBase.DAY,
    "day": IntervalBase.DAY,
    "days": IntervalBase.DAY,
    "w": IntervalBase.WEEK,
    "wk": IntervalBase.WEEK,
    "week": IntervalBase.WEEK,
    "weeks": IntervalBase.WEEK,
    "mon": IntervalBase.MONTH,
    "month": IntervalBase.MONTH,
    "months": IntervalBase.MONTH,
    "y": IntervalBase.YEAR,
    "yr": IntervalBase.YEAR,
    "year": IntervalBase.YEAR,
    "years": IntervalBase.YEAR,
    "irreg": IntervalBase.IRREGULAR,
    "irregular": IntervalBase.IRREGULAR,
}

_INTERVAL_PATTERN = re.compile(r"^\s*(\d*)\s*([A-Za-z]+)\s*$")


def to_timestamp(value: Any) -> pd.Timestamp:
    """Convert a date-like value to ``pd.Timestamp``.

    Raises:
        EInvalidInput: If the value cannot be interpreted as a date/time.
    """
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            raise EInvalidInput("Date/time is NaT.")
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise EInvalidInput(
            f"Cannot interpret {value!r} as a date/time.",
            context={"value": repr(value)},
        ) from exc
    if pd.isna(ts):
        raise EInvalidInput(f"Cannot interpret {value!r} as a date/time.")
    return ts


@dataclass(frozen=True)
class TimeInterval:
    """Data interval expressed as a base unit and a multiplier.

    Examples:
        >>> TimeInterval(IntervalBase.HOUR, 6)
        TimeInterval(base=<IntervalBase.HOUR: 'hour'>, mult=6)
        >>> str(parse_interval("6Hour"))
        '6Hour'
    """

    base: IntervalBase
    mult: int = 1

    def __post_init__(self) -> None:
        if self.mult < 1:
            raise EInvalidInput(
                f"Interval multiplier must be positive, got {self.mult}",
                context={"base": str(self.base), "mult": self.mult},
            )

    def __str__(self) -> str:
        label = _BASE_LABELS[self.base]
        if self.base == IntervalBase.IRREGULAR:
            return label
        return f"{self.mult}{label}"

    @classmethod
    def parse(cls, text: str) -> TimeInterval:
        return parse_interval(text)

    @property
    def is_regular(self) -> bool:
        return self.base != IntervalBase.IRREGULAR

    def to_seconds(self) -> int | None:
        """Return the interval length in seconds, or None if it varies."""
        base_seconds = _BASE_SECONDS.get(self.base)
        if base_seconds is None:
            return None
        return base_seconds * self.mult

    def add(self, ts: pd.Timestamp, count: int = 1) -> pd.Timestamp:
        """Return ``ts`` advanced by ``count`` intervals (negative allowed)."""
        seconds = self.to_seconds()
        if seconds is not None:
            return ts + pd.Timedelta(seconds=seconds * count)
        if self.base == IntervalBase.MONTH:
            return ts + pd.DateOffset(months=self.mult * count)
        if self.base == IntervalBase.YEAR:
            return ts + pd.DateOffset(years=self.mult * count)
        raise EUnsupportedOperation("Cannot step through time with an irregular interval.")

    def floor(self, ts: pd.Timestamp) -> pd.Timestamp:
        """Truncate ``ts`` to the precision of the interval base."""
        if self.base == IntervalBase.SECOND:
            return ts.floor("s")
        if self.base == IntervalBase.MINUTE:
            return ts.floor("min")
        if self.base == IntervalBase.HOUR:
            return ts.floor("h")
        if self.base in (IntervalBase.DAY, IntervalBase.WEEK):
            return ts.normalize()
        if self.base == IntervalBase.MONTH:
            return ts.normalize().replace(day=1)
        if self.base == IntervalBase.YEAR:
            return ts.normalize().replace(month=1, day=1)
        return ts

    def steps_between(self, start: pd.Timestamp, end: pd.Timestamp) -> int | None:
        """Number of whole intervals from ``start`` to ``end``.

        Returns None when ``end`` does not fall on the interval grid anchored
        at ``start``. The result is negative when ``end`` precedes ``start``.
        """
        seconds = self.to_seconds()
        if seconds is not None:
            delta = end - start
            step = pd.Timedelta(seconds=seconds)
            if delta % step != pd.Timedelta(0):
                return None
            return int(delta // step)
        if self.base in (IntervalBase.MONTH, IntervalBase.YEAR):
            months = (end.year - start.year) * 12 + (end.month - start.month)
            unit = self.mult if self.base == IntervalBase.MONTH else 12 * self.mult
            if months % unit != 0:
                return None
            steps = months // unit
            if self.add(start, steps) != end:
                return None
            return steps
        return None

    def iter_dates(self, start: pd.Timestamp, end: pd.Timestamp) -> Iterator[pd.Timestamp]:
        """Yield dates from ``start`` through ``end`` inclusive."""
        i = 0
        date = start
        while date <= end:
            yield date
            i += 1
            date = self.add(start, i)


def parse_interval(text: str | TimeInterval) -> TimeInterval:
    """Parse an interval string such as ``"6Hour"``, ``"Day"`` or ``"15Min"``.

    Raises:
        EInvalidInput: If the string is not a recognized interval.
    """
    if isinstance(text, TimeInterval):
        return text
    if not isinstance(text, str):
        raise EInvalidInput(f"Interval must be a string, got {type(text).__name__}")
    match = _INTERVAL_PATTERN.match(text)
    if match is None:
        raise EInvalidInput(
            f"Unrecognized interval '{text}'",
            context={"interval": text},
            fix_hint="Use forms like 'Day', '6Hour', '15Min', '1Month', 'Irregular'.",
        )
    mult_text, base_text = match.groups()
    base = _BASE_ALIASES.get(base_text.lower())
    if base is None:
        raise EInvalidInput(
            f"Unrecognized interval base '{base_text}'",
            context={"interval": text},
            fix_hint="Use forms like 'Day', '6Hour', '15Min', '1Month', 'Irregular'.",
        )
    mult = int(mult_text) if mult_text else 1
    return TimeInterval(base, mult)


__all__ = [
    "IntervalBase",
    "TimeInterval",
    "parse_interval",
    "to_timestamp",
]
