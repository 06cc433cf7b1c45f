"""Dated value: the unit of storage for a time series."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(slots=True)
class DatedValue:
    """A timestamp with its value, data flag and duration.

    The date identifies the point and is never changed in place by a series;
    value, flag and duration are updated when the date is set again.
    """

    date: pd.Timestamp
    value: float
    flag: str = ""
    duration: int = 0

    def copy(self) -> DatedValue:
        return DatedValue(self.date, self.value, self.flag, self.duration)


def append_flag(original: str | None, flag: str | None) -> str:
    """Merge a data flag into an existing flag.

    A flag starting with ``+`` is appended to the original (``"+,X"`` appends
    ``",X"``, dropping the comma when the original is empty). Any other
    non-empty flag replaces the original.

    Examples:
        >>> append_flag("E", "+F")
        'EF'
        >>> append_flag("", "+,F")
        'F'
        >>> append_flag("E", "+,F")
        'E,F'
        >>> append_flag("E", "F")
        'F'
    """
    merged = original or ""
    if not flag:
        return merged
    if flag.startswith("+") and len(flag) > 1:
        if flag[1] == "," and not merged:
            return merged + flag[2:]
        return merged + flag[1:]
    return flag


__all__ = ["DatedValue", "append_flag"]
