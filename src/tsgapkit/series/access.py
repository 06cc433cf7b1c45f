"""Uniform access contract implemented by regular and irregular series.

Fill algorithms are written against :class:`SeriesAccess` only, so the same
code runs on :class:`~tsgapkit.series.regular.RegularSeries` and
:class:`~tsgapkit.series.irregular.IrregularSeries`.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import pandas as pd

if TYPE_CHECKING:
    from tsgapkit.series.data import DatedValue
    from tsgapkit.series.missing import MissingPolicy
    from tsgapkit.time import TimeInterval


@runtime_checkable
class SeriesAccess(Protocol):
    """Read/write access to a dated series.

    ``interval`` is the data interval for regular series and ``Irregular``
    for irregular ones. ``grid_interval`` is the step used when an algorithm
    needs to walk time at a fixed step (the data interval for regular series,
    the declared precision for irregular ones).
    """

    name: str
    genesis: list[str]

    @property
    def interval(self) -> TimeInterval: ...

    @property
    def grid_interval(self) -> TimeInterval: ...

    @property
    def missing_policy(self) -> MissingPolicy: ...

    @property
    def missing(self) -> float: ...

    @property
    def has_flags(self) -> bool: ...

    @property
    def is_dirty(self) -> bool: ...

    def bounds(self) -> tuple[pd.Timestamp | None, pd.Timestamp | None]: ...

    def is_missing(self, value: float | None) -> bool: ...

    def get(self, date: Any) -> float: ...

    def get_point(self, date: Any) -> DatedValue: ...

    def set(self, date: Any, value: float, flag: str = "", duration: int = 0) -> int: ...

    def mark_dirty(self) -> None: ...

    def allocate_flags(self) -> None: ...

    def iter_dates(self, start: Any = None, end: Any = None) -> Iterator[pd.Timestamp]: ...

    def add_genesis(self, message: str) -> None: ...


def is_regular(series: SeriesAccess) -> bool:
    """Return True when the series has a fixed data interval."""
    return series.interval.is_regular


__all__ = ["SeriesAccess", "is_regular"]
