"""Irregular-interval time series.

Points live in an arena (a growable list) and are chained in ascending date
order through integer ``next``/``prev`` links, so inserts and removals never
move other points. Three small caches make the dominant access patterns
cheap:

* ``_last_set``: slot written by the previous ``set()``; a following ``set()``
  for its successor's date updates in place without searching.
* ``_last_access``: slot found by the previous ``get()``; a following ``get()``
  for its successor's date returns without searching.
* ``_last_remove_next``: successor of the slot removed by the previous
  ``remove()``.

Anything else falls back to a linear scan that starts from whichever end of
the chain is closer in time to the requested date. Sequential forward access,
insert and remove are therefore amortized O(1); random access is O(n).
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Iterator
from typing import Any

import pandas as pd

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.series.data import DatedValue
from tsgapkit.series.limits import SeriesLimits, compute_limits
from tsgapkit.series.missing import MissingPolicy
from tsgapkit.time import IntervalBase, TimeInterval, parse_interval, to_timestamp

logger = logging.getLogger(__name__)

_NIL = -1

IRREGULAR = TimeInterval(IntervalBase.IRREGULAR)


class IrregularSeries:
    """Sorted, duplicate-free sequence of dated values.

    Args:
        date1: Declared start, used as the bound while the series is empty
        date2: Declared end, used as the bound while the series is empty
        missing: Missing sentinel or a full ``MissingPolicy``
        precision: Step used by algorithms that walk a time grid (default: Day)
        name: Identifier used in logs and genesis
        units: Data units

    Examples:
        >>> ts = IrregularSeries()
        >>> ts.set("2024-01-05", 20.0)
        1
        >>> ts.set("2024-01-01", 10.0)
        1
        >>> [p.value for p in ts]
        [10.0, 20.0]
    """

    def __init__(
        self,
        date1: Any = None,
        date2: Any = None,
        missing: float | MissingPolicy = math.nan,
        precision: TimeInterval | str = "Day",
        name: str = "",
        units: str = "",
    ) -> None:
        self._precision = parse_interval(precision)
        if not self._precision.is_regular:
            raise EInvalidInput(
                "Irregular series precision must be a regular interval.",
                context={"precision": str(self._precision)},
            )
        self._declared1 = None if date1 is None else to_timestamp(date1)
        self._declared2 = None if date2 is None else to_timestamp(date2)
        self._policy = missing if isinstance(missing, MissingPolicy) else MissingPolicy(float(missing))

        self._points: list[DatedValue | None] = []
        self._next: list[int] = []
        self._prev: list[int] = []
        self._free: list[int] = []
        self._head = _NIL
        self._tail = _NIL
        self._size = 0

        self._last_set = _NIL
        self._last_access = _NIL
        self._last_remove_next = _NIL

        self._dirty = True
        self._limits: SeriesLimits | None = None

        self.name = name
        self.units = units
        self.genesis: list[str] = []

    def __repr__(self) -> str:
        return (
            f"IrregularSeries(name={self.name!r}, date1={self.date1}, "
            f"date2={self.date2}, size={self._size})"
        )

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[DatedValue]:
        return self.iter_points()

    # ------------------------------------------------------------------
    # Header properties
    # ------------------------------------------------------------------

    @property
    def interval(self) -> TimeInterval:
        return IRREGULAR

    @property
    def precision(self) -> TimeInterval:
        return self._precision

    @property
    def grid_interval(self) -> TimeInterval:
        return self._precision

    @property
    def date1(self) -> pd.Timestamp | None:
        if self._size == 0:
            return self._declared1
        return self._point(self._head).date

    @property
    def date2(self) -> pd.Timestamp | None:
        if self._size == 0:
            return self._declared2
        return self._point(self._tail).date

    def bounds(self) -> tuple[pd.Timestamp | None, pd.Timestamp | None]:
        return self.date1, self.date2

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
        return True

    def allocate_flags(self) -> None:
        """Flags are stored with every point; nothing to allocate."""

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def add_genesis(self, message: str) -> None:
        self.genesis.append(message)

    # ------------------------------------------------------------------
    # Arena management
    # ------------------------------------------------------------------

    def _point(self, slot: int) -> DatedValue:
        point = self._points[slot]
        assert point is not None
        return point

    def _alloc(self, point: DatedValue) -> int:
        if self._free:
            slot = self._free.pop()
            self._points[slot] = point
            self._next[slot] = _NIL
            self._prev[slot] = _NIL
            return slot
        self._points.append(point)
        self._next.append(_NIL)
        self._prev.append(_NIL)
        return len(self._points) - 1

    def _link(self, slot: int, prev: int, nxt: int) -> None:
        self._prev[slot] = prev
        self._next[slot] = nxt
        if prev == _NIL:
            self._head = slot
        else:
            self._next[prev] = slot
        if nxt == _NIL:
            self._tail = slot
        else:
            self._prev[nxt] = slot

    def _unlink(self, slot: int) -> None:
        prev = self._prev[slot]
        nxt = self._next[slot]
        if prev == _NIL:
            self._head = nxt
        else:
            self._next[prev] = nxt
        if nxt == _NIL:
            self._tail = prev
        else:
            self._prev[nxt] = prev
        self._points[slot] = None
        self._next[slot] = _NIL
        self._prev[slot] = _NIL
        self._free.append(slot)
        if self._last_set == slot:
            self._last_set = _NIL
        if self._last_access == slot:
            self._last_access = _NIL
        if self._last_remove_next == slot:
            self._last_remove_next = _NIL

    def clear(self) -> None:
        """Remove every point and reset the caches."""
        self._points = []
        self._next = []
        self._prev = []
        self._free = []
        self._head = _NIL
        self._tail = _NIL
        self._size = 0
        self._last_set = _NIL
        self._last_access = _NIL
        self._last_remove_next = _NIL
        self._dirty = True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _scan(self, ts: pd.Timestamp) -> tuple[int, int, int]:
        """Locate ``ts`` scanning from the nearer end of the chain.

        Returns:
            ``(found, prev, next)``: the matching slot (or ``_NIL``) and, when
            there is no match, the neighbors between which ``ts`` belongs.
        """
        first = self._point(self._head).date
        last = self._point(self._tail).date
        if ts < first:
            return _NIL, _NIL, self._head
        if ts > last:
            return _NIL, self._tail, _NIL

        if abs(ts - first) < abs(ts - last):
            prev = _NIL
            slot = self._head
            while slot != _NIL:
                date = self._point(slot).date
                if date == ts:
                    return slot, self._prev[slot], self._next[slot]
                if date > ts:
                    return _NIL, prev, slot
                prev = slot
                slot = self._next[slot]
            return _NIL, prev, _NIL

        nxt = _NIL
        slot = self._tail
        while slot != _NIL:
            date = self._point(slot).date
            if date == ts:
                return slot, self._prev[slot], self._next[slot]
            if date < ts:
                return _NIL, slot, nxt
            nxt = slot
            slot = self._prev[slot]
        return _NIL, _NIL, nxt

    def _find(self, ts: pd.Timestamp) -> int:
        """Find the slot for ``ts`` using the sequential-access cache first."""
        if self._size == 0:
            return _NIL

        candidate = self._head if self._last_access == _NIL else self._next[self._last_access]
        if candidate != _NIL and self._point(candidate).date == ts:
            self._last_access = candidate
            return candidate

        first = self._point(self._head).date
        last = self._point(self._tail).date
        if ts < first or ts > last:
            logger.debug("%s not within %s - %s", ts, first, last)
            return _NIL

        found, _, _ = self._scan(ts)
        if found != _NIL:
            self._last_access = found
        return found

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def get(self, date: Any) -> float:
        """Return the value at ``date`` or the missing sentinel."""
        slot = self._find(to_timestamp(date))
        if slot == _NIL:
            return self._policy.value
        return self._point(slot).value

    def get_point(self, date: Any) -> DatedValue:
        """Return a copy of the point at ``date``.

        If there is no point, the returned value is the missing sentinel with
        an empty flag and zero duration.
        """
        ts = to_timestamp(date)
        slot = self._find(ts)
        if slot == _NIL:
            return DatedValue(ts, self._policy.value)
        return self._point(slot).copy()

    def set(self, date: Any, value: float | None, flag: str = "", duration: int = 0) -> int:
        """Set the value for ``date``, inserting a point if none exists.

        Returns:
            1 (the number of values set).
        """
        ts = to_timestamp(date)
        value = self._policy.value if value is None else value
        flag = flag or ""

        if self._size == 0:
            slot = self._alloc(DatedValue(ts, value, flag, duration))
            self._link(slot, _NIL, _NIL)
            self._size = 1
            self._last_set = slot
            self._dirty = True
            return 1

        if self._last_set != _NIL:
            candidate = self._next[self._last_set]
            if candidate != _NIL and self._point(candidate).date == ts:
                self._update(candidate, value, flag, duration)
                return 1

        found, prev, nxt = self._scan(ts)
        if found != _NIL:
            self._update(found, value, flag, duration)
            return 1

        slot = self._alloc(DatedValue(ts, value, flag, duration))
        self._link(slot, prev, nxt)
        self._size += 1
        self._last_set = slot
        self._dirty = True
        return 1

    def _update(self, slot: int, value: float, flag: str, duration: int) -> None:
        point = self._point(slot)
        point.value = value
        point.flag = flag
        point.duration = duration
        self._last_set = slot
        self._dirty = True

    def remove(self, date: Any) -> bool:
        """Remove the point at ``date``.

        When only one point remains the series is cleared whatever ``date``
        is.

        Returns:
            True if a point was removed, False if no point has that date.
        """
        if self._size == 0:
            return False
        ts = to_timestamp(date)

        if self._size == 1:
            self.clear()
            return True

        slot = _NIL
        candidate = self._last_remove_next
        if candidate != _NIL and self._point(candidate).date == ts:
            slot = candidate
        else:
            scan = self._head
            while scan != _NIL:
                date_scan = self._point(scan).date
                if date_scan == ts:
                    slot = scan
                    break
                if date_scan > ts:
                    break
                scan = self._next[scan]

        if slot == _NIL:
            return False

        successor = self._next[slot]
        self._unlink(slot)
        self._last_remove_next = successor
        self._size -= 1
        self._dirty = True
        return True

    def find_nearest_next(self, date: Any, return_match: bool = True) -> DatedValue | None:
        """Return a copy of the first point at or after ``date``.

        Args:
            date: Date of interest
            return_match: If False, an exact match is skipped and the point
                after it is returned

        Returns:
            The point, or None if ``date`` is past the end of the data.
        """
        if self._size == 0:
            return None
        found, _, nxt = self._scan(to_timestamp(date))
        if found != _NIL:
            slot = found if return_match else self._next[found]
        else:
            slot = nxt
        if slot == _NIL:
            return None
        return self._point(slot).copy()

    def iter_dates(self, start: Any = None, end: Any = None) -> Iterator[pd.Timestamp]:
        """Yield the dates of existing points in ``[start, end]``."""
        for point in self._iter_slots(start, end):
            yield point.date

    def iter_points(self, start: Any = None, end: Any = None) -> Iterator[DatedValue]:
        """Yield copies of the points in ``[start, end]`` in date order."""
        for point in self._iter_slots(start, end):
            yield point.copy()

    def _iter_slots(self, start: Any, end: Any) -> Iterator[DatedValue]:
        first = None if start is None else to_timestamp(start)
        last = None if end is None else to_timestamp(end)
        slot = self._head
        while slot != _NIL:
            point = self._point(slot)
            slot = self._next[slot]
            if first is not None and point.date < first:
                continue
            if last is not None and point.date > last:
                break
            yield point

    def get_data(self) -> list[DatedValue]:
        """Return copies of all points in date order."""
        return list(self.iter_points())

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Recompute the data limits if the data changed since the last refresh."""
        if not self._dirty:
            logger.debug("Series %s is not dirty, limits not recomputed", self.name)
            return
        self._limits = compute_limits(self)
        self._dirty = False

    @property
    def limits(self) -> SeriesLimits:
        self.refresh()
        assert self._limits is not None
        return self._limits

    def copy(self) -> IrregularSeries:
        clone = copy.copy(self)
        clone.clear()
        clone.genesis = list(self.genesis)
        for point in self.iter_points():
            clone.set(point.date, point.value, point.flag, point.duration)
        clone._limits = None
        return clone


__all__ = ["IrregularSeries"]
