"""Tests for series/irregular.py."""

from __future__ import annotations

import math
import random

import pandas as pd
import pytest

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.series import IrregularSeries, MissingPolicy, SeriesAccess


def _day(n: int) -> pd.Timestamp:
    return pd.Timestamp("2024-01-01") + pd.Timedelta(days=n - 1)


def _dates(series: IrregularSeries) -> list[pd.Timestamp]:
    return list(series.iter_dates())


class TestIrregularSet:
    """Tests for set() and ordering."""

    def test_first_set_initializes_bounds(self) -> None:
        """The first point defines both bounds."""
        ts = IrregularSeries()
        assert ts.set(_day(3), 1.0) == 1
        assert ts.bounds() == (_day(3), _day(3))
        assert len(ts) == 1

    def test_inserts_keep_ascending_order(self) -> None:
        """Out-of-order inserts are spliced into place."""
        ts = IrregularSeries()
        for n in (5, 1, 3, 9, 7, 2):
            ts.set(_day(n), float(n))
        assert _dates(ts) == [_day(n) for n in (1, 2, 3, 5, 7, 9)]
        assert ts.bounds() == (_day(1), _day(9))

    def test_set_existing_date_updates_in_place(self) -> None:
        """Setting an existing date replaces value, flag and duration."""
        ts = IrregularSeries()
        ts.set(_day(1), 1.0)
        ts.set(_day(2), 2.0)
        ts.set(_day(1), 10.0, "E", 3600)
        assert len(ts) == 2
        point = ts.get_point(_day(1))
        assert (point.value, point.flag, point.duration) == (10.0, "E", 3600)

    def test_sequential_writes_use_successor(self) -> None:
        """Rewriting points in ascending order updates without inserting."""
        ts = IrregularSeries()
        for n in range(1, 6):
            ts.set(_day(n), float(n))
        ts.set(_day(1), 100.0)
        for n in range(2, 6):
            ts.set(_day(n), 100.0 + n)
        assert len(ts) == 5
        assert [ts.get(_day(n)) for n in range(1, 6)] == [100.0, 102.0, 103.0, 104.0, 105.0]

    def test_none_value_stored_as_missing(self) -> None:
        ts = IrregularSeries(missing=-999.0)
        ts.set(_day(1), None)
        assert ts.get(_day(1)) == -999.0
        assert ts.is_missing(ts.get(_day(1)))

    def test_round_trip_random_order(self) -> None:
        """get() returns the last value set for each date."""
        rng = random.Random(7)
        ts = IrregularSeries()
        expected: dict[pd.Timestamp, float] = {}
        for _ in range(300):
            date = _day(rng.randint(1, 60))
            value = rng.random()
            ts.set(date, value)
            expected[date] = value
        for date, value in expected.items():
            assert ts.get(date) == value
        assert _dates(ts) == sorted(expected)


class TestIrregularGet:
    """Tests for get() and get_point()."""

    def test_missing_outside_bounds(self) -> None:
        """Dates outside the data return the sentinel without error."""
        ts = IrregularSeries()
        ts.set(_day(2), 1.0)
        ts.set(_day(4), 2.0)
        assert math.isnan(ts.get(_day(1)))
        assert math.isnan(ts.get(_day(10)))

    def test_missing_between_points(self) -> None:
        ts = IrregularSeries(missing=-999.0)
        ts.set(_day(2), 1.0)
        ts.set(_day(4), 2.0)
        assert ts.get(_day(3)) == -999.0

    def test_empty_series_returns_missing(self) -> None:
        assert math.isnan(IrregularSeries().get(_day(1)))

    def test_sequential_get_advances_cache(self) -> None:
        """Iterating dates in order hits the successor of the last access."""
        ts = IrregularSeries()
        for n in range(1, 11):
            ts.set(_day(n), float(n))
        values = [ts.get(_day(n)) for n in range(1, 11)]
        assert values == [float(n) for n in range(1, 11)]
        assert ts._point(ts._last_access).date == _day(10)

    def test_miss_leaves_cache_unchanged(self) -> None:
        ts = IrregularSeries()
        ts.set(_day(1), 1.0)
        ts.set(_day(5), 5.0)
        ts.get(_day(1))
        cached = ts._last_access
        ts.get(_day(3))
        ts.get(_day(30))
        assert ts._last_access == cached

    def test_get_point_returns_copy(self) -> None:
        """Mutating a returned point does not change the series."""
        ts = IrregularSeries()
        ts.set(_day(1), 1.0, "A")
        point = ts.get_point(_day(1))
        point.value = 99.0
        assert ts.get(_day(1)) == 1.0

    def test_get_point_missing(self) -> None:
        ts = IrregularSeries()
        ts.set(_day(1), 1.0)
        point = ts.get_point(_day(2))
        assert point.date == _day(2)
        assert math.isnan(point.value)
        assert point.flag == ""
        assert point.duration == 0


class TestIrregularRemove:
    """Tests for remove()."""

    def test_remove_on_empty_is_noop(self) -> None:
        assert IrregularSeries().remove(_day(1)) is False

    def test_remove_middle(self) -> None:
        ts = IrregularSeries()
        for n in (1, 2, 3):
            ts.set(_day(n), float(n))
        assert ts.remove(_day(2)) is True
        assert _dates(ts) == [_day(1), _day(3)]
        assert ts.is_dirty

    def test_remove_ends_updates_bounds(self) -> None:
        ts = IrregularSeries()
        for n in (1, 2, 3):
            ts.set(_day(n), float(n))
        ts.remove(_day(1))
        ts.remove(_day(3))
        assert ts.bounds() == (_day(2), _day(2))

    def test_remove_last_entry_resets(self) -> None:
        """Removing the only point returns to declared bounds."""
        ts = IrregularSeries(date1=_day(1), date2=_day(31))
        ts.set(_day(5), 1.0)
        assert ts.remove(_day(5)) is True
        assert len(ts) == 0
        assert ts.bounds() == (_day(1), _day(31))

    def test_remove_only_entry_clears_series(self) -> None:
        """With one point left, remove() empties the series for any date."""
        ts = IrregularSeries()
        ts.set(_day(5), 1.0)
        assert ts.remove(_day(6)) is True
        assert len(ts) == 0
        assert _dates(ts) == []

    def test_remove_no_match(self) -> None:
        ts = IrregularSeries()
        ts.set(_day(1), 1.0)
        ts.set(_day(3), 3.0)
        assert ts.remove(_day(2)) is False
        assert len(ts) == 2

    def test_sequential_removes(self) -> None:
        """Removing consecutive points uses the cached successor."""
        ts = IrregularSeries()
        for n in range(1, 11):
            ts.set(_day(n), float(n))
        for n in range(3, 8):
            assert ts.remove(_day(n)) is True
        assert _dates(ts) == [_day(n) for n in (1, 2, 8, 9, 10)]

    def test_caches_survive_removal(self) -> None:
        """Caches pointing at a removed point are dropped, not followed."""
        ts = IrregularSeries()
        for n in range(1, 6):
            ts.set(_day(n), float(n))
        ts.get(_day(3))
        ts.remove(_day(3))
        assert ts.get(_day(4)) == 4.0
        ts.set(_day(3), 30.0)
        assert ts.get(_day(3)) == 30.0
        assert _dates(ts) == [_day(n) for n in range(1, 6)]

    def test_sortedness_under_mixed_operations(self) -> None:
        """Random inserts and removes keep strictly ascending dates."""
        rng = random.Random(11)
        ts = IrregularSeries()
        present: set[pd.Timestamp] = set()
        for _ in range(500):
            date = _day(rng.randint(1, 40))
            if rng.random() < 0.6:
                ts.set(date, 1.0)
                present.add(date)
            elif len(present) == 1:
                assert ts.remove(date) is True
                present.clear()
            else:
                assert ts.remove(date) is (date in present)
                present.discard(date)
        dates = _dates(ts)
        assert dates == sorted(present)
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert len(ts) == len(present)


class TestIrregularMisc:
    """Tests for bounds, navigation, limits and copying."""

    def test_declared_bounds_when_empty(self) -> None:
        ts = IrregularSeries(date1="2024-01-01", date2="2024-02-01")
        assert ts.bounds() == (pd.Timestamp("2024-01-01"), pd.Timestamp("2024-02-01"))

    def test_data_overrides_declared_bounds(self) -> None:
        ts = IrregularSeries(date1="2024-01-01", date2="2024-02-01")
        ts.set("2024-01-10", 1.0)
        assert ts.bounds() == (pd.Timestamp("2024-01-10"), pd.Timestamp("2024-01-10"))

    def test_precision_must_be_regular(self) -> None:
        with pytest.raises(EInvalidInput):
            IrregularSeries(precision="Irregular")

    def test_grid_interval_is_precision(self) -> None:
        ts = IrregularSeries(precision="Hour")
        assert str(ts.grid_interval) == "1Hour"
        assert not ts.interval.is_regular

    def test_find_nearest_next(self) -> None:
        ts = IrregularSeries()
        for n in (1, 4, 8):
            ts.set(_day(n), float(n))
        assert ts.find_nearest_next(_day(2)).date == _day(4)
        assert ts.find_nearest_next(_day(4)).date == _day(4)
        assert ts.find_nearest_next(_day(4), return_match=False).date == _day(8)
        assert ts.find_nearest_next(_day(9)) is None

    def test_iter_dates_window(self) -> None:
        ts = IrregularSeries()
        for n in (1, 3, 5, 7):
            ts.set(_day(n), float(n))
        assert list(ts.iter_dates(_day(2), _day(5))) == [_day(3), _day(5)]

    def test_limits_and_dirty_flag(self) -> None:
        """limits recompute only after a mutation."""
        ts = IrregularSeries(missing=-999.0)
        ts.set(_day(1), 4.0)
        ts.set(_day(2), -999.0)
        ts.set(_day(3), 2.0)
        limits = ts.limits
        assert not ts.is_dirty
        assert limits.count == 2
        assert limits.missing_count == 1
        assert limits.min_value == 2.0
        assert limits.max_date == _day(1)
        assert ts.limits is limits
        ts.set(_day(4), 10.0)
        assert ts.is_dirty
        assert ts.limits.max_value == 10.0

    def test_copy_is_independent(self) -> None:
        ts = IrregularSeries(name="flow")
        ts.set(_day(1), 1.0)
        clone = ts.copy()
        clone.set(_day(2), 2.0)
        ts.set(_day(1), 5.0)
        assert len(ts) == 1
        assert clone.get(_day(1)) == 1.0
        assert clone.name == "flow"

    def test_satisfies_access_contract(self) -> None:
        assert isinstance(IrregularSeries(), SeriesAccess)

    def test_missing_band(self) -> None:
        """Values within 0.1% of the sentinel read as missing."""
        ts = IrregularSeries(missing=MissingPolicy(-999.0))
        assert ts.is_missing(-999.5)
        assert not ts.is_missing(-990.0)
