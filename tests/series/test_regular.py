"""Tests for series/regular.py."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.series import RegularSeries, SeriesAccess


class TestRegularConstruction:
    """Tests for allocation and from_values."""

    def test_period_allocated_missing(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-10")
        assert len(ts) == 10
        assert all(math.isnan(v) for v in ts.to_numpy())

    def test_date1_truncated_to_precision(self) -> None:
        ts = RegularSeries("Hour", "2024-01-01 10:35", "2024-01-01 12:00")
        assert ts.date1 == pd.Timestamp("2024-01-01 10:00")
        assert len(ts) == 3

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            RegularSeries("Day", "2024-01-10", "2024-01-01")

    def test_irregular_interval_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            RegularSeries("Irregular", "2024-01-01", "2024-01-10")

    def test_end_off_grid_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            RegularSeries("6Hour", "2024-01-01 00:00", "2024-01-01 08:00")

    def test_from_values(self) -> None:
        """None entries become the sentinel."""
        ts = RegularSeries.from_values("Day", "2024-01-01", [1.0, None, 3.0], missing=-999.0)
        assert ts.date2 == pd.Timestamp("2024-01-03")
        np.testing.assert_array_equal(ts.to_numpy(), [1.0, -999.0, 3.0])

    def test_from_values_empty_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            RegularSeries.from_values("Day", "2024-01-01", [])


class TestRegularAccess:
    """Tests for get/set/position."""

    def test_position(self) -> None:
        ts = RegularSeries("6Hour", "2024-01-01", "2024-01-02")
        assert ts.position("2024-01-01 12:00") == 2
        assert ts.position("2024-01-01 13:30") == 2
        assert ts.position("2023-12-31") is None

    def test_set_outside_period_ignored(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-03")
        assert ts.set("2024-02-01", 5.0) == 0
        assert math.isnan(ts.get("2024-02-01"))

    def test_set_and_get(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-03")
        assert ts.set("2024-01-02", 5.0) == 1
        assert ts.get("2024-01-02") == 5.0
        assert ts.is_dirty

    def test_flags_only_when_allocated(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-03")
        ts.set("2024-01-01", 1.0, "E")
        assert ts.get_point("2024-01-01").flag == ""
        assert not ts.has_flags
        ts.allocate_flags()
        ts.set("2024-01-01", 1.0, "E")
        assert ts.get_point("2024-01-01").flag == "E"
        assert ts.flags == ["E", "", ""]

    def test_iter_dates_window(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-10")
        dates = list(ts.iter_dates("2024-01-03 12:00", "2024-01-05"))
        assert dates == [pd.Timestamp("2024-01-04"), pd.Timestamp("2024-01-05")]

    def test_iter_dates_monthly(self) -> None:
        ts = RegularSeries("Month", "2024-01-01", "2024-12-01")
        dates = list(ts.iter_dates("2024-03-15", "2024-06-01"))
        assert dates == [pd.Timestamp(f"2024-0{m}-01") for m in (4, 5, 6)]

    def test_iter_dates_clipped_to_period(self) -> None:
        ts = RegularSeries("Day", "2024-01-01", "2024-01-03")
        assert len(list(ts.iter_dates("2023-01-01", "2025-01-01"))) == 3

    def test_limits(self) -> None:
        ts = RegularSeries.from_values("Day", "2024-01-01", [3.0, None, 1.0, 2.0])
        limits = ts.limits
        assert limits.count == 3
        assert limits.missing_count == 1
        assert limits.total == 6.0
        assert limits.mean == 2.0
        assert limits.min_date == pd.Timestamp("2024-01-03")
        assert limits.first_date == pd.Timestamp("2024-01-01")
        assert not ts.is_dirty

    def test_copy_is_independent(self) -> None:
        ts = RegularSeries.from_values("Day", "2024-01-01", [1.0, 2.0])
        clone = ts.copy()
        clone.set("2024-01-01", 10.0)
        assert ts.get("2024-01-01") == 1.0

    def test_satisfies_access_contract(self) -> None:
        assert isinstance(RegularSeries("Day", "2024-01-01", "2024-01-02"), SeriesAccess)
