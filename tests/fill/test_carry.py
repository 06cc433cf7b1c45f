"""Tests for fill/carry.py."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.fill import fill_carry_forward, fill_constant
from tsgapkit.series import IrregularSeries, RegularSeries


def _regular(values: list[float | None], missing: float = math.nan) -> RegularSeries:
    return RegularSeries.from_values("Day", "2024-01-01", values, missing=missing, name="stage")


class TestCarryForward:
    """Tests for fill_carry_forward."""

    def test_scenario_fills_gap(self) -> None:
        """[10, m, m, 20] becomes [10, 10, 10, 20]."""
        ts = _regular([10.0, None, None, 20.0])
        result = fill_carry_forward(ts)
        np.testing.assert_array_equal(ts.to_numpy(), [10.0, 10.0, 10.0, 20.0])
        assert result.filled_count == 2
        assert result.method == "carry_forward"
        assert ts.is_dirty

    def test_leading_missing_stays_missing(self) -> None:
        ts = _regular([None, 5.0, None])
        result = fill_carry_forward(ts)
        values = ts.to_numpy()
        assert math.isnan(values[0])
        assert values[2] == 5.0
        assert result.skipped_count == 1

    def test_backward(self) -> None:
        ts = _regular([None, 5.0, None, 7.0], missing=-999.0)
        result = fill_carry_forward(ts, direction="backward")
        np.testing.assert_array_equal(ts.to_numpy(), [5.0, 5.0, 7.0, 7.0])
        assert result.method == "carry_backward"

    def test_idempotent_on_complete_series(self) -> None:
        """A fully populated series is unchanged."""
        ts = _regular([1.0, 2.0, 3.0])
        ts.refresh()
        genesis = list(ts.genesis)
        result = fill_carry_forward(ts)
        np.testing.assert_array_equal(ts.to_numpy(), [1.0, 2.0, 3.0])
        assert result.filled_count == 0
        assert not ts.is_dirty
        assert ts.genesis == genesis

    def test_window(self) -> None:
        ts = _regular([1.0, None, None, None])
        fill_carry_forward(ts, start="2024-01-01", end="2024-01-03")
        values = ts.to_numpy()
        assert values[2] == 1.0
        assert math.isnan(values[3])

    def test_flag_appended(self) -> None:
        ts = _regular([1.0, None])
        fill_carry_forward(ts, flag="+E")
        assert ts.get_point("2024-01-02").flag == "E"
        assert ts.get_point("2024-01-01").flag == ""

    def test_genesis_recorded(self) -> None:
        ts = _regular([1.0, None])
        fill_carry_forward(ts)
        assert "carry_forward" in ts.genesis[-1]

    def test_irregular_fills_missing_points(self) -> None:
        """Only stored points are filled; no points are inserted."""
        ts = IrregularSeries()
        ts.set("2024-01-01", 3.0)
        ts.set("2024-01-04", None)
        ts.set("2024-01-09", 4.0)
        result = fill_carry_forward(ts)
        assert result.filled_count == 1
        assert ts.get("2024-01-04") == 3.0
        assert len(ts) == 3

    def test_empty_irregular_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            fill_carry_forward(IrregularSeries())

    def test_start_after_end_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            fill_carry_forward(_regular([1.0, None]), start="2024-01-02", end="2024-01-01")

    def test_none_series_rejected(self) -> None:
        with pytest.raises(EInvalidInput):
            fill_carry_forward(None)  # type: ignore[arg-type]


class TestConstant:
    """Tests for fill_constant."""

    def test_fills_every_missing(self) -> None:
        ts = _regular([None, 2.0, None])
        result = fill_constant(ts, 0.0)
        np.testing.assert_array_equal(ts.to_numpy(), [0.0, 2.0, 0.0])
        assert result.filled_count == 2

    def test_rejects_missing_value(self) -> None:
        ts = _regular([None], missing=-999.0)
        with pytest.raises(EInvalidInput):
            fill_constant(ts, -999.0)

    def test_window_dates(self) -> None:
        ts = _regular([None, None, None])
        result = fill_constant(ts, 1.0, start="2024-01-02")
        assert result.start == pd.Timestamp("2024-01-02")
        assert math.isnan(ts.get("2024-01-01"))
