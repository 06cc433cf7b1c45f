"""Tests for series/missing.py and series/data.py."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from tsgapkit.series import DatedValue, MissingPolicy, append_flag


class TestMissingPolicy:
    """Tests for the missing sentinel band."""

    def test_nan_default(self) -> None:
        policy = MissingPolicy()
        assert math.isnan(policy.value)
        assert policy.is_missing(math.nan)
        assert policy.is_missing(None)
        assert not policy.is_missing(0.0)

    def test_negative_sentinel_band(self) -> None:
        policy = MissingPolicy(-999.0)
        assert policy.lower == pytest.approx(-999.999)
        assert policy.upper == pytest.approx(-998.001)
        assert policy.is_missing(-999.0)
        assert policy.is_missing(-998.5)
        assert not policy.is_missing(-997.0)

    def test_nan_always_missing(self) -> None:
        """NaN is missing even with a numeric sentinel."""
        assert MissingPolicy(-999.0).is_missing(math.nan)

    def test_from_range(self) -> None:
        policy = MissingPolicy.from_range(-1000.0, -900.0)
        assert policy.value == -950.0
        assert policy.is_missing(-901.0)
        assert not policy.is_missing(-899.0)

    def test_different_series_different_sentinels(self) -> None:
        """A value missing in one policy may be data in another."""
        assert MissingPolicy(-999.0).is_missing(-999.0)
        assert not MissingPolicy(-1.0).is_missing(-999.0)


class TestDatedValue:
    """Tests for DatedValue and append_flag."""

    def test_copy(self) -> None:
        point = DatedValue(pd.Timestamp("2024-01-01"), 1.0, "A", 60)
        clone = point.copy()
        clone.value = 2.0
        assert point.value == 1.0
        assert clone.flag == "A"

    @pytest.mark.parametrize(
        ("original", "flag", "expected"),
        [
            ("E", "+F", "EF"),
            ("", "+F", "F"),
            ("E", "+,F", "E,F"),
            ("", "+,F", "F"),
            ("E", "F", "F"),
            ("E", "", "E"),
            (None, "+F", "F"),
        ],
    )
    def test_append_flag(self, original: str | None, flag: str, expected: str) -> None:
        assert append_flag(original, flag) == expected
