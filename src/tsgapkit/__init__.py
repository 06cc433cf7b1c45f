"""tsgapkit - Time series storage and gap filling.

Two series stores share one access contract:

* ``RegularSeries``: fixed interval, numpy-backed, declared period.
* ``IrregularSeries``: sorted sparse points with caches that make
  sequential access, insert and removal amortized O(1).

Gap-filling algorithms (carry-forward, constant, linear interpolation,
prorate, pattern, regression and ARMA filtering) run on either store.

Basic usage:
    >>> from tsgapkit import RegularSeries, fill_interpolate
    >>> ts = RegularSeries.from_values("Day", "2024-01-01", [10.0, None, None, 20.0])
    >>> result = fill_interpolate(ts)
    >>> result.filled_count
    2

Config-driven usage:
    >>> from tsgapkit import FillConfig, fill_gaps
    >>> result = fill_gaps(ts, FillConfig.carry_forward(flag="E"))
"""

__version__ = "0.1.0"

# Core API
from tsgapkit.core.config import FillConfig
from tsgapkit.core.errors import (
    EIntervalIncompatible,
    EIntervalMismatch,
    EInvalidInput,
    EUnsupportedOperation,
    TSGapKitError,
)
from tsgapkit.core.results import FillResult

# Contracts
from tsgapkit.contracts import ARMASpec, RegressionCoefficients

# Discovery
from tsgapkit.discovery import describe

# Fill algorithms
from tsgapkit.fill import (
    PatternSeries,
    PatternStats,
    arma_filter,
    fill_carry_forward,
    fill_constant,
    fill_gaps,
    fill_interpolate,
    fill_pattern,
    fill_prorate,
    fill_regression,
)

# Series
from tsgapkit.series import (
    DatedValue,
    IrregularSeries,
    MissingPolicy,
    RegularSeries,
    SeriesAccess,
    irregular_from_pandas,
    regular_from_pandas,
    to_frame,
)
from tsgapkit.time import IntervalBase, TimeInterval, parse_interval

__all__ = [
    "__version__",
    # Config / results
    "FillConfig",
    "FillResult",
    # Errors
    "TSGapKitError",
    "EInvalidInput",
    "EIntervalMismatch",
    "EIntervalIncompatible",
    "EUnsupportedOperation",
    # Contracts
    "RegressionCoefficients",
    "ARMASpec",
    # Time
    "IntervalBase",
    "TimeInterval",
    "parse_interval",
    # Series
    "DatedValue",
    "MissingPolicy",
    "SeriesAccess",
    "RegularSeries",
    "IrregularSeries",
    "to_frame",
    "regular_from_pandas",
    "irregular_from_pandas",
    # Fill
    "fill_carry_forward",
    "fill_constant",
    "fill_interpolate",
    "fill_prorate",
    "fill_pattern",
    "PatternSeries",
    "PatternStats",
    "fill_regression",
    "arma_filter",
    "fill_gaps",
    # Discovery
    "describe",
]
