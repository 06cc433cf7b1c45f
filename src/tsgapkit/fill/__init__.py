"""Gap-filling algorithms.

Every algorithm reads and writes through the ``SeriesAccess`` contract, so
the same call works on a ``RegularSeries`` or an ``IrregularSeries``
(except where a fixed interval is required, e.g. ARMA filtering).
"""

from .arma import arma_filter
from .carry import fill_carry_forward, fill_constant
from .dispatch import fill_gaps
from .interpolate import fill_interpolate
from .pattern import PatternSeries, PatternStats, fill_pattern
from .prorate import fill_prorate
from .regression import fill_regression

__all__ = [
    # Single-series fills
    "fill_carry_forward",
    "fill_constant",
    "fill_interpolate",
    # Two-series fills
    "fill_prorate",
    "fill_regression",
    # Pattern fill
    "PatternSeries",
    "PatternStats",
    "fill_pattern",
    # Filtering
    "arma_filter",
    # Dispatch
    "fill_gaps",
]
