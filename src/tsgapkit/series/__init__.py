"""Series module for tsgapkit.

Provides the regular and irregular series stores, the access contract they
share, and pandas conversion.
"""

from .access import SeriesAccess, is_regular
from .convert import irregular_from_pandas, regular_from_pandas, to_frame
from .data import DatedValue, append_flag
from .irregular import IrregularSeries
from .limits import SeriesLimits, compute_limits
from .missing import MissingPolicy
from .regular import RegularSeries

__all__ = [
    # Storage unit
    "DatedValue",
    "append_flag",
    # Missing values
    "MissingPolicy",
    # Series kinds
    "SeriesAccess",
    "RegularSeries",
    "IrregularSeries",
    "is_regular",
    # Limits
    "SeriesLimits",
    "compute_limits",
    # pandas interop
    "to_frame",
    "regular_from_pandas",
    "irregular_from_pandas",
]
