"""API discovery and introspection for tsgapkit.

Provides ``describe()`` which returns a machine-readable schema of the
library's public surface: version, fill APIs, interval names and error codes
with fix hints.

Usage:
    >>> from tsgapkit import describe
    >>> info = describe()
    >>> sorted(info)
    ['apis', 'error_codes', 'fill_methods', 'intervals', 'version']
"""

from __future__ import annotations

from typing import Any


def describe() -> dict[str, Any]:
    """Return a machine-readable API schema for tsgapkit.

    Returns a dictionary with:
      - ``version``: library version string
      - ``apis``: mapping of task names to public functions
      - ``fill_methods``: method names accepted by ``FillConfig``
      - ``intervals``: interval base names accepted by ``parse_interval``
      - ``error_codes``: mapping of error codes to description/fix_hint
    """
    import tsgapkit
    from tsgapkit.core.config import FILL_METHODS

    return {
        "version": tsgapkit.__version__,
        "apis": _get_apis(),
        "fill_methods": list(FILL_METHODS),
        "intervals": _get_intervals(),
        "error_codes": _get_error_codes(),
    }


def _get_apis() -> dict[str, dict[str, str]]:
    return {
        "regular_series": {
            "function": "RegularSeries",
            "description": "Fixed-interval series over a declared period",
        },
        "irregular_series": {
            "function": "IrregularSeries",
            "description": "Sorted sparse series with sequential-access caches",
        },
        "carry_forward": {
            "function": "fill_carry_forward",
            "description": "Carry the last known value across gaps (either direction)",
        },
        "constant": {
            "function": "fill_constant",
            "description": "Replace missing values with a constant",
        },
        "interpolate": {
            "function": "fill_interpolate",
            "description": "Linear interpolation, optionally bounded by gap width",
        },
        "prorate": {
            "function": "fill_prorate",
            "description": "Ratio fill against an independent series",
        },
        "pattern": {
            "function": "fill_pattern",
            "description": "Per-indicator monthly averages from a pattern series",
        },
        "regression": {
            "function": "fill_regression",
            "description": "Apply y = a + b*x (single or monthly, optional log10)",
        },
        "arma": {
            "function": "arma_filter",
            "description": "ARMA recursive filter on a regular series",
        },
        "fill_gaps": {
            "function": "fill_gaps",
            "description": "Run a fill described by a FillConfig",
        },
        "to_frame": {
            "function": "to_frame",
            "description": "Export a series as a [ds, y, flag, duration] DataFrame",
        },
    }


def _get_intervals() -> list[str]:
    from tsgapkit.time import IntervalBase

    return [base.value for base in IntervalBase]


def _get_error_codes() -> dict[str, dict[str, str]]:
    """Return all error codes with descriptions and fix hints."""
    from tsgapkit.core.errors import ERROR_REGISTRY

    result: dict[str, dict[str, str]] = {}
    for code, cls in ERROR_REGISTRY.items():
        result[code] = {
            "class": cls.__name__,
            "description": cls.__doc__ or "",
            "fix_hint": cls.fix_hint,
        }
    return result


__all__ = ["describe"]
