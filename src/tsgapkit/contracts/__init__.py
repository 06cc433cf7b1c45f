"""Contracts module for tsgapkit.

Pydantic specs validating coefficients supplied by external estimators.
"""

from .specs import ARMASpec, BaseSpec, RegressionCoefficients, build_spec, parse_number_list

__all__ = [
    "BaseSpec",
    "RegressionCoefficients",
    "ARMASpec",
    "build_spec",
    "parse_number_list",
]
