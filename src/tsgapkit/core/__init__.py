"""Core module - errors, configuration and result types."""

from tsgapkit.core.config import FILL_METHODS, FillConfig
from tsgapkit.core.errors import (
    EIntervalIncompatible,
    EIntervalMismatch,
    EInvalidInput,
    EUnsupportedOperation,
    TSGapKitError,
)
from tsgapkit.core.results import FillResult

__all__ = [
    # Config
    "FillConfig",
    "FILL_METHODS",
    # Results
    "FillResult",
    # Errors
    "TSGapKitError",
    "EInvalidInput",
    "EIntervalMismatch",
    "EIntervalIncompatible",
    "EUnsupportedOperation",
]
