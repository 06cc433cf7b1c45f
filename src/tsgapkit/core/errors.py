"""Error codes and exceptions for tsgapkit.

Structural and parameter problems abort an operation and surface as one of
the exceptions below. Single unusable samples met during a fill scan are not
errors; they are counted in ``FillResult.skipped_count`` instead.
"""

# ruff: noqa: N818

from __future__ import annotations

from typing import Any


class TSGapKitError(Exception):
    """Base exception for all tsgapkit errors.

    Attributes:
        error_code: Unique error code string for programmatic handling
        message: Human-readable error message
        context: Additional context data for debugging
        fix_hint: Actionable hint for resolving the error
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint is not None:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_agent_dict(self) -> dict[str, Any]:
        """Return a structured dict suitable for programmatic consumption.

        Returns:
            Dictionary with error_code, message, fix_hint, and context.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "fix_hint": self.fix_hint,
            "context": self.context,
        }


# ---------------------------
# Invalid input
# ---------------------------


class EInvalidInput(TSGapKitError):
    """Input series or parameters are unusable."""

    error_code = "E_INVALID_INPUT"


class EIntervalMismatch(EInvalidInput):
    """Two series in a two-series operation use different intervals."""

    error_code = "E_INTERVAL_MISMATCH"
    fix_hint = "Convert the independent series to the dependent series interval before filling."


class EIntervalIncompatible(EInvalidInput):
    """Two intervals have no usable common divisor."""

    error_code = "E_INTERVAL_INCOMPATIBLE"
    fix_hint = "Use an ARMA interval that divides evenly with the data interval (e.g. 2Hour with 6Hour data)."


# ---------------------------
# Unsupported combination
# ---------------------------


class EUnsupportedOperation(TSGapKitError):
    """Series kind or interval cannot be used with the requested operation."""

    error_code = "E_UNSUPPORTED_OPERATION"
    fix_hint = "Use a RegularSeries with a fixed-length interval (second through week)."


# Registry for lookup
ERROR_REGISTRY: dict[str, type[TSGapKitError]] = {
    "E_INVALID_INPUT": EInvalidInput,
    "E_INTERVAL_MISMATCH": EIntervalMismatch,
    "E_INTERVAL_INCOMPATIBLE": EIntervalIncompatible,
    "E_UNSUPPORTED_OPERATION": EUnsupportedOperation,
}


def get_error_class(error_code: str) -> type[TSGapKitError]:
    """Get error class by error code."""
    return ERROR_REGISTRY.get(error_code, TSGapKitError)


__all__ = [
    "TSGapKitError",
    "EInvalidInput",
    "EIntervalMismatch",
    "EIntervalIncompatible",
    "EUnsupportedOperation",
    "ERROR_REGISTRY",
    "get_error_class",
]
