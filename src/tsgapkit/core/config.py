"""Configuration for gap filling.

A single frozen ``FillConfig`` carries the options of every fill method so a
caller can describe a fill pass as data and hand it to ``fill_gaps()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

FillMethod = Literal[
    "carry_forward",
    "constant",
    "interpolate",
    "prorate",
    "pattern",
    "regression",
    "arma",
]
Direction = Literal["forward", "backward"]
FactorMode = Literal["nearest", "average"]
SeedMode = Literal["none", "search_forward", "search_backward", "value"]
Divisor = Literal["independent", "target"]
Transform = Literal["linear", "log"]

FILL_METHODS: tuple[str, ...] = (
    "carry_forward",
    "constant",
    "interpolate",
    "prorate",
    "pattern",
    "regression",
    "arma",
)


@dataclass(frozen=True)
class FillConfig:
    """Options for one fill pass.

    Args:
        method: Fill method name (see ``FILL_METHODS``)
        flag: Flag merged into every filled value (``"+X"`` appends)
        start: First date of the fill window (default: series start)
        end: Last date of the fill window (default: series end)
        max_gap: Largest gap (in steps) interpolation may fill; 0 = unbounded
        direction: Scan direction for carry-forward and nearest-point prorate
        factor_mode: Prorate factor policy, running ratio or window average
        seed_mode: How nearest-point prorate obtains its first ratio
        seed_value: Seed for ``seed_mode="value"`` (number or numeric string)
        divisor: Which series divides the other when averaging prorate ratios
        transform: ``"log"`` applies regression in log10 space
        value: Constant written by the ``constant`` method
    """

    method: FillMethod
    flag: str = ""
    start: Any = None
    end: Any = None

    # Interpolation
    max_gap: int = 0

    # Carry-forward / prorate
    direction: Direction = "forward"
    factor_mode: FactorMode = "nearest"
    seed_mode: SeedMode = "none"
    seed_value: float | str | None = None
    divisor: Divisor = "independent"

    # Regression
    transform: Transform = "linear"

    # Constant
    value: float | None = None

    def __post_init__(self) -> None:
        if self.method not in FILL_METHODS:
            raise ValueError(f"method must be one of {FILL_METHODS}, got {self.method!r}")
        if self.max_gap < 0:
            raise ValueError(f"max_gap must be non-negative, got {self.max_gap}")
        if self.direction not in ("forward", "backward"):
            raise ValueError(f"direction must be 'forward' or 'backward', got {self.direction!r}")
        if self.seed_mode == "value" and self.seed_value is None:
            raise ValueError("seed_value is required when seed_mode is 'value'")
        if self.method == "constant" and self.value is None:
            raise ValueError("value is required for the constant method")

    @classmethod
    def carry_forward(cls, direction: Direction = "forward", flag: str = "") -> FillConfig:
        """Carry the last known value across gaps."""
        return cls(method="carry_forward", direction=direction, flag=flag)

    @classmethod
    def interpolate(cls, max_gap: int = 0, flag: str = "") -> FillConfig:
        """Linear interpolation, optionally limited to gaps of ``max_gap`` steps."""
        return cls(method="interpolate", max_gap=max_gap, flag=flag)

    @classmethod
    def prorate(
        cls,
        factor_mode: FactorMode = "nearest",
        direction: Direction = "forward",
        seed_mode: SeedMode = "search_forward",
        flag: str = "",
    ) -> FillConfig:
        """Ratio fill against an independent series.

        The default seeds the running ratio by searching forward for the
        first date where both series have data.
        """
        return cls(
            method="prorate",
            factor_mode=factor_mode,
            direction=direction,
            seed_mode=seed_mode,
            flag=flag,
        )

    def with_window(self, start: Any = None, end: Any = None) -> FillConfig:
        """Return a copy restricted to ``[start, end]``."""
        return FillConfig(**{**self.to_dict(), "start": start, "end": end})

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "flag": self.flag,
            "start": self.start,
            "end": self.end,
            "max_gap": self.max_gap,
            "direction": self.direction,
            "factor_mode": self.factor_mode,
            "seed_mode": self.seed_mode,
            "seed_value": self.seed_value,
            "divisor": self.divisor,
            "transform": self.transform,
            "value": self.value,
        }


__all__ = [
    "FILL_METHODS",
    "FillConfig",
    "FillMethod",
    "Direction",
    "FactorMode",
    "SeedMode",
    "Divisor",
    "Transform",
]
