"""Missing-value semantics shared by every series kind.

A series never compares values against a hard-coded constant. Each series
owns a :class:`MissingPolicy` and asks it whether a value is missing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MissingPolicy:
    """Missing sentinel plus the tolerance band used to recognize it.

    A single sentinel is widened by 0.1% on each side so that values that
    went through float formatting still compare as missing. NaN is always
    treated as missing, whatever the sentinel.

    Attributes:
        value: Sentinel written into slots that have no observation
        lower: Lower bound of the missing band (inclusive)
        upper: Upper bound of the missing band (inclusive)
    """

    value: float = math.nan
    lower: float = field(default=math.nan, compare=False)
    upper: float = field(default=math.nan, compare=False)

    def __post_init__(self) -> None:
        if math.isnan(self.value):
            return
        if math.isnan(self.lower) or math.isnan(self.upper):
            if self.value < 0:
                lower, upper = self.value * 1.001, self.value * 0.999
            else:
                lower, upper = self.value * 0.999, self.value * 1.001
            object.__setattr__(self, "lower", lower)
            object.__setattr__(self, "upper", upper)

    @classmethod
    def from_range(cls, bound1: float, bound2: float) -> MissingPolicy:
        """Create a policy from an explicit band; the sentinel is its midpoint."""
        lower, upper = sorted((float(bound1), float(bound2)))
        return cls(value=(lower + upper) / 2.0, lower=lower, upper=upper)

    def is_missing(self, value: float | None) -> bool:
        if value is None:
            return True
        if value != value:
            return True
        return self.lower <= value <= self.upper


__all__ = ["MissingPolicy"]
