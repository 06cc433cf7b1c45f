"""Result types for fill operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class FillResult:
    """Outcome of one fill pass over a series.

    ``filled_count`` counts values written; ``skipped_count`` counts missing
    slots met during the scan that could not be filled (no usable neighbor,
    missing independent value, absent statistics, ...).
    """

    method: str
    filled_count: int = 0
    skipped_count: int = 0
    start: pd.Timestamp | None = None
    end: pd.Timestamp | None = None

    @property
    def changed(self) -> bool:
        return self.filled_count > 0

    def summary(self) -> dict[str, Any]:
        """Human-readable summary of the fill."""
        return {
            "method": self.method,
            "filled": self.filled_count,
            "skipped": self.skipped_count,
            "start": None if self.start is None else self.start.isoformat(),
            "end": None if self.end is None else self.end.isoformat(),
        }


__all__ = ["FillResult"]
