"""Pydantic specs for externally supplied fill parameters.

Regression coefficients and ARMA filter coefficients are estimated outside
tsgapkit; these models validate them before they reach a fill algorithm.
Coefficient lists may be given as sequences or as comma/space separated
strings (``"0.5, 0.25"``).
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from tsgapkit.core.errors import EInvalidInput
from tsgapkit.time import TimeInterval, parse_interval

# ---------------------------
# Common
# ---------------------------


class BaseSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


_SPLIT = re.compile(r"[,\s]+")


def parse_number_list(value: Any) -> Any:
    """Turn ``"1, 2.5 3"`` into ``[1.0, 2.5, 3.0]``; other inputs pass through."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return []
    try:
        return [float(item) for item in _SPLIT.split(text) if item]
    except ValueError as exc:
        raise ValueError(f"cannot parse number list {value!r}") from exc


def build_spec(spec_cls: type[BaseSpec], data: BaseSpec | dict[str, Any]) -> Any:
    """Validate ``data`` as ``spec_cls``, reporting failures as ``EInvalidInput``."""
    if isinstance(data, spec_cls):
        return data
    if isinstance(data, BaseSpec):
        data = data.model_dump()
    try:
        return spec_cls.model_validate(data)
    except ValidationError as exc:
        raise EInvalidInput(
            f"Invalid {spec_cls.__name__}: {exc.error_count()} validation error(s)",
            context={"errors": [err["msg"] for err in exc.errors()]},
        ) from exc


# ---------------------------
# Regression
# ---------------------------


class RegressionCoefficients(BaseSpec):
    """Coefficients for ``y = a + b*x``.

    Either a single ``intercept``/``slope`` pair, or per-month pairs keyed
    by month number (1-12). Months may be omitted; missing values in those
    months are left unfilled.
    """

    intercept: float | None = None
    slope: float | None = None
    monthly_intercept: dict[int, float] = Field(default_factory=dict)
    monthly_slope: dict[int, float] = Field(default_factory=dict)
    transform: Literal["linear", "log"] = "linear"
    le_zero_value: float = Field(default=0.001, gt=0.0)

    @model_validator(mode="after")
    def _check_coefficients(self) -> RegressionCoefficients:
        single = self.intercept is not None or self.slope is not None
        monthly = bool(self.monthly_intercept or self.monthly_slope)
        if single and monthly:
            raise ValueError("give either intercept/slope or monthly coefficients, not both")
        if not single and not monthly:
            raise ValueError("no regression coefficients given")
        if single and (self.intercept is None or self.slope is None):
            raise ValueError("intercept and slope must both be given")
        if monthly:
            if set(self.monthly_intercept) != set(self.monthly_slope):
                raise ValueError("monthly intercept and slope must cover the same months")
            bad = sorted(m for m in self.monthly_intercept if not 1 <= m <= 12)
            if bad:
                raise ValueError(f"months must be 1-12, got {bad}")
        return self

    @property
    def monthly(self) -> bool:
        return bool(self.monthly_intercept)

    def for_month(self, month: int) -> tuple[float, float] | None:
        """Return ``(a, b)`` for a month, or None when that month has no pair."""
        if not self.monthly:
            assert self.intercept is not None and self.slope is not None
            return self.intercept, self.slope
        if month not in self.monthly_intercept:
            return None
        return self.monthly_intercept[month], self.monthly_slope[month]


# ---------------------------
# ARMA
# ---------------------------


class ARMASpec(BaseSpec):
    """ARMA filter definition.

    ``a`` weights previous outputs, ``b`` weights the current and previous
    inputs, both spaced ``arma_interval`` apart. ``input_previous`` holds
    the ``len(b) - 1`` inputs and ``output_previous`` the ``len(a)`` outputs
    preceding the first data value, oldest first. Each startup value covers
    one ``arma_interval``, whatever the data interval is.
    """

    a: list[float] = Field(default_factory=list)
    b: list[float]
    arma_interval: str
    input_previous: list[float] = Field(default_factory=list)
    output_previous: list[float] = Field(default_factory=list)
    output_min: float | None = None
    output_max: float | None = None

    @field_validator("a", "b", "input_previous", "output_previous", mode="before")
    @classmethod
    def _split_numbers(cls, value: Any) -> Any:
        return parse_number_list(value)

    @field_validator("arma_interval", mode="before")
    @classmethod
    def _normalize_interval(cls, value: Any) -> Any:
        if isinstance(value, TimeInterval):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_lengths(self) -> ARMASpec:
        if not self.b:
            raise ValueError("b coefficients must not be empty")
        try:
            parse_interval(self.arma_interval)
        except EInvalidInput as exc:
            raise ValueError(exc.message) from exc
        if self.input_previous and len(self.input_previous) != len(self.b) - 1:
            raise ValueError(
                f"input_previous needs {len(self.b) - 1} values, got {len(self.input_previous)}"
            )
        if self.output_previous and len(self.output_previous) != len(self.a):
            raise ValueError(
                f"output_previous needs {len(self.a)} values, got {len(self.output_previous)}"
            )
        if (
            self.output_min is not None
            and self.output_max is not None
            and self.output_min > self.output_max
        ):
            raise ValueError("output_min must not exceed output_max")
        return self

    @property
    def interval(self) -> TimeInterval:
        return parse_interval(self.arma_interval)


__all__ = [
    "BaseSpec",
    "RegressionCoefficients",
    "ARMASpec",
    "build_spec",
    "parse_number_list",
]
