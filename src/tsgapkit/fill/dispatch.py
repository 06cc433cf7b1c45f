"""Dispatch a :class:`FillConfig` to the matching fill algorithm."""

from __future__ import annotations

import logging
from typing import Any

from tsgapkit.core.config import FillConfig
from tsgapkit.core.errors import EInvalidInput
from tsgapkit.core.results import FillResult
from tsgapkit.fill.arma import arma_filter
from tsgapkit.fill.carry import fill_carry_forward, fill_constant
from tsgapkit.fill.interpolate import fill_interpolate
from tsgapkit.fill.pattern import fill_pattern
from tsgapkit.fill.prorate import fill_prorate
from tsgapkit.fill.regression import fill_regression
from tsgapkit.series.access import SeriesAccess

logger = logging.getLogger(__name__)

_AUX_KEYS = {"independent", "pattern", "stats", "coefficients", "arma", "output"}


def _require(aux: dict[str, Any], key: str, method: str) -> Any:
    value = aux.get(key)
    if value is None:
        raise EInvalidInput(
            f"Fill method '{method}' needs '{key}'.",
            context={"method": method, "given": sorted(aux)},
            fix_hint=f"Pass {key}=... to fill_gaps().",
        )
    return value


def fill_gaps(series: SeriesAccess, config: FillConfig, **aux: Any) -> FillResult:
    """Run the fill described by ``config`` on ``series``.

    Auxiliary inputs are passed by keyword: ``independent`` (prorate,
    regression), ``pattern`` and ``stats`` (pattern), ``coefficients``
    (regression), ``arma`` and optionally ``output`` (arma).

    Examples:
        >>> from tsgapkit.series import RegularSeries
        >>> ts = RegularSeries.from_values("Day", "2024-01-01", [1.0, None, 3.0])
        >>> fill_gaps(ts, FillConfig.interpolate()).filled_count
        1
    """
    unknown = set(aux) - _AUX_KEYS
    if unknown:
        raise EInvalidInput(
            f"Unknown fill inputs: {sorted(unknown)}",
            context={"allowed": sorted(_AUX_KEYS)},
        )
    method = config.method
    logger.debug("Dispatching fill method %s", method)

    if method == "carry_forward":
        return fill_carry_forward(series, config.start, config.end, config.direction, config.flag)
    if method == "constant":
        assert config.value is not None
        return fill_constant(series, config.value, config.start, config.end, config.flag)
    if method == "interpolate":
        return fill_interpolate(series, config.max_gap, config.start, config.end, config.flag)
    if method == "prorate":
        return fill_prorate(
            series,
            _require(aux, "independent", method),
            factor_mode=config.factor_mode,
            direction=config.direction,
            seed_mode=config.seed_mode,
            seed_value=config.seed_value,
            divisor=config.divisor,
            start=config.start,
            end=config.end,
            flag=config.flag,
        )
    if method == "pattern":
        return fill_pattern(
            series,
            _require(aux, "pattern", method),
            _require(aux, "stats", method),
            config.start,
            config.end,
            config.flag,
        )
    if method == "regression":
        return fill_regression(
            series,
            _require(aux, "independent", method),
            _require(aux, "coefficients", method),
            config.start,
            config.end,
            transform=config.transform if config.transform == "log" else None,
            flag=config.flag,
        )
    if method == "arma":
        return arma_filter(
            series,
            _require(aux, "arma", method),
            output=aux.get("output"),
            start=config.start,
            end=config.end,
            flag=config.flag,
        )
    raise EInvalidInput(f"Unknown fill method {method!r}", context={"method": method})


__all__ = ["fill_gaps"]
