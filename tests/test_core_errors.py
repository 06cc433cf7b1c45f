"""Tests for tsgapkit error types."""

from __future__ import annotations

import pytest

from tsgapkit.core.errors import (
    ERROR_REGISTRY,
    EIntervalIncompatible,
    EIntervalMismatch,
    EInvalidInput,
    EUnsupportedOperation,
    TSGapKitError,
    get_error_class,
)


class TestErrorHierarchy:
    """Error classes and codes."""

    @pytest.mark.parametrize(
        ("cls", "code"),
        [
            (EInvalidInput, "E_INVALID_INPUT"),
            (EIntervalMismatch, "E_INTERVAL_MISMATCH"),
            (EIntervalIncompatible, "E_INTERVAL_INCOMPATIBLE"),
            (EUnsupportedOperation, "E_UNSUPPORTED_OPERATION"),
        ],
    )
    def test_codes(self, cls: type[TSGapKitError], code: str) -> None:
        assert cls.error_code == code
        assert issubclass(cls, TSGapKitError)
        assert get_error_class(code) is cls

    def test_interval_errors_are_invalid_input(self) -> None:
        """Interval problems can be caught as invalid input."""
        assert issubclass(EIntervalMismatch, EInvalidInput)
        assert issubclass(EIntervalIncompatible, EInvalidInput)
        assert not issubclass(EUnsupportedOperation, EInvalidInput)

    def test_unknown_code_falls_back(self) -> None:
        assert get_error_class("E_NOPE") is TSGapKitError

    def test_registry_complete(self) -> None:
        assert set(ERROR_REGISTRY) == {
            "E_INVALID_INPUT",
            "E_INTERVAL_MISMATCH",
            "E_INTERVAL_INCOMPATIBLE",
            "E_UNSUPPORTED_OPERATION",
        }


class TestErrorRendering:
    """String form, fix hints and agent dicts."""

    def test_base_error_default_fix_hint_empty(self) -> None:
        err = TSGapKitError("something broke")
        assert err.fix_hint == ""
        assert str(err) == "[E_UNKNOWN] something broke"

    def test_context_and_hint_in_str(self) -> None:
        err = EInvalidInput("bad", context={"k": "v"}, fix_hint="fix it")
        s = str(err)
        assert s.startswith("[E_INVALID_INPUT] bad")
        assert "(context: {'k': 'v'})" in s
        assert "[hint: fix it]" in s

    def test_class_hint_preserved(self) -> None:
        """Passing fix_hint=None keeps the class-level default."""
        err = EUnsupportedOperation("irregular")
        assert "RegularSeries" in err.fix_hint

    def test_to_agent_dict(self) -> None:
        err = EIntervalMismatch("differ", context={"a": "1Day"})
        data = err.to_agent_dict()
        assert data["error_code"] == "E_INTERVAL_MISMATCH"
        assert data["message"] == "differ"
        assert data["context"] == {"a": "1Day"}
        assert data["fix_hint"]
