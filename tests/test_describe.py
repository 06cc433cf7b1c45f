"""Tests for tsgapkit.describe() API discovery function."""

from __future__ import annotations

from tsgapkit.discovery import describe


def test_describe_returns_dict() -> None:
    """describe() returns a dictionary."""
    result = describe()
    assert isinstance(result, dict)


def test_describe_has_expected_top_level_keys() -> None:
    """Result has version, apis, fill_methods, intervals, error_codes."""
    result = describe()
    expected_keys = {"version", "apis", "fill_methods", "intervals", "error_codes"}
    assert expected_keys == set(result.keys())


def test_describe_version_matches_package() -> None:
    """version field matches tsgapkit.__version__."""
    import tsgapkit

    result = describe()
    assert result["version"] == tsgapkit.__version__


def test_describe_error_codes_contains_registry() -> None:
    """error_codes contains all entries from ERROR_REGISTRY."""
    from tsgapkit.core.errors import ERROR_REGISTRY

    error_codes = describe()["error_codes"]
    for code in ERROR_REGISTRY:
        assert code in error_codes, f"Missing error code: {code}"
        assert {"class", "description", "fix_hint"} <= set(error_codes[code])


def test_describe_apis_are_exported() -> None:
    """Every listed function or class is importable from the package root."""
    import tsgapkit

    for entry in describe()["apis"].values():
        assert hasattr(tsgapkit, entry["function"]), entry["function"]


def test_describe_fill_methods() -> None:
    result = describe()
    assert "interpolate" in result["fill_methods"]
    assert "irregular" in result["intervals"]
