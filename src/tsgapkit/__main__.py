"""CLI entry point for tsgapkit.

Enables ``python -m tsgapkit <command>`` usage.

Subcommands:
    doctor: Environment check: dependencies and versions.
    describe: Machine-readable API schema (JSON to stdout).
    version: Print tsgapkit version.
    fill: Fill gaps in a CSV file with ``ds``/``y`` columns.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys


def _check_import(module_name: str) -> tuple[bool, str | None]:
    """Try importing a module and return (success, version_or_none)."""
    try:
        mod = importlib.import_module(module_name)
        version = getattr(mod, "__version__", getattr(mod, "VERSION", None))
        return True, str(version) if version is not None else "installed"
    except ImportError:
        return False, None


def _cmd_doctor() -> int:
    """Run environment diagnostics."""
    import tsgapkit

    print(f"tsgapkit {tsgapkit.__version__}")
    print(f"Python {sys.version}")
    print()

    core_deps = [
        ("pandas", "pandas"),
        ("numpy", "numpy"),
        ("pydantic", "pydantic"),
    ]

    print("Core dependencies:")
    all_core_ok = True
    for display_name, module_name in core_deps:
        ok, version = _check_import(module_name)
        status = f"  {version}" if ok else "  NOT INSTALLED"
        marker = "ok" if ok else "MISSING"
        print(f"  [{marker:>7s}] {display_name}{status}")
        if not ok:
            all_core_ok = False

    print()

    print("Test tier (pip install tsgapkit[test]):")
    ok, version = _check_import("pytest")
    status = f"  {version}" if ok else "  not installed"
    marker = "ok" if ok else "---"
    print(f"  [{marker:>7s}] pytest{status}")

    print()

    if all_core_ok:
        print("All systems go.")
    else:
        print("WARNING: Some core dependencies are missing. Install with:")
        print("  pip install tsgapkit")

    return 0


def _cmd_describe() -> int:
    """Print machine-readable API schema as JSON."""
    from tsgapkit.discovery import describe

    info = describe()
    json.dump(info, sys.stdout, indent=2, default=str)
    print()  # trailing newline
    return 0


def _cmd_version() -> int:
    """Print version string."""
    import tsgapkit

    print(tsgapkit.__version__)
    return 0


def _cmd_fill(args: argparse.Namespace) -> int:
    """Fill a CSV series and write the result as CSV."""
    import pandas as pd

    from tsgapkit.core.config import FillConfig
    from tsgapkit.core.errors import TSGapKitError
    from tsgapkit.fill import fill_gaps
    from tsgapkit.series import irregular_from_pandas, regular_from_pandas, to_frame

    try:
        df = pd.read_csv(args.input)
        if args.irregular:
            series = irregular_from_pandas(df, precision=args.interval)
        else:
            series = regular_from_pandas(df, args.interval)
        config = FillConfig(
            method=args.method,
            flag=args.flag,
            max_gap=args.max_gap,
            direction=args.direction,
            value=args.value,
        )
        result = fill_gaps(series, config)
    except (TSGapKitError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out = to_frame(series)
    if args.output:
        out.to_csv(args.output, index=False)
    else:
        out.to_csv(sys.stdout, index=False)
    print(json.dumps(result.summary()), file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tsgapkit",
        description="tsgapkit: time series storage and gap filling",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("doctor", help="Environment check: dependencies and versions")
    subparsers.add_parser("describe", help="Machine-readable API schema (JSON)")
    subparsers.add_parser("version", help="Print version")

    fill = subparsers.add_parser("fill", help="Fill gaps in a CSV with ds,y columns")
    fill.add_argument("input", help="Input CSV path")
    fill.add_argument("-o", "--output", help="Output CSV path (default: stdout)")
    fill.add_argument(
        "--method",
        choices=["carry_forward", "constant", "interpolate"],
        default="interpolate",
    )
    fill.add_argument("--interval", default="Day", help="Data interval, e.g. Day, 6Hour, 15Min")
    fill.add_argument("--irregular", action="store_true", help="Treat data as irregular")
    fill.add_argument("--max-gap", type=int, default=0, help="Largest gap to interpolate (0 = any)")
    fill.add_argument("--direction", choices=["forward", "backward"], default="forward")
    fill.add_argument("--value", type=float, default=None, help="Value for the constant method")
    fill.add_argument("--flag", default="", help="Flag for filled values")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "doctor":
        return _cmd_doctor()
    elif args.command == "describe":
        return _cmd_describe()
    elif args.command == "version":
        return _cmd_version()
    elif args.command == "fill":
        return _cmd_fill(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
