"""
cli.py

`simtest-lookup` command: query an exported test result file.

    simtest-lookup param  <name> <result.yaml> [--strict]
    simtest-lookup signal <name> <result.yaml> [--out-csv out.csv] [--out-json out.json]
"""

from __future__ import annotations

import argparse
import json
import sys
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .errors import HarnessError, IterationOverrideMissingWarning
from .loaders import load_result
from .lookup import resolve_parameter, resolve_signal

PREFIX = "[simtest]"


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def summarize_signal(values: Sequence, times: Sequence) -> Dict[str, Any]:
    """
    Basic stats of a logged signal. Empty signals report zero samples and
    no bounds.
    """
    vals = np.asarray(values, dtype=float)
    ts = np.asarray(times, dtype=float)
    if vals.size == 0:
        return {"samples": 0, "t0": None, "t_end": None, "min": None, "mean": None, "max": None}

    return {
        "samples": int(vals.size),
        "t0": float(ts[0]),
        "t_end": float(ts[-1]),
        "min": float(np.nanmin(vals)),
        "mean": float(np.nanmean(vals)),
        "max": float(np.nanmax(vals)),
    }


def print_signal_summary(name: str, summary: Dict[str, Any]) -> None:
    header = (
        f"{'Signal':<20} {'Samples':>8} {'t0 [s]':>10} {'t_end [s]':>10} "
        f"{'Min':>12} {'Mean':>12} {'Max':>12}"
    )
    print(header)
    print("-" * len(header))

    if summary["samples"] == 0:
        print(f"{name:<20} {0:>8d} {'-':>10} {'-':>10} {'-':>12} {'-':>12} {'-':>12}")
        return

    print(
        f"{name:<20} {summary['samples']:>8d} "
        f"{summary['t0']:>10.4f} {summary['t_end']:>10.4f} "
        f"{summary['min']:>12.4g} {summary['mean']:>12.4g} {summary['max']:>12.4g}"
    )


def signal_frame(values: Sequence, times: Sequence) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "time": np.asarray(times, dtype=float),
            "value": np.asarray(values, dtype=float),
        }
    )


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_param(args: argparse.Namespace) -> int:
    result = load_result(Path(args.result))

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", IterationOverrideMissingWarning)
        value = resolve_parameter(args.name, result, allow_fallback=not args.strict)

    for w in caught:
        print(f"{PREFIX} WARNING: {w.message}", file=sys.stderr)

    print(f"{args.name} = {value}")
    return 0


def cmd_signal(args: argparse.Namespace) -> int:
    result = load_result(Path(args.result))
    values, times = resolve_signal(args.name, result)

    summary = summarize_signal(values, times)
    print_signal_summary(args.name, summary)

    if args.out_csv:
        out_csv = Path(args.out_csv)
        _ensure_parent(out_csv)
        signal_frame(values, times).to_csv(out_csv, index=False)
        print(f"{PREFIX} Wrote {summary['samples']} samples to {out_csv}")

    if args.out_json:
        out_json = Path(args.out_json)
        _ensure_parent(out_json)
        payload = {
            "signal": args.name,
            "summary": summary,
            "time": np.asarray(times, dtype=float).tolist(),
            "values": np.asarray(values, dtype=float).tolist(),
        }
        with out_json.open("w") as f:
            json.dump(payload, f, indent=2)
        print(f"{PREFIX} Wrote JSON to {out_json}")

    return 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simtest-lookup",
        description="Read overridden parameters and logged signals from an "
                    "exported simulation test result (YAML/JSON).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    param = sub.add_parser("param", help="Print the value of an overridden parameter.")
    param.add_argument("name", type=str)
    param.add_argument("result", type=str, help="Path to the result file")
    param.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of falling back to the top-level override when the "
             "iteration does not override the parameter.",
    )
    param.set_defaults(func=cmd_param)

    sig = sub.add_parser("signal", help="Summarize (and optionally export) a logged signal.")
    sig.add_argument("name", type=str)
    sig.add_argument("result", type=str, help="Path to the result file")
    sig.add_argument("--out-csv", default="", help="Optional CSV output (time,value)")
    sig.add_argument("--out-json", default="", help="Optional JSON output")
    sig.set_defaults(func=cmd_signal)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    result_path = Path(args.result)
    if not result_path.is_file():
        print(f"{PREFIX} Error: result file not found: {result_path}", file=sys.stderr)
        return 1

    try:
        return args.func(args)
    except HarnessError as e:
        print(f"{PREFIX} Error: {e}", file=sys.stderr)
        if e.hint:
            print(f"{PREFIX} Hint: {e.hint}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
