"""
loaders.py

Build a TestResult from an exported result file (YAML or JSON).

Expected shape (YAML shown, JSON is the same structure):

  kind: case                     # or: iteration (inferred when omitted)
  test_case_type: Simulation Test
  iteration_name: ""
  parameter_set:
    - variable: Gain
      value: "2.5"
  iteration_settings:            # optional
    - parameter_name: Gain
      value: 3
  logsout:                       # case results
    Speed:
      data: [0.0, 1.0, 2.0]
      time: [0.0, 0.1, 0.2]
    MotorBus:                    # nested structure, any depth
      torque:
        data: [...]
        time: [...]
  output_runs:                   # iteration results
    - label: Speed
      values: [0.0, 1.0, 2.0]
      times: [0.0, 0.1, 0.2]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import yaml

from .errors import ResultFormatError
from .results import (
    LoggedSignal,
    ParameterOverride,
    ResultKind,
    SignalRecord,
    SignalSeries,
    TestResult,
)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------

def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ResultFormatError(f"Could not parse {path}: {e}") from e


def load_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResultFormatError(f"Could not parse {path}: {e}") from e


def load_result(path: Path) -> TestResult:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        data = load_yaml(path)
    elif suffix in JSON_SUFFIXES:
        data = load_json(path)
    else:
        raise ResultFormatError(
            f"Unsupported result file extension: {suffix or '(none)'}",
            hint="Use .yaml, .yml or .json.",
        )
    if not isinstance(data, dict):
        raise ResultFormatError(f"Top level of {path} must be a mapping.")
    return result_from_dict(data)


# ---------------------------------------------------------------------------
# Entry parsing
# ---------------------------------------------------------------------------

def _series(raw: Any, what: str) -> np.ndarray:
    if raw is None:
        raise ResultFormatError(f"{what} is missing.")
    try:
        arr = np.asarray(raw, dtype=float)
    except (TypeError, ValueError) as e:
        raise ResultFormatError(f"{what} is not a numeric sequence.") from e
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ResultFormatError(f"{what} must be a flat sequence, got {arr.ndim} dimensions.")
    return arr


def _check_time(values: np.ndarray, times: np.ndarray, what: str) -> None:
    if len(values) != len(times):
        raise ResultFormatError(
            f"{what}: {len(values)} samples but {len(times)} time stamps."
        )
    if times.size > 1 and np.any(np.diff(times) < 0):
        raise ResultFormatError(f"{what}: time stamps decrease.")


def _overrides(raw: Any, name_keys: tuple, what: str) -> List[ParameterOverride]:
    if not isinstance(raw, list):
        raise ResultFormatError(f"'{what}' must be a list of name/value entries.")

    out: List[ParameterOverride] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "value" not in item:
            raise ResultFormatError(f"'{what}[{i}]' needs a name and a value.")
        name = next((item[k] for k in name_keys if k in item), None)
        if not isinstance(name, str) or not name:
            raise ResultFormatError(
                f"'{what}[{i}]' needs one of {', '.join(name_keys)}."
            )
        out.append(ParameterOverride(name=name, value=item["value"]))
    return out


def _is_leaf(node: Mapping[str, Any]) -> bool:
    return "data" in node and "time" in node


def _logged_signal(raw: Any, path: str) -> LoggedSignal:
    if not isinstance(raw, dict):
        raise ResultFormatError(f"logsout entry '{path}' must be a mapping.")

    if _is_leaf(raw):
        data = _series(raw["data"], f"logsout '{path}' data")
        time = _series(raw["time"], f"logsout '{path}' time")
        _check_time(data, time, f"logsout '{path}'")
        return SignalSeries(data=data, time=time)

    # Nested structure: keep field order, it decides which leaf is used.
    return {key: _logged_signal(value, f"{path}.{key}") for key, value in raw.items()}


def _output_runs(raw: Any) -> List[SignalRecord]:
    if not isinstance(raw, list):
        raise ResultFormatError("'output_runs' must be a list of signals.")

    records: List[SignalRecord] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not {"label", "values", "times"} <= item.keys():
            raise ResultFormatError(
                f"'output_runs[{i}]' needs label, values and times."
            )
        label = str(item["label"])
        values = _series(item["values"], f"output run '{label}' values")
        times = _series(item["times"], f"output run '{label}' times")
        _check_time(values, times, f"output run '{label}'")
        records.append(SignalRecord(label=label, values=values, times=times))
    return records


def _kind(data: Mapping[str, Any]) -> ResultKind:
    raw = data.get("kind")
    if raw is None:
        return ResultKind.ITERATION if "output_runs" in data else ResultKind.CASE
    try:
        return ResultKind(str(raw).lower())
    except ValueError as e:
        raise ResultFormatError(
            f"Unknown result kind: {raw!r}",
            hint="Use 'case' or 'iteration'.",
        ) from e


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------

def result_from_dict(data: Mapping[str, Any]) -> TestResult:
    kind = _kind(data)

    iteration_settings: Optional[List[ParameterOverride]] = None
    if data.get("iteration_settings") is not None:
        iteration_settings = _overrides(
            data["iteration_settings"],
            ("parameter_name", "name"),
            "iteration_settings",
        )
    elif kind is ResultKind.ITERATION:
        iteration_settings = []

    logsout = None
    output_runs = None
    if kind is ResultKind.CASE:
        raw_logs = data.get("logsout") or {}
        if not isinstance(raw_logs, dict):
            raise ResultFormatError("'logsout' must be a mapping of signal name to series.")
        logsout = {name: _logged_signal(raw, name) for name, raw in raw_logs.items()}
    else:
        output_runs = _output_runs(data.get("output_runs") or [])

    return TestResult(
        kind=kind,
        test_case_type=str(data.get("test_case_type", "Simulation Test")),
        parameter_set=_overrides(
            data.get("parameter_set") or [], ("variable", "name"), "parameter_set"
        ),
        iteration_settings=iteration_settings,
        iteration_name=str(data.get("iteration_name") or ""),
        logsout=logsout,
        output_runs=output_runs,
    )


__all__ = ["load_json", "load_result", "load_yaml", "result_from_dict"]
