"""
lookup.py

Recover overridden parameters and logged signals from a test result.

Typical use, from inside a custom acceptance routine:

    gain = resolve_parameter("Gain", result)
    trip, trip_time = resolve_signal("TripSignal", result)

Parameters are searched in two places:

  1) the iteration's own overrides (when the result carries them)
  2) the top-level parameter set

A miss in (1) is not an error: a parameter the iteration did not touch
keeps its top-level value, so the lookup warns and falls back to (2).
"""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .errors import (
    IterationOverrideMissingWarning,
    NoLoggedDataError,
    NotFoundError,
    SignalStructureError,
    UnsupportedModeError,
)
from .results import ParameterOverride, ResultKind, SignalRecord, TestResult

log = logging.getLogger(__name__)

# Deepest bus/structure nesting followed before giving up on a logged signal.
MAX_NESTING_DEPTH = 32


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def to_double(value: Any) -> Any:
    """
    Return `value` as a number.

    Numbers are returned unchanged. Text is parsed permissively: anything
    that does not read as a number becomes NaN instead of raising.

    Two deliberate departures from MATLAB's str2double:
      - bools are numbers here and pass through (True -> True), not NaN
      - commas are not thousands separators: "1,000" -> NaN, not 1000
    """
    if isinstance(value, numbers.Number):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return math.nan
        return float(pd.to_numeric(text, errors="coerce"))
    return math.nan


def _find_override(
    name: str, overrides: Iterable[ParameterOverride]
) -> Optional[ParameterOverride]:
    for entry in overrides:
        if entry.name == name:
            return entry
    return None


def _find_record(name: str, records: Iterable[SignalRecord]) -> Optional[SignalRecord]:
    for record in records:
        if record.label == name:
            return record
    return None


def unwrap_leaf(node: Any, max_depth: int = MAX_NESTING_DEPTH) -> Any:
    """
    Descend through the first field of each structure level until a flat
    series (an object exposing `time`) is reached.
    """
    depth = 0
    while not hasattr(node, "time"):
        if not isinstance(node, Mapping):
            raise SignalStructureError(
                f"Expected a structure or a series with a 'time' attribute, "
                f"got {type(node).__name__}."
            )
        if depth >= max_depth:
            raise SignalStructureError(
                f"No flat series found within {max_depth} levels of nesting.",
                hint="Check the logged bus for a cyclic or runaway structure.",
            )
        fields = list(node.keys())
        if not fields:
            raise SignalStructureError("Logged structure has an empty level.")
        node = node[fields[0]]
        depth += 1
    return node


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

def resolve_parameter(
    name: str, result: TestResult, *, allow_fallback: bool = True
) -> Any:
    """
    Return the overridden value of parameter `name` in `result`.

    Raises:
        UnsupportedModeError: `result` is an equivalence test (two parameter
            sets, no way to pick one).
        NotFoundError: `name` is not overridden anywhere, or only missing
            from the iteration overrides when `allow_fallback` is False.
    """
    if result.is_equivalence:
        raise UnsupportedModeError(
            f"Cannot resolve parameter '{name}' for an equivalence test: "
            "two sets of results are returned.",
            hint="Read the parameter from the chosen simulation's result set directly.",
        )

    if result.iteration_settings is not None:
        entry = _find_override(name, result.iteration_settings)
        if entry is not None:
            log.debug("Parameter %s resolved from iteration overrides", name)
            return to_double(entry.value)

        if not allow_fallback:
            raise NotFoundError(
                f"Parameter '{name}' is not overridden in this iteration.",
                name=name,
            )
        warnings.warn(
            f"Parameter '{name}' not found in the iteration overrides, "
            "probably not changed in this iteration; using the top-level override.",
            IterationOverrideMissingWarning,
            stacklevel=2,
        )

    entry = _find_override(name, result.parameter_set)
    if entry is None:
        raise NotFoundError(
            f"Parameter '{name}' is not among the overridden parameters of this test.",
            name=name,
            hint="Select it as an overridden parameter of the test case or iteration.",
        )
    log.debug("Parameter %s resolved from the parameter set", name)
    return to_double(entry.value)


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

def _signal_from_logsout(name: str, result: TestResult) -> Tuple[Sequence, Sequence]:
    logsout = result.logsout
    if not logsout:
        raise NoLoggedDataError(
            "The test results do not contain any logged signals.",
            hint="Enable signal logging in the test model.",
        )
    if name not in logsout:
        raise NotFoundError(f"Signal '{name}' was not logged in this test.", name=name)

    entry = logsout[name]
    if not hasattr(entry, "time"):
        log.debug("Signal %s is a structure, descending to its first leaf", name)
        entry = unwrap_leaf(entry)
    return entry.data, entry.time


def _signal_from_output_runs(name: str, result: TestResult) -> Tuple[Sequence, Sequence]:
    runs = result.output_runs
    if not runs:
        raise NoLoggedDataError(
            "The iteration results do not contain any output-run signals.",
            hint="Enable signal logging in the test model.",
        )
    record = _find_record(name, runs)
    if record is None:
        labels = [r.label for r in runs]
        raise NotFoundError(
            f"Signal '{name}' not found in the output runs. "
            f"Available labels include (first few): {labels[:20]}",
            name=name,
        )
    return record.values, record.times


def resolve_signal(name: str, result: TestResult) -> Tuple[Sequence, Sequence]:
    """
    Return `(values, times)` of the logged signal `name`.

    Raises:
        NoLoggedDataError: nothing was logged at all.
        NotFoundError: the signal was not logged.
        SignalStructureError: a logged structure has no reachable leaf.
    """
    if result.kind is ResultKind.CASE:
        return _signal_from_logsout(name, result)
    return _signal_from_output_runs(name, result)


__all__ = [
    "MAX_NESTING_DEPTH",
    "resolve_parameter",
    "resolve_signal",
    "to_double",
    "unwrap_leaf",
]
