"""Recover overridden parameters and logged signals from simulation test results."""

import logging

from .errors import (
    HarnessError,
    IterationOverrideMissingWarning,
    NoLoggedDataError,
    NotFoundError,
    ResultFormatError,
    ResultLookupError,
    SignalStructureError,
    UnsupportedModeError,
)
from .loaders import load_result, result_from_dict
from .lookup import resolve_parameter, resolve_signal, to_double, unwrap_leaf
from .results import (
    ParameterOverride,
    ResultKind,
    SignalRecord,
    SignalSeries,
    TestResult,
    case_result,
    iteration_result,
)

logging.getLogger("simtest_harness").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "HarnessError",
    "IterationOverrideMissingWarning",
    "NoLoggedDataError",
    "NotFoundError",
    "ParameterOverride",
    "ResultFormatError",
    "ResultKind",
    "ResultLookupError",
    "SignalRecord",
    "SignalSeries",
    "SignalStructureError",
    "TestResult",
    "UnsupportedModeError",
    "case_result",
    "iteration_result",
    "load_result",
    "resolve_parameter",
    "resolve_signal",
    "result_from_dict",
    "to_double",
    "unwrap_leaf",
]
