"""
results.py

Read-only model of a test result as handed over by the test-execution
engine to a custom acceptance routine.

Two shapes exist:

  CASE       result of a test case run. Top-level parameter overrides and
             a `logsout` mapping of signal name -> logged series. When the
             case is one iteration of an iterated test, the iteration's own
             overrides are attached as well.

  ITERATION  result of one test iteration, e.g. read back from a saved
             results file. Iteration overrides, top-level overrides and a
             flat list of output-run signals.

The shape is carried explicitly in `TestResult.kind` and never re-derived
from the fields that happen to be filled in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Union

EQUIVALENCE_TEST = "Equivalence Test"


class ResultKind(str, Enum):
    CASE = "case"
    ITERATION = "iteration"


@dataclass(frozen=True)
class ParameterOverride:
    """A named value supplied to the simulation in place of its default."""

    name: str
    value: Any


@dataclass(frozen=True)
class SignalSeries:
    """
    A flat logged series (case results).

    `time` is what marks a leaf: nested structures are descended until an
    object exposing `time` is reached.
    """

    data: Sequence[float]
    time: Sequence[float]


@dataclass(frozen=True)
class SignalRecord:
    """One signal of an output run (iteration results)."""

    label: str
    values: Sequence[float]
    times: Sequence[float]


# A logsout entry is either a flat series or a (possibly deeply) nested
# structure of named fields, e.g. a logged bus.
LoggedSignal = Union[SignalSeries, Mapping[str, Any]]


@dataclass(frozen=True)
class TestResult:
    kind: ResultKind
    test_case_type: str = "Simulation Test"
    parameter_set: List[ParameterOverride] = field(default_factory=list)
    iteration_settings: Optional[List[ParameterOverride]] = None
    iteration_name: str = ""
    logsout: Optional[Mapping[str, LoggedSignal]] = None
    output_runs: Optional[List[SignalRecord]] = None

    # keep pytest from collecting this as a test class
    __test__ = False

    @property
    def is_equivalence(self) -> bool:
        return self.test_case_type == EQUIVALENCE_TEST

    @property
    def is_iteration(self) -> bool:
        return self.kind is ResultKind.ITERATION


def case_result(
    parameter_set: Optional[List[ParameterOverride]] = None,
    logsout: Optional[Mapping[str, LoggedSignal]] = None,
    *,
    iteration_settings: Optional[List[ParameterOverride]] = None,
    iteration_name: str = "",
    test_case_type: str = "Simulation Test",
) -> TestResult:
    return TestResult(
        kind=ResultKind.CASE,
        test_case_type=test_case_type,
        parameter_set=list(parameter_set or []),
        iteration_settings=iteration_settings,
        iteration_name=iteration_name,
        logsout=logsout if logsout is not None else {},
    )


def iteration_result(
    iteration_settings: Optional[List[ParameterOverride]] = None,
    output_runs: Optional[List[SignalRecord]] = None,
    *,
    parameter_set: Optional[List[ParameterOverride]] = None,
    iteration_name: str = "",
    test_case_type: str = "Simulation Test",
) -> TestResult:
    return TestResult(
        kind=ResultKind.ITERATION,
        test_case_type=test_case_type,
        parameter_set=list(parameter_set or []),
        iteration_settings=list(iteration_settings or []),
        iteration_name=iteration_name,
        output_runs=list(output_runs or []),
    )


__all__ = [
    "EQUIVALENCE_TEST",
    "LoggedSignal",
    "ParameterOverride",
    "ResultKind",
    "SignalRecord",
    "SignalSeries",
    "TestResult",
    "case_result",
    "iteration_result",
]
