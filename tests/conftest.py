"""Shared fixtures: hand-built test results and exported result files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from simtest_harness.results import (
    ParameterOverride,
    SignalRecord,
    SignalSeries,
    TestResult,
    case_result,
    iteration_result,
)


@pytest.fixture
def flat_series() -> SignalSeries:
    return SignalSeries(data=[1, 2, 3], time=[0, 0.1, 0.2])


@pytest.fixture
def case(flat_series: SignalSeries) -> TestResult:
    return case_result(
        parameter_set=[
            ParameterOverride("Gain", 2.5),
            ParameterOverride("Threshold", "3.14"),
            ParameterOverride("Mode", "fast"),
        ],
        logsout={"S": flat_series},
    )


@pytest.fixture
def iteration() -> TestResult:
    return iteration_result(
        iteration_settings=[ParameterOverride("Gain", 4)],
        output_runs=[
            SignalRecord("Speed", [0.0, 1.0, 2.0], [0.0, 0.5, 1.0]),
            SignalRecord("Trip", [0, 0, 1], [0.0, 0.5, 1.0]),
        ],
        parameter_set=[
            ParameterOverride("Gain", 2.5),
            ParameterOverride("Offset", "-1.5"),
        ],
        iteration_name="Iteration 2",
    )


@pytest.fixture
def case_document() -> dict[str, Any]:
    return {
        "kind": "case",
        "test_case_type": "Simulation Test",
        "parameter_set": [
            {"variable": "Gain", "value": "2.5"},
            {"variable": "Enabled", "value": 1},
        ],
        "logsout": {
            "Speed": {"data": [0.0, 1.0, 2.0], "time": [0.0, 0.1, 0.2]},
            "MotorBus": {
                "electrical": {
                    "current": {"data": [5.0, 6.0], "time": [0.0, 0.5]},
                    "voltage": {"data": [230.0, 231.0], "time": [0.0, 0.5]},
                },
            },
        },
    }


@pytest.fixture
def iteration_document() -> dict[str, Any]:
    return {
        "kind": "iteration",
        "iteration_name": "Iteration 1",
        "parameter_set": [{"variable": "Gain", "value": 2.5}],
        "iteration_settings": [{"parameter_name": "Gain", "value": "7"}],
        "output_runs": [
            {"label": "Speed", "values": [0.0, 1.0], "times": [0.0, 1.0]},
        ],
    }


@pytest.fixture
def case_yaml(tmp_path: Path, case_document: dict[str, Any]) -> Path:
    path = tmp_path / "case.yaml"
    path.write_text(yaml.safe_dump(case_document, sort_keys=False))
    return path


@pytest.fixture
def iteration_json(tmp_path: Path, iteration_document: dict[str, Any]) -> Path:
    path = tmp_path / "iteration.json"
    path.write_text(json.dumps(iteration_document))
    return path
