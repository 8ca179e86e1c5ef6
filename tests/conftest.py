"""Shared fixtures: stub collaborators for the collection and diagnosis layers."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from pod_rca.diagnosis.models import RcaReport
from pod_rca.observation.models import (
    ContainerStatusSummary,
    EventSummary,
    PodResources,
    PodStatusSummary,
)


def prom_result(*values: float) -> dict:
    """Prometheus instant-vector response with one series per value."""
    return {
        "status": "success",
        "data": {
            "resultType": "vector",
            "result": [{"metric": {}, "value": [1718000000.0, str(v)]} for v in values],
        },
    }


class StubReasoning:
    """ReasoningBackend that records calls and returns canned answers."""

    def __init__(self, anomaly: str = "OOM_KILLED", report: RcaReport | None = None) -> None:
        self.anomaly = anomaly
        self.report = report or RcaReport(
            title="OOM Killed",
            issue="Container exceeded its memory limit",
            evidence="Memory at 99% of limit",
            supported_logs=["java.lang.OutOfMemoryError: Java heap space"],
            proposed_solution="Raise the memory limit",
            validation_confidence=0.9,
        )
        self.calls: list[tuple] = []

    def classify(self, context: str) -> str:
        self.calls.append(("classify", context))
        return self.anomaly

    def explain_root_cause(self, anomaly_type: str, context: str) -> str:
        self.calls.append(("explain_root_cause", anomaly_type, context))
        return "heap exhausted by cache growth"

    def validate_and_format(self, rca_output: str, context: str) -> RcaReport:
        self.calls.append(("validate_and_format", rca_output, context))
        return self.report

    def called(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)


@pytest.fixture
def cluster() -> MagicMock:
    """ClusterInfo mock describing a crash-looping single-container pod."""
    m = MagicMock()
    m.get_pod_spec.return_value = PodResources(
        limits={"cpu": "500m", "memory": "256Mi"},
        requests={"cpu": "250m", "memory": "128Mi"},
    )
    m.get_pod_status.return_value = PodStatusSummary(
        phase="Running",
        containers=[
            ContainerStatusSummary(
                name="app",
                ready=False,
                restart_count=4,
                waiting=True,
                waiting_reason="CrashLoopBackOff",
                waiting_message="back-off 40s restarting failed container",
                last_terminated_reason="OOMKilled",
                last_exit_code=137,
            )
        ],
    )
    m.get_events.return_value = [
        EventSummary(type="Warning", reason="BackOff", message="Back-off restarting failed container"),
    ]
    m.get_logs.return_value = "starting app\njava.lang.OutOfMemoryError: Java heap space\n"
    return m


@pytest.fixture
def prometheus() -> MagicMock:
    m = MagicMock()
    m.query.return_value = prom_result(128 * 1024 * 1024)
    return m


@pytest.fixture
def reasoning() -> StubReasoning:
    return StubReasoning()


@pytest.fixture(name="prom_result")
def prom_result_fixture():
    return prom_result
