"""Tests for pod_rca.agent.scanner: labeled pod scans with per-pod isolation."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from pod_rca.agent.scanner import WorkloadScanner
from pod_rca.diagnosis.models import RcaReport


def _pipeline(failing: set[str]) -> MagicMock:
    def run(namespace: str, pod: str) -> RcaReport:
        if pod in failing:
            raise RuntimeError(f"validator timed out for {pod}")
        return RcaReport(title=f"report {pod}", issue="OOM")

    m = MagicMock()
    m.run.side_effect = run
    return m


@pytest.fixture
def targets() -> list[tuple[str, str]]:
    return [("shop", "web-1"), ("shop", "web-2"), ("batch", "job-9")]


@pytest.mark.parametrize("workers", [1, 3])
def test_failure_does_not_abort_siblings(cluster, targets, workers: int) -> None:
    cluster.list_labeled_pods.return_value = targets
    pipeline = _pipeline(failing={"web-2"})

    outcomes = WorkloadScanner(cluster, pipeline, "rca=enabled", workers=workers).scan()

    assert [(o.namespace, o.pod) for o in outcomes] == targets
    assert [o.ok for o in outcomes] == [True, False, True]
    assert outcomes[0].report.title == "report web-1"
    assert outcomes[1].report is None
    assert outcomes[1].error == "validator timed out for web-2"
    assert pipeline.run.call_count == 3
    cluster.list_labeled_pods.assert_called_once_with("rca=enabled")


def test_no_labeled_pods(cluster) -> None:
    cluster.list_labeled_pods.return_value = []
    pipeline = _pipeline(failing=set())
    assert WorkloadScanner(cluster, pipeline, "rca=enabled").scan() == []
    pipeline.run.assert_not_called()


def test_run_forever_survives_listing_errors(cluster) -> None:
    stop = threading.Event()
    calls = []

    def listing(selector: str):
        calls.append(selector)
        if len(calls) == 1:
            raise RuntimeError("apiserver unavailable")
        stop.set()
        return []

    cluster.list_labeled_pods.side_effect = listing
    WorkloadScanner(cluster, _pipeline(failing=set()), "rca=enabled").run_forever(0.0, stop=stop)
    assert len(calls) == 2


def test_run_forever_reports_every_outcome(cluster, targets) -> None:
    stop = threading.Event()
    seen = []

    def report(outcome) -> None:
        seen.append(outcome)
        if len(seen) == len(targets):
            stop.set()

    cluster.list_labeled_pods.return_value = targets
    WorkloadScanner(cluster, _pipeline(failing={"job-9"}), "rca=enabled").run_forever(
        0.0, stop=stop, on_outcome=report
    )

    assert [(o.namespace, o.pod) for o in seen] == targets
    assert seen[0].report.title == "report web-1"
    assert seen[2].error == "validator timed out for job-9"
