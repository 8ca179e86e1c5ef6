"""Periodic scan of labeled pods, one independent analysis per pod."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from pod_rca.diagnosis import DiagnosticPipeline, RcaReport
from pod_rca.observation import ClusterInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """Result of analyzing one pod during a scan."""

    namespace: str
    pod: str
    report: RcaReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WorkloadScanner:
    """Finds pods carrying the scan label and runs the pipeline on each.

    A failure on one pod is logged and recorded in its outcome; the
    remaining pods are still analyzed.
    """

    def __init__(
        self,
        cluster: ClusterInfo,
        pipeline: DiagnosticPipeline,
        label_selector: str,
        workers: int = 1,
    ) -> None:
        self.cluster = cluster
        self.pipeline = pipeline
        self.label_selector = label_selector
        self.workers = max(1, workers)

    def _analyze(self, target: tuple[str, str]) -> ScanOutcome:
        namespace, pod = target
        logger.info(">>> Starting analysis for pod %s/%s", namespace, pod)
        try:
            report = self.pipeline.run(namespace, pod)
        except Exception as e:
            logger.exception("Error analyzing pod %s/%s", namespace, pod)
            return ScanOutcome(namespace=namespace, pod=pod, error=str(e) or type(e).__name__)
        logger.info("<<< Analysis completed for pod %s. Decision: %s", pod, report.issue)
        return ScanOutcome(namespace=namespace, pod=pod, report=report)

    def scan(self) -> list[ScanOutcome]:
        """Analyze every labeled pod once, in listing order."""
        logger.info("Searching for pods with label: %s", self.label_selector)
        targets = self.cluster.list_labeled_pods(self.label_selector)
        if not targets:
            logger.info("No pods found with label: %s", self.label_selector)
            return []
        logger.info("Found %d pods to analyze.", len(targets))
        if self.workers == 1:
            return [self._analyze(t) for t in targets]
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="rca-scan") as pool:
            return list(pool.map(self._analyze, targets))

    def run_forever(
        self,
        interval_seconds: float,
        stop: threading.Event | None = None,
        on_outcome: Callable[[ScanOutcome], None] | None = None,
    ) -> None:
        """Scan every interval until stop is set; a failed listing does not end the loop.

        Each outcome of each scan is handed to on_outcome as soon as its scan ends.
        """
        stop = stop or threading.Event()
        while not stop.is_set():
            try:
                outcomes = self.scan()
            except Exception:
                logger.exception("Workload scan failed")
                outcomes = []
            if on_outcome is not None:
                for outcome in outcomes:
                    on_outcome(outcome)
            stop.wait(interval_seconds)
