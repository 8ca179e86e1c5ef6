"""Aggregate pod status, events, metrics, logs and JFR analysis into one context."""

from __future__ import annotations

import logging
from typing import Callable

from pod_rca.observation.cluster import ClusterInfo
from pod_rca.observation.metrics import MetricSummarizer
from pod_rca.observation.models import DiagnosticContext, EventSummary, PodStatusSummary
from pod_rca.observation.profiling import CryostatClient

logger = logging.getLogger(__name__)

DEFAULT_LOG_TAIL_LINES = 500

POD_NOT_FOUND = "Pod not found"
NO_EVENTS = "No events found for this pod."
NO_LOGS = "No logs available (even from terminated container)"
PROFILING_DISABLED = "JFR Analysis is disabled."


def format_pod_status(status: PodStatusSummary) -> str:
    """Render pod phase and container states as indented text."""
    lines = [f"Phase: {status.phase}"]
    for c in status.containers:
        lines.append(f"Container: {c.name}")
        lines.append(f"  Ready: {c.ready}")
        lines.append(f"  Restart Count: {c.restart_count}")
        if c.waiting:
            lines.append(f"  Current State: Waiting ({c.waiting_reason})")
            lines.append(f"  Message: {c.waiting_message}")
        if c.previously_terminated:
            finished = c.last_finished_at.isoformat() if c.last_finished_at else None
            lines.append(f"  Last State: Terminated ({c.last_terminated_reason})")
            lines.append(f"  Exit Code: {c.last_exit_code}")
            lines.append(f"  Finished At: {finished}")
    return "\n".join(lines) + "\n"


def format_events(events: list[EventSummary]) -> str:
    if not events:
        return NO_EVENTS
    return "".join(
        f"[{e.timestamp.isoformat() if e.timestamp else None}] "
        f"Type: {e.type}, Reason: {e.reason}, Message: {e.message}\n"
        for e in events
    )


class ContextAggregator:
    """Collects every diagnostic section for one pod.

    Each section is fetched independently; a failing fetch is logged and its
    error message takes the place of that section's text.
    """

    def __init__(
        self,
        cluster: ClusterInfo,
        summarizer: MetricSummarizer,
        profiler: CryostatClient | None = None,
        profiling_enabled: bool = False,
        log_tail_lines: int = DEFAULT_LOG_TAIL_LINES,
    ) -> None:
        self.cluster = cluster
        self.summarizer = summarizer
        self.profiler = profiler
        self.profiling_enabled = profiling_enabled and profiler is not None
        self.log_tail_lines = log_tail_lines

    def collect(self, namespace: str, pod: str) -> DiagnosticContext:
        logger.info("Starting data collection for %s/%s", namespace, pod)
        context = DiagnosticContext(
            pod_status_text=self._section("pod status", lambda: self.fetch_pod_status(namespace, pod)),
            events_text=self._section("events", lambda: self.fetch_events(namespace, pod)),
            metrics_text=self.summarizer.summarize(namespace, pod),
            logs_text=self._section("logs", lambda: self.fetch_logs(namespace, pod)),
            profiling_text=self._section("JFR analysis", lambda: self.fetch_profiling(pod)),
        )
        logger.info(
            "Data collection complete. Metrics summary length: %d, full context length: %d",
            len(context.metrics_text),
            len(context.full_context),
        )
        return context

    def _section(self, name: str, fetch: Callable[[], str]) -> str:
        try:
            return fetch()
        except Exception as e:
            logger.exception("Failed to fetch %s", name)
            return f"Error fetching {name}: {e}"

    def fetch_pod_status(self, namespace: str, pod: str) -> str:
        status = self.cluster.get_pod_status(namespace, pod)
        if status is None:
            return POD_NOT_FOUND
        return format_pod_status(status)

    def fetch_events(self, namespace: str, pod: str) -> str:
        events = self.cluster.get_events(namespace, pod)
        logger.info("Gathered %d events", len(events))
        return format_events(events)

    def fetch_logs(self, namespace: str, pod: str) -> str:
        """Tail of the current container log, falling back to the previous instance."""
        logs = self.cluster.get_logs(namespace, pod, self.log_tail_lines)
        if not logs.strip():
            logger.info("Current logs empty, fetching previous container logs for %s", pod)
            logs = self.cluster.get_logs(namespace, pod, self.log_tail_lines, previous=True)
        logger.info("Gathered logs (length: %d)", len(logs))
        return logs if logs else NO_LOGS

    def close(self) -> None:
        """Release the HTTP clients behind the metrics and profiling sections."""
        self.summarizer.close()
        if self.profiler is not None:
            self.profiler.close()

    def fetch_profiling(self, target: str) -> str:
        if not self.profiling_enabled:
            logger.info("Cryostat is disabled. Skipping JFR analysis fetch.")
            return PROFILING_DISABLED
        report = self.profiler.get_report(target)
        logger.info("Gathered JFR report (length: %d)", len(report))
        return report
