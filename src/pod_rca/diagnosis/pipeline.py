"""Diagnostic pipeline: collect → detect → analyze → validate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pod_rca.diagnosis.models import RcaReport
from pod_rca.diagnosis.reasoning import ReasoningBackend
from pod_rca.observation.collector import ContextAggregator
from pod_rca.observation.models import DiagnosticContext

logger = logging.getLogger(__name__)

HEALTHY = "HEALTHY"


class Stage(str, Enum):
    """States of a single pipeline run."""

    COLLECTING = "collecting"
    DETECTING = "detecting"
    HEALTHY_SHORT_CIRCUIT = "healthy_short_circuit"
    ANALYZING = "analyzing"
    VALIDATING = "validating"
    DONE = "done"


def sanitize_anomaly(raw: str | None) -> str:
    """Reduce raw classifier output to its first line, minus any '#' comment."""
    if not raw:
        return ""
    return raw.splitlines()[0].split("#", 1)[0].strip()


def is_healthy(anomaly_type: str) -> bool:
    """True for an empty token or one mentioning HEALTHY in any case.

    Matching is a substring test so verbose answers such as
    "Pod looks healthy" still take the short path.
    """
    return not anomaly_type or HEALTHY in anomaly_type.upper()


@dataclass(frozen=True)
class PipelineRun:
    """Everything one run produced, for callers that want more than the report."""

    namespace: str
    pod: str
    context: DiagnosticContext
    anomaly_type: str
    path: tuple[Stage, ...]
    report: RcaReport
    rca_output: str | None = None

    @property
    def healthy(self) -> bool:
        return Stage.HEALTHY_SHORT_CIRCUIT in self.path


class DiagnosticPipeline:
    """Runs the staged analysis for one pod; holds no per-run state."""

    def __init__(self, aggregator: ContextAggregator, reasoning: ReasoningBackend) -> None:
        self.aggregator = aggregator
        self.reasoning = reasoning

    def __enter__(self) -> DiagnosticPipeline:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.aggregator.close()

    def run(self, namespace: str, pod: str) -> RcaReport:
        """Analyze a pod and return exactly one report."""
        return self.run_with_context(namespace, pod).report

    def run_with_context(self, namespace: str, pod: str) -> PipelineRun:
        """
        Analyze a pod and return the report together with the collected context.

        Reasoning failures are not caught here; they propagate to the caller.
        """
        logger.info("Starting RCA analysis for %s/%s", namespace, pod)
        path = [Stage.COLLECTING]
        context = self.aggregator.collect(namespace, pod)
        full_context = context.full_context

        path.append(Stage.DETECTING)
        logger.info("Step 1: running anomaly detection")
        logger.debug("Context for anomaly detection:\n%s", full_context)
        raw_anomaly = self.reasoning.classify(full_context)
        logger.info("Raw anomaly detector response: [%s]", raw_anomaly)
        anomaly_type = sanitize_anomaly(raw_anomaly)
        logger.info("Sanitized anomaly type: [%s]", anomaly_type)

        if is_healthy(anomaly_type):
            logger.info("System is healthy or no anomaly detected. Skipping RCA and validation.")
            path.extend([Stage.HEALTHY_SHORT_CIRCUIT, Stage.DONE])
            return PipelineRun(
                namespace=namespace,
                pod=pod,
                context=context,
                anomaly_type=anomaly_type,
                path=tuple(path),
                report=RcaReport.healthy(),
            )

        path.append(Stage.ANALYZING)
        logger.info("Step 2: running root cause analysis")
        rca_output = self.reasoning.explain_root_cause(anomaly_type, full_context)
        logger.info("Raw RCA result: [%s]", rca_output)

        path.append(Stage.VALIDATING)
        logger.info("Step 3: running validation and formatting")
        report = self.reasoning.validate_and_format(rca_output, full_context)
        logger.info("Final report: %r", report)

        path.append(Stage.DONE)
        return PipelineRun(
            namespace=namespace,
            pod=pod,
            context=context,
            anomaly_type=anomaly_type,
            path=tuple(path),
            report=report,
            rca_output=rca_output,
        )
