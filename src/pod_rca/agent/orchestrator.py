"""Wire collectors, reasoning and rendering into a runnable analysis."""

from __future__ import annotations

import json
import logging

from rich.console import Console

from pod_rca.auth import TokenProvider
from pod_rca.config import Settings, get_settings
from pod_rca.diagnosis import DiagnosticPipeline, OpenAIReasoning, PipelineRun, ReasoningBackend
from pod_rca.observation import (
    ClusterInfo,
    ContextAggregator,
    CryostatClient,
    MetricSummarizer,
    PrometheusClient,
)
from pod_rca.report import render

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: Settings | None = None,
    cluster: ClusterInfo | None = None,
    reasoning: ReasoningBackend | None = None,
) -> DiagnosticPipeline:
    """Construct a pipeline and its collaborators from settings.

    One TokenProvider is created here and shared by both HTTP backends.
    """
    opts = settings or get_settings()
    tokens = TokenProvider(opts.token_path)
    if cluster is None:
        cluster = ClusterInfo(
            kubeconfig=str(opts.kubeconfig) if opts.kubeconfig else None,
            context=opts.context,
        )
    prometheus = PrometheusClient(
        opts.prometheus_url,
        tokens,
        timeout=opts.http_timeout_seconds,
        verify=opts.verify_tls,
    )
    profiler = None
    if opts.cryostat_enabled:
        logger.info("Cryostat integration enabled at %s", opts.cryostat_url)
        profiler = CryostatClient(
            opts.cryostat_url,
            tokens,
            timeout=opts.http_timeout_seconds,
            verify=opts.verify_tls,
        )
    aggregator = ContextAggregator(
        cluster,
        MetricSummarizer(cluster, prometheus),
        profiler=profiler,
        profiling_enabled=opts.cryostat_enabled,
        log_tail_lines=opts.log_tail_lines,
    )
    return DiagnosticPipeline(aggregator, reasoning if reasoning is not None else OpenAIReasoning(opts))


def run_analysis(
    namespace: str | None,
    pod: str,
    settings: Settings | None = None,
    pipeline: DiagnosticPipeline | None = None,
) -> PipelineRun:
    """Analyze one pod; a pipeline built here is closed before returning."""
    opts = settings or get_settings()
    namespace = namespace or opts.namespace
    if pipeline is not None:
        return pipeline.run_with_context(namespace, pod)
    with build_pipeline(opts) as owned:
        return owned.run_with_context(namespace, pod)


def print_run(run: PipelineRun, console: Console | None = None, as_json: bool = False) -> None:
    """Print the report box (or its JSON form) to the console."""
    c = console or Console()
    if as_json:
        payload = {
            "namespace": run.namespace,
            "pod": run.pod,
            "anomalyType": run.anomaly_type,
            "report": run.report.model_dump(by_alias=True),
        }
        c.print_json(json.dumps(payload))
        return
    c.print(render(run.report), markup=False, highlight=False, emoji=False, soft_wrap=True, end="")
