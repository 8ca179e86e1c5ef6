"""Observation layer: collect pod telemetry for diagnosis."""

from pod_rca.observation.cluster import ClusterInfo
from pod_rca.observation.collector import ContextAggregator
from pod_rca.observation.metrics import MetricSummarizer
from pod_rca.observation.models import (
    ContainerStatusSummary,
    DiagnosticContext,
    EventSummary,
    PodResources,
    PodStatusSummary,
)
from pod_rca.observation.profiling import CryostatClient
from pod_rca.observation.prometheus import PrometheusClient, extract_value

__all__ = [
    "ClusterInfo",
    "ContainerStatusSummary",
    "ContextAggregator",
    "CryostatClient",
    "DiagnosticContext",
    "EventSummary",
    "MetricSummarizer",
    "PodResources",
    "PodStatusSummary",
    "PrometheusClient",
    "extract_value",
]
