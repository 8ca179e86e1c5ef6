"""Summarize a pod's memory and CPU usage against its limits."""

from __future__ import annotations

import logging

from pod_rca.observation.cluster import ClusterInfo
from pod_rca.observation.prometheus import PrometheusClient, extract_value

logger = logging.getLogger(__name__)

MIB = 1024 * 1024

# container!="" and image!="" drop the pod-level cgroup and pause container series
SELECTOR = '{{pod="{pod}", namespace="{namespace}", container!="", image!=""}}'

MEM_USAGE_QUERY = "sum(container_memory_usage_bytes" + SELECTOR + ")"
MEM_LIMIT_QUERY = "sum(container_spec_memory_limit_bytes" + SELECTOR + ")"
CPU_USAGE_QUERY = "sum(rate(container_cpu_usage_seconds_total" + SELECTOR + "[5m]))"
CPU_LIMIT_QUERY = "sum(container_spec_cpu_quota" + SELECTOR + ") / sum(container_spec_cpu_period" + SELECTOR + ")"
JVM_HEAP_QUERY = 'sum(jvm_memory_used_bytes{{pod="{pod}", namespace="{namespace}", area="heap"}})'

SUMMARY_TEMPLATE = """--- DETAILED RESOURCE METRICS ---
TARGET: {namespace}/{pod}

K8S RESOURCE CONFIG:
  Limits:   {limits}
  Requests: {requests}

PROMETHEUS REAL-TIME DATA:
  Memory Usage: {mem_usage_mb:.2f} MB ({mem_percent:.2f}% of limit)
  Memory Limit: {mem_limit_mb:.2f} MB
  CPU Usage:    {cpu_usage:.3f} Cores ({cpu_percent:.2f}% of limit)
  CPU Limit:    {cpu_limit:.3f} Cores
---
"""


def _format_quantities(quantities: dict[str, str]) -> str:
    """Render a quantity mapping as [cpu=500m, memory=256Mi]."""
    text = "{" + ", ".join(f"{k}={v}" for k, v in quantities.items()) + "}"
    return text.replace("{", "[").replace("}", "]")


def _percent(usage: float, limit: float) -> float:
    return usage / limit * 100 if limit > 0 else 0.0


class MetricSummarizer:
    """Builds the DETAILED RESOURCE METRICS block for one pod."""

    def __init__(self, cluster: ClusterInfo, prometheus: PrometheusClient) -> None:
        self.cluster = cluster
        self.prometheus = prometheus

    def _query_value(self, template: str, namespace: str, pod: str) -> float:
        return extract_value(self.prometheus.query(template.format(pod=pod, namespace=namespace)))

    def summarize(self, namespace: str, pod: str) -> str:
        """Return the metrics block, or a one-line error message if collection fails."""
        logger.info("Fetching detailed metrics for %s/%s", namespace, pod)
        try:
            resources = self.cluster.get_pod_spec(namespace, pod)
            limits = _format_quantities(resources.limits) if resources else "N/A"
            requests = _format_quantities(resources.requests) if resources else "N/A"
            logger.debug("K8s API - Limits: %s, Requests: %s", limits, requests)

            mem_usage = self._query_value(MEM_USAGE_QUERY, namespace, pod)
            mem_limit = self._query_value(MEM_LIMIT_QUERY, namespace, pod)
            cpu_usage = self._query_value(CPU_USAGE_QUERY, namespace, pod)
            cpu_limit = self._query_value(CPU_LIMIT_QUERY, namespace, pod)
            logger.info(
                "Extracted metrics - MemUsage: %.0f, MemLimit: %.0f, CpuUsage: %.3f, CpuLimit: %.3f",
                mem_usage,
                mem_limit,
                cpu_usage,
                cpu_limit,
            )

            if mem_usage == 0.0:
                logger.info("Container memory metrics returned 0, attempting JVM heap fallback")
                mem_usage = self._query_value(JVM_HEAP_QUERY, namespace, pod)
                logger.info("JVM fallback memory usage: %s", mem_usage)

            return SUMMARY_TEMPLATE.format(
                namespace=namespace,
                pod=pod,
                limits=limits,
                requests=requests,
                mem_usage_mb=mem_usage / MIB,
                mem_percent=_percent(mem_usage, mem_limit),
                mem_limit_mb=mem_limit / MIB,
                cpu_usage=cpu_usage,
                cpu_percent=_percent(cpu_usage, cpu_limit),
                cpu_limit=cpu_limit,
            )
        except Exception as e:
            logger.exception("Metric collection failed for %s/%s", namespace, pod)
            return f"Error fetching detailed metrics: {e}"

    def close(self) -> None:
        self.prometheus.close()
