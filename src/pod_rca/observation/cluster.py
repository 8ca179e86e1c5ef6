"""Read pod spec, status, events and logs from a Kubernetes cluster."""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from pod_rca.observation.models import (
    ContainerStatusSummary,
    EventSummary,
    PodResources,
    PodStatusSummary,
)

logger = logging.getLogger(__name__)


def _load_kube_config(kubeconfig_path: str | None, context: str | None) -> client.Configuration:
    """Load in-cluster or kubeconfig-based configuration."""
    try:
        config.load_incluster_config()
        return client.Configuration.get_default_copy()
    except config.ConfigException:
        pass
    kwargs: dict[str, Any] = {}
    if kubeconfig_path:
        kwargs["config_file"] = str(kubeconfig_path)
    if context:
        kwargs["context"] = context
    config.load_kube_config(**kwargs)
    return client.Configuration.get_default_copy()


def _quantities(mapping: Any) -> dict[str, str]:
    return {k: str(v) for k, v in (mapping or {}).items()}


def _utc(ts: Any) -> Any:
    return ts.replace(tzinfo=timezone.utc) if ts and ts.tzinfo is None else ts


def _build_container_status(cs: Any) -> ContainerStatusSummary:
    """Build ContainerStatusSummary from V1ContainerStatus."""
    waiting = cs.state.waiting if cs.state else None
    terminated = cs.last_state.terminated if cs.last_state else None
    return ContainerStatusSummary(
        name=cs.name,
        ready=bool(cs.ready),
        restart_count=cs.restart_count or 0,
        waiting=waiting is not None,
        waiting_reason=getattr(waiting, "reason", None) if waiting else None,
        waiting_message=getattr(waiting, "message", None) if waiting else None,
        last_terminated_reason=getattr(terminated, "reason", None) if terminated else None,
        last_exit_code=getattr(terminated, "exit_code", None) if terminated else None,
        last_finished_at=_utc(getattr(terminated, "finished_at", None)) if terminated else None,
    )


def _build_event_summary(ev: Any) -> EventSummary:
    """Build EventSummary from CoreV1Event."""
    ts = ev.last_timestamp or ev.first_timestamp or getattr(ev, "event_time", None)
    return EventSummary(
        timestamp=_utc(ts),
        type=ev.type or "Normal",
        reason=ev.reason or "",
        message=ev.message or "",
    )


class ClusterInfo:
    """Thin read-only view of the pods, events and logs of a Kubernetes cluster."""

    def __init__(
        self,
        kubeconfig: str | None = None,
        context: str | None = None,
        core_api: client.CoreV1Api | None = None,
    ) -> None:
        if core_api is None:
            cfg = _load_kube_config(kubeconfig, context)
            core_api = client.CoreV1Api(client.ApiClient(cfg))
        self._core = core_api

    def _read_pod(self, namespace: str, name: str) -> Any | None:
        try:
            return self._core.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                return None
            raise

    def get_pod_spec(self, namespace: str, name: str) -> PodResources | None:
        """Limits and requests of the pod's first container, or None if unknown."""
        pod = self._read_pod(namespace, name)
        containers = getattr(pod.spec, "containers", None) if pod is not None and pod.spec else None
        if not containers:
            return None
        resources = containers[0].resources
        return PodResources(
            limits=_quantities(getattr(resources, "limits", None)),
            requests=_quantities(getattr(resources, "requests", None)),
        )

    def get_pod_status(self, namespace: str, name: str) -> PodStatusSummary | None:
        pod = self._read_pod(namespace, name)
        if pod is None:
            return None
        status = pod.status
        return PodStatusSummary(
            phase=getattr(status, "phase", None) or "Unknown",
            containers=[_build_container_status(cs) for cs in (getattr(status, "container_statuses", None) or [])],
        )

    def get_events(self, namespace: str, pod_name: str) -> list[EventSummary]:
        """Events whose involved object is the given pod, in API order."""
        event_list = self._core.list_namespaced_event(
            namespace=namespace,
            field_selector=f"involvedObject.name={pod_name}",
        )
        return [
            _build_event_summary(ev)
            for ev in event_list.items
            if ev.involved_object is not None and ev.involved_object.name == pod_name
        ]

    def get_logs(self, namespace: str, name: str, tail_lines: int, previous: bool = False) -> str:
        """Tail of the container log; previous=True reads the last terminated instance."""
        log = self._core.read_namespaced_pod_log(
            name=name,
            namespace=namespace,
            tail_lines=tail_lines,
            previous=previous,
            timestamps=False,
        )
        return log or ""

    def list_labeled_pods(self, label_selector: str) -> list[tuple[str, str]]:
        """(namespace, name) of every pod in any namespace matching the selector."""
        pod_list = self._core.list_pod_for_all_namespaces(label_selector=label_selector)
        return [(pod.metadata.namespace or "default", pod.metadata.name) for pod in pod_list.items]
