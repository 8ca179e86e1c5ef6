"""Structured models for the telemetry gathered about a single pod."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

FULL_CONTEXT_TEMPLATE = """--- POD STATUS ---
{status}

--- K8S EVENTS ---
{events}

--- METRICS ---
{metrics}

--- LOGS (Tail) ---
{logs}

--- JFR ANALYSIS ---
{profiling}
"""


class PodResources(BaseModel):
    """Resource limits and requests of a pod's primary container."""

    limits: dict[str, str] = Field(default_factory=dict)
    requests: dict[str, str] = Field(default_factory=dict)


class ContainerStatusSummary(BaseModel):
    """Container status as reported by the kubelet."""

    name: str
    ready: bool = False
    restart_count: int = 0
    waiting: bool = False
    waiting_reason: str | None = None
    waiting_message: str | None = None
    last_terminated_reason: str | None = None
    last_exit_code: int | None = None
    last_finished_at: datetime | None = None

    @property
    def previously_terminated(self) -> bool:
        return self.last_terminated_reason is not None or self.last_exit_code is not None


class PodStatusSummary(BaseModel):
    """Pod phase plus per-container state."""

    phase: str = "Unknown"
    containers: list[ContainerStatusSummary] = Field(default_factory=list)


class EventSummary(BaseModel):
    """Kubernetes event summary."""

    timestamp: datetime | None = None
    type: str  # Normal | Warning
    reason: str
    message: str


class DiagnosticContext(BaseModel):
    """Everything collected about one pod for a single analysis run."""

    model_config = ConfigDict(frozen=True)

    pod_status_text: str
    events_text: str
    metrics_text: str
    logs_text: str
    profiling_text: str

    @property
    def full_context(self) -> str:
        """Labeled sections in fixed order, as fed to the reasoning capabilities."""
        return FULL_CONTEXT_TEMPLATE.format(
            status=self.pod_status_text,
            events=self.events_text,
            metrics=self.metrics_text,
            logs=self.logs_text,
            profiling=self.profiling_text,
        )
