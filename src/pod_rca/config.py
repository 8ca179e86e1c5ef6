"""Configuration and environment for the RCA agent."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TOKEN_PATH = Path("/var/run/secrets/kubernetes.io/serviceaccount/token")


class Settings(BaseSettings):
    """Agent settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="POD_RCA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")
    namespace: str = Field(default="default", description="Namespace of the pod to analyze")
    log_tail_lines: int = Field(default=500, ge=1, description="Log lines fetched per container")

    # Telemetry backends
    prometheus_url: str = Field(
        default="http://prometheus-k8s.monitoring.svc:9090",
        description="Base URL of the Prometheus HTTP API",
    )
    cryostat_enabled: bool = Field(default=False, description="Fetch JFR analysis from Cryostat")
    cryostat_url: str = Field(
        default="http://cryostat.cryostat.svc:8181",
        description="Base URL of the Cryostat API",
    )
    token_path: Path = Field(
        default=DEFAULT_TOKEN_PATH,
        description="Service account token sent as bearer auth to Prometheus and Cryostat",
    )
    http_timeout_seconds: float = Field(default=30.0, gt=0.0, description="HTTP timeout for backends")
    verify_tls: bool = Field(default=True, description="Verify TLS certificates of backends")

    # LLM
    llm_provider: Literal["openai", "openai_compatible"] = Field(
        default="openai",
        description="LLM provider: openai or openai_compatible (e.g. local Ollama)",
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible API (e.g. http://localhost:11434/v1)",
    )
    detector_model: str = Field(default="gpt-4o-mini", description="Model for anomaly detection")
    rca_model: str = Field(default="gpt-4o", description="Model for root cause reasoning")
    validator_model: str = Field(default="gpt-4o-mini", description="Model for validation and formatting")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="LLM temperature")

    # Workload scanning
    scan_label: str = Field(
        default="rca=enabled",
        description="Label selector (key=value) of pods picked up by the scanner",
    )
    scan_interval_seconds: int = Field(default=300, ge=1, description="Seconds between scans")
    scan_workers: int = Field(default=1, ge=1, le=32, description="Pods analyzed in parallel per scan")


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
