"""pod-rca: root cause analysis for failing Kubernetes workloads."""

__version__ = "0.1.0"
