"""Agent: wiring of collect → diagnose → render, single pod or labeled scan."""

from pod_rca.agent.orchestrator import build_pipeline, print_run, run_analysis
from pod_rca.agent.scanner import ScanOutcome, WorkloadScanner

__all__ = [
    "build_pipeline",
    "print_run",
    "run_analysis",
    "ScanOutcome",
    "WorkloadScanner",
]
