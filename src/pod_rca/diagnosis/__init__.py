"""Diagnosis layer: staged LLM root cause analysis."""

from pod_rca.diagnosis.models import RcaReport
from pod_rca.diagnosis.pipeline import (
    DiagnosticPipeline,
    PipelineRun,
    Stage,
    is_healthy,
    sanitize_anomaly,
)
from pod_rca.diagnosis.reasoning import OpenAIReasoning, ReasoningBackend

__all__ = [
    "DiagnosticPipeline",
    "OpenAIReasoning",
    "PipelineRun",
    "RcaReport",
    "ReasoningBackend",
    "Stage",
    "is_healthy",
    "sanitize_anomaly",
]
