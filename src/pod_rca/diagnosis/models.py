"""Structured outputs from the diagnosis layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RcaReport(BaseModel):
    """Final result of one analysis run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str | None = Field(default=None, description="Brief title summarizing the issue")
    issue: str | None = Field(default=None, description="What went wrong and why")
    evidence: str | None = Field(default=None, description="Metrics and observations supporting the diagnosis")
    supported_logs: list[str] | None = Field(
        default=None,
        alias="supportedLogs",
        description="Relevant log entries or patterns",
    )
    proposed_solution: str | None = Field(
        default=None,
        alias="proposedSolution",
        description="Concrete steps to fix the issue",
    )
    validation_confidence: float | None = Field(
        default=None,
        alias="validationConfidence",
        ge=0.0,
        le=1.0,
        description="Validator confidence in the diagnosis (0-1)",
    )

    @classmethod
    def healthy(cls) -> RcaReport:
        """Report returned when the detector finds nothing wrong."""
        return cls(
            title="System Healthy",
            issue="No anomaly detected",
            evidence="Metrics within normal range",
            supported_logs=[],
            proposed_solution="No action needed",
            validation_confidence=1.0,
        )
