"""LLM reasoning capabilities used by the diagnostic pipeline."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

from openai import OpenAI
from pydantic import ValidationError

from pod_rca.config import Settings
from pod_rca.diagnosis.models import RcaReport
from pod_rca.diagnosis.prompts import DETECTOR_SYSTEM_PROMPT, RCA_PROMPT, VALIDATOR_PROMPT
from pod_rca.errors import ReasoningOutputError

logger = logging.getLogger(__name__)


class ReasoningBackend(Protocol):
    """The three opaque reasoning steps, one method each."""

    def classify(self, context: str) -> str:
        """Return the raw, unsanitized anomaly classification."""
        ...

    def explain_root_cause(self, anomaly_type: str, context: str) -> str:
        """Return a free-text root cause analysis."""
        ...

    def validate_and_format(self, rca_output: str, context: str) -> RcaReport:
        """Validate the analysis and structure it as a report."""
        ...


def _openai_client(settings: Settings) -> OpenAI:
    """Build OpenAI client from settings (supports OpenAI and compatible endpoints)."""
    if settings.llm_provider == "openai_compatible" and settings.openai_base_url:
        return OpenAI(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key or "not-needed",
        )
    return OpenAI(api_key=settings.openai_api_key or "")


def _parse_llm_json(raw: str) -> dict[str, Any]:
    """Extract JSON from model output, tolerating markdown code blocks."""
    text = raw.strip()
    # Remove optional markdown code block
    if text.startswith("```"):
        match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
        if match:
            text = match.group(1).strip()
        else:
            text = text.lstrip("`").strip()
    return json.loads(text)


def parse_report(raw: str) -> RcaReport:
    """Turn the validator's JSON answer into an RcaReport."""
    try:
        data = _parse_llm_json(raw)
    except json.JSONDecodeError as e:
        raise ReasoningOutputError(f"Validator returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ReasoningOutputError(f"Validator returned {type(data).__name__}, expected a JSON object")
    try:
        return RcaReport.model_validate(data)
    except ValidationError as e:
        raise ReasoningOutputError(f"Validator output does not match the report shape: {e}") from e


class OpenAIReasoning:
    """ReasoningBackend backed by OpenAI chat completions, one model per stage."""

    def __init__(self, settings: Settings, client: OpenAI | None = None) -> None:
        self.settings = settings
        self._client = client or _openai_client(settings)

    def _complete(self, model: str, messages: list[dict[str, str]]) -> str:
        response = self._client.chat.completions.create(
            model=model,
            temperature=self.settings.temperature,
            messages=messages,
        )
        return response.choices[0].message.content or ""

    def classify(self, context: str) -> str:
        return self._complete(
            self.settings.detector_model,
            [
                {"role": "system", "content": DETECTOR_SYSTEM_PROMPT},
                {"role": "user", "content": context},
            ],
        )

    def explain_root_cause(self, anomaly_type: str, context: str) -> str:
        prompt = RCA_PROMPT.format(anomaly_type=anomaly_type, full_context=context)
        return self._complete(self.settings.rca_model, [{"role": "user", "content": prompt}])

    def validate_and_format(self, rca_output: str, context: str) -> RcaReport:
        prompt = VALIDATOR_PROMPT.format(rca_output=rca_output, full_context=context)
        raw = self._complete(self.settings.validator_model, [{"role": "user", "content": prompt}])
        logger.debug("Raw validator response: %s", raw)
        return parse_report(raw)
