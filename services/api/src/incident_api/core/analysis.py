"""Validation of raw model output into an AnalysisResult.

The model is an untrusted data source: its text is normalized, parsed as
JSON and validated field by field in a single construction step, so a
caller either gets a complete AnalysisResult or a typed error.
"""

from __future__ import annotations

import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from services.api.src.incident_api.core.errors import MalformedResponse, ValidationFailure
from services.api.src.incident_api.schemas.enums import Category, Severity

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[\w+-]*")
_CLOSING_FENCE = "```"


class AnalysisResult(BaseModel):
    """Classification produced by the model for a single incident.

    JSON keys are camelCase (``assignedTeam``, ``estimatedResolutionHours``)
    to match the output schema in the system prompt. Field declaration order
    is the validation order.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    severity: Severity
    category: Category
    assigned_team: str
    suggested_solution: str
    # The prompt asks for 1-72; only non-negativity is enforced.
    estimated_resolution_hours: int = Field(..., ge=0, strict=True)
    confidence: float = Field(..., ge=0.0, le=1.0, strict=True)

    @field_validator("assigned_team", "suggested_solution")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` / ```lang fence and a trailing ``` fence."""
    cleaned = _OPENING_FENCE.sub("", text.strip(), count=1)
    if cleaned.endswith(_CLOSING_FENCE):
        cleaned = cleaned[: -len(_CLOSING_FENCE)]
    return cleaned.strip()


def _first_failure(exc: ValidationError) -> ValidationFailure:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "response"
    if error["type"] == "missing":
        reason = "is required"
    else:
        reason = error["msg"]
    return ValidationFailure(field=field, reason=reason)


def parse_analysis(raw_text: str) -> AnalysisResult:
    """Convert raw model output into a validated AnalysisResult.

    Raises:
        MalformedResponse: the text is not a JSON object once fences are removed.
        ValidationFailure: a field is missing or violates its bounds. Only
            the first offending field (in declaration order) is reported.
    """
    if not isinstance(raw_text, str):
        raise MalformedResponse(repr(raw_text), reason="gateway returned non-text")

    cleaned = strip_code_fences(raw_text)

    try:
        data = json.loads(cleaned)
    except ValueError as exc:
        raise MalformedResponse(raw_text, reason=str(exc)) from exc

    if not isinstance(data, dict):
        raise MalformedResponse(
            raw_text, reason=f"expected a JSON object, got {type(data).__name__}"
        )

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        failure = _first_failure(exc)
        logger.warning("analysis_validation_failed", extra={
            "field": failure.field, "reason": failure.reason,
        })
        raise failure from exc
