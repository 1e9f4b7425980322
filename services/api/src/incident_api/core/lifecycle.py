"""Incident status lifecycle.

OPEN -> IN_PROGRESS -> RESOLVED -> CLOSED is the usual path, but any
requested transition is recorded as-is, including skips and reopenings.
Both functions are pure: they return new incident dicts and leave the
input untouched.
"""

import uuid
from datetime import datetime, timezone

from services.api.src.incident_api.core.analysis import AnalysisResult
from services.api.src.incident_api.schemas.enums import (
    TERMINAL_STATUSES,
    IncidentStatus,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def create_from_analysis(
    title: str,
    description: str,
    reported_by: str | None,
    analysis: AnalysisResult,
    now: datetime | None = None,
) -> dict:
    """Build a new OPEN incident carrying the classification from ``analysis``."""
    now = now or _now()
    return {
        "id": _new_id(),
        "title": title,
        "description": description,
        "reported_by": reported_by,
        "severity": analysis.severity.value,
        "category": analysis.category.value,
        "status": IncidentStatus.OPEN.value,
        "assigned_team": analysis.assigned_team,
        "suggested_solution": analysis.suggested_solution,
        "estimated_resolution_hours": analysis.estimated_resolution_hours,
        "ai_confidence": analysis.confidence,
        "actual_resolution": None,
        "created_at": now,
        "updated_at": now,
        "resolved_at": None,
    }


def apply_status_update(
    incident: dict,
    new_status: IncidentStatus,
    actual_resolution: str | None = None,
    now: datetime | None = None,
) -> dict:
    """Return a copy of ``incident`` moved to ``new_status``.

    ``resolved_at`` is stamped on every entry into RESOLVED or CLOSED (the
    latest one wins) and is never cleared when the incident is reopened.
    """
    now = now or _now()
    new_status = IncidentStatus(new_status)

    updated = dict(incident)
    updated["status"] = new_status.value
    if actual_resolution is not None:
        updated["actual_resolution"] = actual_resolution
    if new_status in TERMINAL_STATUSES:
        updated["resolved_at"] = now
    updated["updated_at"] = now
    return updated
