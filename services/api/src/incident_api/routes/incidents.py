"""Incident API endpoints."""

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.engine import Engine

from services.api.src.incident_api.core import pipeline
from services.api.src.incident_api.core.errors import (
    MalformedResponse,
    NotFound,
    TransportFailure,
    ValidationFailure,
)
from services.api.src.incident_api.db.engine import get_engine
from services.api.src.incident_api.schemas.enums import (
    Category,
    IncidentStatus,
    Severity,
)
from services.api.src.incident_api.schemas.responses import (
    CreateIncidentRequest,
    IncidentResponse,
    MetricsResponse,
    UpdateStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _engine() -> Engine:
    return get_engine()


def _gateway():
    """Model gateway used for classification. Overridden in tests."""
    from services.api.src.incident_api.adapters.openai_llm import complete
    return complete


def _str_dt(dt) -> str | None:
    """Convert a datetime to ISO string. Naive values are stored UTC."""
    if dt is None:
        return None
    if isinstance(dt, datetime) and dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat() if hasattr(dt, "isoformat") else str(dt)


def _to_response(row: dict) -> IncidentResponse:
    return IncidentResponse(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        severity=row["severity"],
        category=row["category"],
        status=row["status"],
        reported_by=row["reported_by"],
        assigned_team=row["assigned_team"],
        suggested_solution=row["suggested_solution"],
        estimated_resolution_hours=row["estimated_resolution_hours"],
        ai_confidence=row["ai_confidence"],
        actual_resolution=row["actual_resolution"],
        created_at=_str_dt(row["created_at"]),
        updated_at=_str_dt(row["updated_at"]),
        resolved_at=_str_dt(row["resolved_at"]),
    )


# ---------------------------------------------------------------------------
# Incidents
# ---------------------------------------------------------------------------

@router.post("", response_model=IncidentResponse, status_code=201)
def create_incident(
    body: CreateIncidentRequest,
    engine: Engine = Depends(_engine),
    complete_fn=Depends(_gateway),
) -> IncidentResponse:
    """Classify a new incident report with the LLM and store it."""
    try:
        row = pipeline.create_incident(
            title=body.title,
            description=body.description,
            engine=engine,
            reported_by=body.reported_by,
            complete_fn=complete_fn,
        )
    except TransportFailure as exc:
        raise HTTPException(502, f"Incident analysis unavailable: {exc.reason}")
    except MalformedResponse:
        raise HTTPException(502, "Incident analysis failed: malformed model response")
    except ValidationFailure as exc:
        raise HTTPException(
            502, f"Incident analysis failed: invalid '{exc.field}' ({exc.reason})"
        )

    return _to_response(row)


@router.get("", response_model=list[IncidentResponse])
def list_incidents(
    status: IncidentStatus | None = None,
    severity: Severity | None = None,
    category: Category | None = None,
    engine: Engine = Depends(_engine),
) -> list[IncidentResponse]:
    """List incidents, optionally filtered by status, severity and category."""
    rows = pipeline.list_incidents(engine, status=status, severity=severity, category=category)
    return [_to_response(row) for row in rows]


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(engine: Engine = Depends(_engine)) -> MetricsResponse:
    """Aggregate counts and averages over all incidents."""
    return MetricsResponse(**asdict(pipeline.get_metrics(engine)))


@router.get("/{incident_id}", response_model=IncidentResponse)
def get_incident(
    incident_id: str,
    engine: Engine = Depends(_engine),
) -> IncidentResponse:
    try:
        row = pipeline.get_incident(incident_id, engine)
    except NotFound:
        raise HTTPException(404, "Incident not found")
    return _to_response(row)


@router.patch("/{incident_id}/status", response_model=IncidentResponse)
def update_status(
    incident_id: str,
    body: UpdateStatusRequest,
    engine: Engine = Depends(_engine),
) -> IncidentResponse:
    """Move an incident to a new status, optionally recording the resolution."""
    try:
        row = pipeline.update_incident_status(
            incident_id,
            body.status,
            engine,
            actual_resolution=body.actual_resolution,
        )
    except NotFound:
        raise HTTPException(404, "Incident not found")
    return _to_response(row)
