"""Pydantic request/response models for incident API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from services.api.src.incident_api.schemas.enums import (
    Category,
    IncidentStatus,
    Severity,
)


# -- Requests ---------------------------------------------------------------

class CreateIncidentRequest(BaseModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    reported_by: str | None = None


class UpdateStatusRequest(BaseModel):
    status: IncidentStatus
    actual_resolution: str | None = Field(None, max_length=2000)


# -- Responses ---------------------------------------------------------------

class IncidentResponse(BaseModel):
    id: str
    title: str
    description: str
    severity: Severity
    category: Category | None
    status: IncidentStatus
    reported_by: str | None
    assigned_team: str | None
    suggested_solution: str | None
    estimated_resolution_hours: int | None
    ai_confidence: float | None
    actual_resolution: str | None
    created_at: str
    updated_at: str
    resolved_at: str | None


class MetricsResponse(BaseModel):
    total_incidents: int
    by_status: dict[str, int]
    by_severity: dict[str, int]
    by_category: dict[str, int]
    average_resolution_hours: float
    open_critical_incidents: int
