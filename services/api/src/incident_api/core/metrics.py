"""Aggregate metrics over the stored incident set.

Every call is a full scan through the repository. Per-dimension tables list
every enum value, zero counts included.
"""

from dataclasses import dataclass, field

from services.api.src.incident_api.db.repository import IncidentRepository
from services.api.src.incident_api.schemas.enums import (
    Category,
    IncidentStatus,
    Severity,
)


@dataclass(frozen=True)
class IncidentMetrics:
    total_incidents: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_severity: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    average_resolution_hours: float = 0.0
    open_critical_incidents: int = 0


def compute_metrics(repo: IncidentRepository) -> IncidentMetrics:
    by_status = {s.value: repo.count_by_status(s.value) for s in IncidentStatus}
    by_severity = {s.value: repo.count_by_severity(s.value) for s in Severity}
    by_category = {c.value: repo.count_by_category(c.value) for c in Category}

    avg_hours = repo.average_resolution_hours()

    return IncidentMetrics(
        total_incidents=repo.count(),
        by_status=by_status,
        by_severity=by_severity,
        by_category=by_category,
        average_resolution_hours=avg_hours if avg_hours is not None else 0.0,
        open_critical_incidents=repo.count(
            status=IncidentStatus.OPEN.value, severity=Severity.CRITICAL.value,
        ),
    )
