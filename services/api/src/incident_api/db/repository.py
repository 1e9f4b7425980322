"""Repository classes for incident data access."""

from sqlalchemy import func, select, update
from sqlalchemy.engine import Engine

from services.api.src.incident_api.db.models import incidents

# Columns that may change after creation
_MUTABLE_COLUMNS = ("severity", "category", "status", "actual_resolution",
                    "updated_at", "resolved_at")


class IncidentRepository:
    """Data access for incidents. Rows are returned as plain dicts."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create(self, row: dict) -> dict:
        with self.engine.begin() as conn:
            conn.execute(incidents.insert().values(row))
        return row

    def get(self, incident_id: str) -> dict | None:
        with self.engine.connect() as conn:
            result = conn.execute(
                select(incidents).where(incidents.c.id == incident_id)
            )
            row = result.mappings().first()
            return dict(row) if row else None

    def save(self, row: dict) -> dict:
        """Persist the mutable fields of an existing incident."""
        with self.engine.begin() as conn:
            conn.execute(
                update(incidents)
                .where(incidents.c.id == row["id"])
                .values({col: row[col] for col in _MUTABLE_COLUMNS})
            )
        return row

    def list_all(
        self,
        status: str | None = None,
        severity: str | None = None,
        category: str | None = None,
    ) -> list[dict]:
        query = select(incidents)
        if status is not None:
            query = query.where(incidents.c.status == status)
        if severity is not None:
            query = query.where(incidents.c.severity == severity)
        if category is not None:
            query = query.where(incidents.c.category == category)
        query = query.order_by(incidents.c.created_at.desc())

        with self.engine.connect() as conn:
            result = conn.execute(query)
            return [dict(row) for row in result.mappings()]

    def count(self, **filters: str) -> int:
        """Count incidents, optionally filtered by column equality."""
        query = select(func.count()).select_from(incidents)
        for column, value in filters.items():
            query = query.where(incidents.c[column] == value)
        with self.engine.connect() as conn:
            return conn.execute(query).scalar_one()

    def count_by_status(self, status: str) -> int:
        return self.count(status=status)

    def count_by_severity(self, severity: str) -> int:
        return self.count(severity=severity)

    def count_by_category(self, category: str) -> int:
        return self.count(category=category)

    def average_resolution_hours(self) -> float | None:
        """Mean estimated_resolution_hours over all incidents, None when empty."""
        with self.engine.connect() as conn:
            value = conn.execute(
                select(func.avg(incidents.c.estimated_resolution_hours))
            ).scalar()
        return float(value) if value is not None else None
