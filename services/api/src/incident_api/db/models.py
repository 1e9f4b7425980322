"""SQLAlchemy table definitions for the incident API."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

incidents = Table(
    "incidents",
    metadata,
    Column("id", String, primary_key=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("reported_by", String, nullable=True),
    Column("severity", String(16), nullable=False, server_default="MEDIUM"),
    Column("category", String(16), nullable=True),
    Column("status", String(16), nullable=False, server_default="OPEN"),
    # Classification fields, written once at creation
    Column("assigned_team", String, nullable=True),
    Column("suggested_solution", Text, nullable=True),
    Column("estimated_resolution_hours", Integer, nullable=True),
    Column("ai_confidence", Float, nullable=True),
    Column("actual_resolution", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("resolved_at", DateTime(timezone=True), nullable=True),
    Index("ix_incidents_status", "status"),
    Index("ix_incidents_severity", "severity"),
    Index("ix_incidents_category", "category"),
    Index("ix_incidents_created", "created_at"),
)
