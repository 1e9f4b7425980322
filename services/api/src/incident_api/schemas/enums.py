"""Enums for the incident API."""

from enum import Enum


class Severity(str, Enum):
    """Urgency of an incident, most urgent first."""
    CRITICAL = "CRITICAL"  # System down, data loss, breach, all users affected
    HIGH = "HIGH"          # Major feature broken, many users affected
    MEDIUM = "MEDIUM"      # Minor feature broken, workaround available
    LOW = "LOW"            # Cosmetic issue, few users affected


class Category(str, Enum):
    """Technical area an incident belongs to."""
    BACKEND = "BACKEND"
    FRONTEND = "FRONTEND"
    DATABASE = "DATABASE"
    SECURITY = "SECURITY"
    NETWORK = "NETWORK"


class IncidentStatus(str, Enum):
    """Possible states for an incident."""
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


TERMINAL_STATUSES = frozenset({IncidentStatus.RESOLVED, IncidentStatus.CLOSED})
