"""Pytest configuration and shared fixtures.

Unit tests use in-memory SQLite and injected gateway functions (fast).
Integration tests use real PostgreSQL via testcontainers (slow, marked).
"""

import json
import os

import pytest
from sqlalchemy import StaticPool, create_engine

from services.api.src.incident_api.db.models import metadata


def pytest_configure(config):
    """Configure test environment before collection."""
    os.environ.setdefault("CREATE_TABLES", "false")
    os.environ.setdefault("OPENAI_API_KEY", "")

    # Register integration marker
    config.addinivalue_line(
        "markers", "integration: tests that require real PostgreSQL (slow)"
    )


# =============================================================================
# UNIT TEST FIXTURES (fast)
# =============================================================================

VALID_ANALYSIS = {
    "severity": "CRITICAL",
    "category": "DATABASE",
    "assignedTeam": "Database Team",
    "suggestedSolution": "Increase the pool size and restart the stuck workers.",
    "estimatedResolutionHours": 2,
    "confidence": 0.92,
}


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(eng)
    return eng


@pytest.fixture
def valid_payload() -> dict:
    return dict(VALID_ANALYSIS)


@pytest.fixture
def gateway_returning():
    """Build a fake gateway that records its calls and returns fixed text."""

    def _make(text: str):
        calls = []

        def _complete(system_prompt: str, user_message: str) -> str:
            calls.append((system_prompt, user_message))
            return text

        _complete.calls = calls
        return _complete

    return _make


@pytest.fixture
def valid_gateway(gateway_returning, valid_payload):
    return gateway_returning(json.dumps(valid_payload))


# =============================================================================
# INTEGRATION TEST FIXTURES (slow, real PostgreSQL)
# =============================================================================

@pytest.fixture(scope="session")
def postgres_container():
    """Create a PostgreSQL container for integration tests.

    Only created if integration tests are being run.
    """
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:15-alpine") as postgres:
        yield postgres


@pytest.fixture
def pg_engine(postgres_container):
    """Create a fresh PostgreSQL engine for each integration test."""
    url = postgres_container.get_connection_url()
    eng = create_engine(url)

    metadata.create_all(eng)

    yield eng

    metadata.drop_all(eng)
    eng.dispose()
