"""Incident use cases.

Creation orchestrates: Prompt -> Gateway -> Validate -> Lifecycle -> Persist.
It is all-or-nothing: any failure propagates as a TriageError subclass and
nothing is written to storage.
"""

import logging
import time
from collections.abc import Callable

from sqlalchemy.engine import Engine

from services.api.src.incident_api.core.analysis import parse_analysis
from services.api.src.incident_api.core.errors import (
    MalformedResponse,
    NotFound,
    TransportFailure,
    TriageError,
    ValidationFailure,
)
from services.api.src.incident_api.core.lifecycle import (
    apply_status_update,
    create_from_analysis,
)
from services.api.src.incident_api.core.metrics import IncidentMetrics, compute_metrics
from services.api.src.incident_api.core.prompts import build_prompt
from services.api.src.incident_api.core.redaction import redact_dict, redact_text
from services.api.src.incident_api.db.repository import IncidentRepository
from services.api.src.incident_api.schemas.enums import (
    Category,
    IncidentStatus,
    Severity,
)

logger = logging.getLogger(__name__)

CompleteFn = Callable[[str, str], str]


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)


def create_incident(
    title: str,
    description: str,
    engine: Engine,
    reported_by: str | None = None,
    *,
    complete_fn: CompleteFn | None = None,
) -> dict:
    """Classify a reported incident and persist it as OPEN.

    The gateway function is injectable for testing. When None, uses the
    OpenAI adapter.
    """
    if complete_fn is None:
        from services.api.src.incident_api.adapters.openai_llm import complete
        complete_fn = complete

    prompt = build_prompt(title, description)

    # --------------- Step 1: Gateway ---------------
    t0 = time.monotonic()
    try:
        raw_text = complete_fn(prompt.system, prompt.user)
    except TriageError:
        logger.error("classify_gateway_failed", extra={"latency_ms": _elapsed_ms(t0)})
        raise
    except Exception as exc:
        logger.error("classify_gateway_failed", extra={
            "latency_ms": _elapsed_ms(t0), "error": str(exc),
        })
        raise TransportFailure(str(exc)) from exc
    gateway_ms = _elapsed_ms(t0)

    # --------------- Step 2: Validate ---------------
    try:
        analysis = parse_analysis(raw_text)
    except MalformedResponse as exc:
        logger.error("classify_malformed_response", extra={
            "raw_text": redact_text(exc.raw_text), "reason": exc.reason,
        })
        raise
    except ValidationFailure as exc:
        logger.error("classify_invalid_response", extra={
            "field": exc.field,
            "reason": exc.reason,
            "raw_text": redact_text(raw_text),
        })
        raise

    logger.info("classify_complete", extra={
        "severity": analysis.severity.value,
        "category": analysis.category.value,
        "confidence": analysis.confidence,
        "latency_ms": gateway_ms,
    })

    # --------------- Step 3: Persist ---------------
    row = create_from_analysis(title, description, reported_by, analysis)
    IncidentRepository(engine).create(row)

    logger.info("incident_created", extra=redact_dict({
        "incident_id": row["id"],
        "severity": row["severity"],
        "category": row["category"],
        "reported_by": row["reported_by"],
    }))
    return row


def get_incident(incident_id: str, engine: Engine) -> dict:
    row = IncidentRepository(engine).get(incident_id)
    if row is None:
        raise NotFound(incident_id)
    return row


def list_incidents(
    engine: Engine,
    status: IncidentStatus | None = None,
    severity: Severity | None = None,
    category: Category | None = None,
) -> list[dict]:
    """List incidents newest first, optionally filtered by exact match."""
    return IncidentRepository(engine).list_all(
        status=status.value if status else None,
        severity=severity.value if severity else None,
        category=category.value if category else None,
    )


def update_incident_status(
    incident_id: str,
    new_status: IncidentStatus,
    engine: Engine,
    actual_resolution: str | None = None,
) -> dict:
    repo = IncidentRepository(engine)
    incident = repo.get(incident_id)
    if incident is None:
        raise NotFound(incident_id)

    updated = apply_status_update(incident, new_status, actual_resolution)
    repo.save(updated)

    logger.info("incident_status_updated", extra={
        "incident_id": incident_id,
        "from_status": incident["status"],
        "to_status": updated["status"],
    })
    return updated


def get_metrics(engine: Engine) -> IncidentMetrics:
    return compute_metrics(IncidentRepository(engine))
