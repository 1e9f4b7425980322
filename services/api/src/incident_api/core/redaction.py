"""Redaction helpers for safe logging of reporter data and model output."""

import hashlib
import re
from typing import Any


# Patterns that should be redacted before text reaches the logs
_SENSITIVE_PATTERNS = [
    re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),  # Email
    re.compile(r"\b\d{10,11}\b"),  # Phone numbers
    re.compile(r"(?i)\b(?:sk|api[_-]?key|token)[-_=:\s]*[A-Za-z0-9_-]{16,}\b"),  # Secrets
]

_SENSITIVE_KEYS = {"reported_by", "email", "phone", "api_key", "password", "token"}

_MAX_LOGGED_CHARS = 500


def redact_value(value: str) -> str:
    """Hash a sensitive string value for safe storage."""
    return f"REDACTED:{hashlib.sha256(value.encode()).hexdigest()[:12]}"


def redact_text(text: str, max_chars: int = _MAX_LOGGED_CHARS) -> str:
    """Mask sensitive patterns and truncate free text for logging."""
    redacted = text
    for pattern in _SENSITIVE_PATTERNS:
        redacted = pattern.sub("[REDACTED]", redacted)
    if len(redacted) > max_chars:
        redacted = redacted[:max_chars] + "...[truncated]"
    return redacted


def redact_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively redact sensitive fields from a dictionary."""
    result = {}
    for key, value in data.items():
        if key.lower() in _SENSITIVE_KEYS:
            result[key] = redact_value(str(value)) if value else None
        elif isinstance(value, dict):
            result[key] = redact_dict(value)
        elif isinstance(value, str):
            result[key] = redact_text(value)
        else:
            result[key] = value
    return result
