"""Error kinds raised by the classification pipeline and incident lookups.

Every failure the core can produce is one of the subclasses below. Callers
discriminate on the type and read the structured attributes instead of
parsing messages.
"""


class TriageError(Exception):
    """Base class for all incident pipeline failures."""


class TransportFailure(TriageError):
    """The model gateway call did not complete (timeout, auth, network, provider)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Model gateway call failed: {reason}")


class MalformedResponse(TriageError):
    """The gateway returned text that is not a JSON object."""

    def __init__(self, raw_text: str, reason: str = ""):
        self.raw_text = raw_text
        self.reason = reason
        message = "Model response is not a valid JSON object"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ValidationFailure(TriageError):
    """A parsed response field is missing, blank, unrecognized or out of range."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid '{field}' in model response: {reason}")


class NotFound(TriageError):
    """No incident exists with the requested id."""

    def __init__(self, incident_id: str):
        self.incident_id = incident_id
        super().__init__(f"Incident not found with id: {incident_id}")
