"""
Domain errors raised by the consultation core.

Each error carries the HTTP status it maps to; the handlers registered in
main.py turn them into JSON responses. None of them are retried.
"""

from typing import Optional


class VivaFitError(Exception):
    """Base class for errors surfaced to the initiating request"""

    status_code = 400
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.code}


class InvalidActorError(VivaFitError):
    """The actor's role is incompatible with the operation"""

    status_code = 403
    code = "invalid_actor"


class InvalidTransitionError(VivaFitError):
    """The requested status change is not permitted for this status or role"""

    status_code = 409
    code = "invalid_transition"

    def __init__(self, current_status, requested_status, role=None, message: Optional[str] = None):
        self.current_status = current_status
        self.requested_status = requested_status
        self.role = role
        if message is None:
            message = f"Cannot change consultation status from '{_value(current_status)}' to '{_value(requested_status)}'"
            if role is not None:
                message += f" as {_value(role)}"
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["current_status"] = _value(self.current_status)
        data["requested_status"] = _value(self.requested_status)
        return data


class NotFoundError(VivaFitError):
    """Missing record, or one the actor is not a party to"""

    status_code = 404
    code = "not_found"


class PersistenceError(VivaFitError):
    """The store rejected the read or write"""

    status_code = 503
    code = "persistence_error"


def _value(item):
    return getattr(item, "value", item)
