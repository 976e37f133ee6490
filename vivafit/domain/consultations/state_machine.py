"""
Consultation status state machine

    scheduled -> confirmed | cancelled
    confirmed -> completed | cancelled

completed and cancelled are terminal. Confirming and completing are reserved
for the professional; either party may cancel.
"""

from ...errors import InvalidTransitionError
from ...models import ConsultationStatus, Role

ALLOWED_TRANSITIONS: dict[tuple[ConsultationStatus, ConsultationStatus], frozenset[Role]] = {
    (ConsultationStatus.SCHEDULED, ConsultationStatus.CONFIRMED): frozenset({Role.PROFESSIONAL}),
    (ConsultationStatus.SCHEDULED, ConsultationStatus.CANCELLED): frozenset(
        {Role.CLIENT, Role.PROFESSIONAL}
    ),
    (ConsultationStatus.CONFIRMED, ConsultationStatus.COMPLETED): frozenset({Role.PROFESSIONAL}),
    (ConsultationStatus.CONFIRMED, ConsultationStatus.CANCELLED): frozenset(
        {Role.CLIENT, Role.PROFESSIONAL}
    ),
}

INITIAL_STATUS = ConsultationStatus.SCHEDULED
TERMINAL_STATUSES = frozenset({ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED})


def is_terminal(status: ConsultationStatus) -> bool:
    return ConsultationStatus(status) in TERMINAL_STATUSES


def validate_transition(
    current_status: ConsultationStatus,
    requested_status: ConsultationStatus,
    role: Role,
) -> ConsultationStatus:
    """
    Check a status change against the transition table.

    Args:
        current_status: Status the consultation is in now
        requested_status: Status the actor asked for
        role: Role of the acting party

    Returns:
        ConsultationStatus: The new status

    Raises:
        InvalidTransitionError: If the pair is not in the table, the current
            status is terminal, or the role may not perform it
    """
    current_status = ConsultationStatus(current_status)
    requested_status = ConsultationStatus(requested_status)
    role = Role(role)

    if current_status in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            current_status,
            requested_status,
            role,
            message=f"Consultation is already {current_status.value} and can no longer change",
        )

    allowed_roles = ALLOWED_TRANSITIONS.get((current_status, requested_status))
    if not allowed_roles or role not in allowed_roles:
        raise InvalidTransitionError(current_status, requested_status, role)

    return requested_status


def allowed_next_statuses(current_status: ConsultationStatus, role: Role) -> list[ConsultationStatus]:
    """Statuses the given role may move a consultation to from current_status"""
    return [
        target
        for (source, target), roles in ALLOWED_TRANSITIONS.items()
        if source == current_status and role in roles
    ]
