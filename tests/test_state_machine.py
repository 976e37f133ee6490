import itertools

import pytest

from vivafit.domain.consultations.state_machine import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    allowed_next_statuses,
    is_terminal,
    validate_transition,
)
from vivafit.errors import InvalidTransitionError
from vivafit.models import ConsultationStatus as S
from vivafit.models import Role

LEGAL = {
    (S.SCHEDULED, S.CONFIRMED, Role.PROFESSIONAL),
    (S.SCHEDULED, S.CANCELLED, Role.CLIENT),
    (S.SCHEDULED, S.CANCELLED, Role.PROFESSIONAL),
    (S.CONFIRMED, S.COMPLETED, Role.PROFESSIONAL),
    (S.CONFIRMED, S.CANCELLED, Role.CLIENT),
    (S.CONFIRMED, S.CANCELLED, Role.PROFESSIONAL),
}

ALL_TRIPLES = list(itertools.product(S, S, Role))
ILLEGAL = [triple for triple in ALL_TRIPLES if triple not in LEGAL]


@pytest.mark.parametrize("current,requested,role", sorted(LEGAL))
def test_legal_transitions_return_requested_status(current, requested, role):
    assert validate_transition(current, requested, role) == requested


@pytest.mark.parametrize("current,requested,role", ILLEGAL)
def test_everything_outside_the_table_is_rejected(current, requested, role):
    with pytest.raises(InvalidTransitionError) as exc_info:
        validate_transition(current, requested, role)

    assert exc_info.value.current_status == current
    assert exc_info.value.requested_status == requested


def test_table_matches_legal_set():
    flattened = {
        (source, target, role)
        for (source, target), roles in ALLOWED_TRANSITIONS.items()
        for role in roles
    }
    assert flattened == LEGAL


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES))
@pytest.mark.parametrize("role", list(Role))
def test_terminal_statuses_never_move(terminal, role):
    assert is_terminal(terminal)
    assert allowed_next_statuses(terminal, role) == []
    for requested in S:
        with pytest.raises(InvalidTransitionError):
            validate_transition(terminal, requested, role)


def test_same_status_is_not_a_transition():
    with pytest.raises(InvalidTransitionError):
        validate_transition(S.SCHEDULED, S.SCHEDULED, Role.PROFESSIONAL)


def test_client_cannot_confirm():
    with pytest.raises(InvalidTransitionError) as exc_info:
        validate_transition(S.SCHEDULED, S.CONFIRMED, Role.CLIENT)

    error = exc_info.value
    assert "scheduled" in error.message
    assert "confirmed" in error.message
    assert error.to_dict() == {
        "detail": error.message,
        "error": "invalid_transition",
        "current_status": "scheduled",
        "requested_status": "confirmed",
    }


def test_accepts_raw_string_values():
    assert validate_transition("scheduled", "cancelled", "client") == S.CANCELLED


def test_allowed_next_statuses_by_role():
    assert allowed_next_statuses(S.SCHEDULED, Role.CLIENT) == [S.CANCELLED]
    assert set(allowed_next_statuses(S.SCHEDULED, Role.PROFESSIONAL)) == {S.CONFIRMED, S.CANCELLED}
    assert allowed_next_statuses(S.CONFIRMED, Role.CLIENT) == [S.CANCELLED]
    assert set(allowed_next_statuses(S.CONFIRMED, Role.PROFESSIONAL)) == {S.COMPLETED, S.CANCELLED}
