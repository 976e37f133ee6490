from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from vivafit.domain.consultations.repository import ConsultationRepository
from vivafit.errors import PersistenceError
from vivafit.models import ConsultationStatus


@pytest.fixture
def booked(
    make_consultation,
    client_account,
    other_client_account,
    professional_account,
    other_professional_account,
):
    """Four consultations spread across two clients and two professionals"""
    return {
        "c1_p1": make_consultation(client_account, professional_account, date(2025, 6, 3), "09:00"),
        "c1_p2": make_consultation(client_account, other_professional_account, date(2025, 6, 1), "16:30"),
        "c2_p1": make_consultation(other_client_account, professional_account, date(2025, 6, 1), "08:00"),
        "c2_p2": make_consultation(other_client_account, other_professional_account, date(2025, 5, 20), "10:00"),
    }


def test_list_contains_exactly_the_consultations_the_account_is_party_to(db, booked):
    by_account = {
        "client-1": {"c1_p1", "c1_p2"},
        "client-2": {"c2_p1", "c2_p2"},
        "pro-1": {"c1_p1", "c2_p1"},
        "pro-2": {"c1_p2", "c2_p2"},
        "stranger": set(),
    }
    for account_id, expected_keys in by_account.items():
        listed = {c.id for c in ConsultationRepository.list_for_account(db, account_id)}
        assert listed == {booked[key].id for key in expected_keys}


def test_list_is_ordered_by_date_then_time(db, make_consultation, client_account, professional_account):
    make_consultation(client_account, professional_account, date(2025, 6, 2), "09:00")
    make_consultation(client_account, professional_account, date(2025, 6, 1), "15:00")
    make_consultation(client_account, professional_account, date(2025, 6, 1), "08:30")
    make_consultation(client_account, professional_account, date(2025, 5, 31), "23:00")

    listed = ConsultationRepository.list_for_account(db, client_account.id)

    assert [(c.scheduled_date, c.scheduled_time) for c in listed] == [
        (date(2025, 5, 31), "23:00"),
        (date(2025, 6, 1), "08:30"),
        (date(2025, 6, 1), "15:00"),
        (date(2025, 6, 2), "09:00"),
    ]


def test_list_twice_without_writes_is_identical(db, booked):
    first = [(c.id, c.status, c.updated_at) for c in ConsultationRepository.list_for_account(db, "pro-1")]
    second = [(c.id, c.status, c.updated_at) for c in ConsultationRepository.list_for_account(db, "pro-1")]
    assert first == second


def test_list_loads_counterparties(db, booked):
    consultation = ConsultationRepository.list_for_account(db, "client-1")[0]
    assert consultation.client.name == "Carla Client"
    assert consultation.professional.email == "ana@example.com"


def test_get_for_account_is_scoped(db, booked):
    consultation_id = booked["c1_p1"].id
    assert ConsultationRepository.get_for_account(db, consultation_id, "client-1").id == consultation_id
    assert ConsultationRepository.get_for_account(db, consultation_id, "pro-1").id == consultation_id
    assert ConsultationRepository.get_for_account(db, consultation_id, "client-2") is None
    assert ConsultationRepository.get_for_account(db, "does-not-exist", "client-1") is None


def test_create_applies_defaults(db, client_account, professional_account):
    consultation = ConsultationRepository.create(
        db,
        client_id=client_account.id,
        professional_id=professional_account.id,
        scheduled_date=date(2025, 6, 1),
        scheduled_time="14:00",
    )
    assert consultation.id
    assert consultation.status == ConsultationStatus.SCHEDULED
    assert consultation.duration_minutes == 60
    assert consultation.notes is None
    assert consultation.created_at is not None
    assert consultation.updated_at is not None


def test_update_status_bumps_updated_at(db, booked):
    consultation = booked["c1_p1"]
    consultation.updated_at = consultation.updated_at.replace(year=2000)
    db.commit()

    updated = ConsultationRepository.update_status(db, consultation, ConsultationStatus.CONFIRMED)

    assert updated.status == ConsultationStatus.CONFIRMED
    assert updated.updated_at.year > 2000


def test_failed_commit_raises_persistence_error_and_keeps_status(db, booked, monkeypatch):
    consultation = booked["c1_p1"]

    def failing_commit():
        raise OperationalError("UPDATE consultations", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(PersistenceError):
        ConsultationRepository.update_status(db, consultation, ConsultationStatus.CANCELLED)

    monkeypatch.undo()
    db.expire_all()
    assert ConsultationRepository.get_for_account(db, consultation.id, "client-1").status == (
        ConsultationStatus.SCHEDULED
    )


def test_failed_booking_commit_raises_persistence_error_and_writes_nothing(
    db, client_account, professional_account, monkeypatch
):
    def failing_commit():
        raise IntegrityError("INSERT INTO consultations", {}, Exception("FOREIGN KEY constraint failed"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(PersistenceError):
        ConsultationRepository.create(
            db,
            client_id=client_account.id,
            professional_id=professional_account.id,
            scheduled_date=date(2025, 6, 1),
            scheduled_time="14:00",
        )

    monkeypatch.undo()
    assert ConsultationRepository.list_for_account(db, client_account.id) == []


def test_failed_refresh_after_commit_is_wrapped(db, booked, monkeypatch):
    def failing_refresh(instance):
        raise OperationalError("SELECT consultations", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "refresh", failing_refresh)

    with pytest.raises(PersistenceError):
        ConsultationRepository.update_status(db, booked["c1_p1"], ConsultationStatus.CONFIRMED)
