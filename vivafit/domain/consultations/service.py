"""Consultation service - Business logic for the consultation lifecycle"""

import logging
from typing import NamedTuple

from sqlalchemy.orm import Session

from ...errors import InvalidActorError, InvalidTransitionError, NotFoundError
from ...models import Consultation, ConsultationStatus
from ..accounts.repository import AccountRepository
from ..identity.schemas import Actor
from .repository import ConsultationRepository
from .schemas import ConsultationCreate
from .state_machine import INITIAL_STATUS, validate_transition

logger = logging.getLogger(__name__)


class ConsultationWriteResult(NamedTuple):
    """The written consultation and the actor's list re-fetched after the write"""

    consultation: Consultation
    consultations: list[Consultation]


class ConsultationService:
    """Service layer for consultation business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ConsultationRepository()
        self.accounts = AccountRepository()

    def get_consultations(self, actor: Actor) -> list[Consultation]:
        """Get every consultation the actor is a party to"""
        return self.repo.list_for_account(self.db, actor.id)

    def get_consultation(self, actor: Actor, consultation_id: str) -> Consultation:
        """Get a consultation the actor is a party to"""
        consultation = self.repo.get_for_account(self.db, consultation_id, actor.id)
        if not consultation:
            # Same answer whether it is missing or belongs to someone else
            raise NotFoundError("Consultation not found")
        return consultation

    def create_consultation(self, actor: Actor, data: ConsultationCreate) -> ConsultationWriteResult:
        """Book a consultation with a professional"""
        logger.info(f"📥 Booking consultation for client {actor.id} with {data.professional_id}")

        if not actor.is_client:
            logger.warning(f"⚠️ Account {actor.id} with role {actor.role.value} tried to book")
            raise InvalidActorError("Only clients can book consultations")

        if not self.accounts.get_professional(self.db, data.professional_id):
            raise NotFoundError("Professional not found")

        consultation = self.repo.create(
            self.db,
            client_id=actor.id,
            professional_id=data.professional_id,
            scheduled_date=data.scheduled_date,
            scheduled_time=data.scheduled_time,
            duration_minutes=data.duration_minutes,
            notes=data.notes,
            status=INITIAL_STATUS,
        )
        logger.info(
            f"✅ Consultation {consultation.id} booked for "
            f"{consultation.scheduled_date} {consultation.scheduled_time}"
        )
        return ConsultationWriteResult(consultation, self.get_consultations(actor))

    def update_status(
        self, actor: Actor, consultation_id: str, new_status: ConsultationStatus
    ) -> ConsultationWriteResult:
        """Move a consultation to a new status if the actor may do so"""
        consultation = self.get_consultation(actor, consultation_id)
        current_status = consultation.status

        try:
            new_status = validate_transition(current_status, new_status, actor.role)
        except InvalidTransitionError:
            logger.warning(
                f"⚠️ Rejected transition {current_status.value} → {ConsultationStatus(new_status).value} "
                f"on {consultation_id} by {actor.role.value} {actor.id}"
            )
            raise

        consultation = self.repo.update_status(self.db, consultation, new_status)
        logger.info(
            f"✅ Consultation {consultation_id} transitioned: "
            f"{current_status.value} → {new_status.value}"
        )
        return ConsultationWriteResult(consultation, self.get_consultations(actor))

    def confirm(self, actor: Actor, consultation_id: str) -> ConsultationWriteResult:
        return self.update_status(actor, consultation_id, ConsultationStatus.CONFIRMED)

    def cancel(self, actor: Actor, consultation_id: str) -> ConsultationWriteResult:
        return self.update_status(actor, consultation_id, ConsultationStatus.CANCELLED)

    def complete(self, actor: Actor, consultation_id: str) -> ConsultationWriteResult:
        return self.update_status(actor, consultation_id, ConsultationStatus.COMPLETED)
