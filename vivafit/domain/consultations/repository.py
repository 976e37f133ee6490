"""Consultation repository - Database operations for consultations"""

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ...errors import PersistenceError
from ...models import Consultation, ConsultationStatus, utcnow

logger = logging.getLogger(__name__)


def _party_filter(account_id: str):
    return or_(Consultation.client_id == account_id, Consultation.professional_id == account_id)


class ConsultationRepository:
    """Repository for party-scoped consultation database operations"""

    @staticmethod
    def list_for_account(db: Session, account_id: str) -> list[Consultation]:
        """Get every consultation the account is a party to, in chronological order"""
        try:
            return (
                db.query(Consultation)
                .options(joinedload(Consultation.client), joinedload(Consultation.professional))
                .filter(_party_filter(account_id))
                .order_by(Consultation.scheduled_date.asc(), Consultation.scheduled_time.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list consultations for {account_id}: {e}")
            raise PersistenceError("Unable to load consultations") from e

    @staticmethod
    def get_for_account(db: Session, consultation_id: str, account_id: str) -> Optional[Consultation]:
        """Get a consultation only if the account is a party to it"""
        try:
            return (
                db.query(Consultation)
                .options(joinedload(Consultation.client), joinedload(Consultation.professional))
                .filter(Consultation.id == consultation_id, _party_filter(account_id))
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load consultation {consultation_id}: {e}")
            raise PersistenceError("Unable to load consultation") from e

    @staticmethod
    def create(db: Session, **consultation_data) -> Consultation:
        """Insert a new consultation"""
        consultation = Consultation(**consultation_data)
        db.add(consultation)
        try:
            db.commit()
            db.refresh(consultation)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to create consultation: {e}")
            raise PersistenceError("Unable to book consultation") from e
        return consultation

    @staticmethod
    def update_status(db: Session, consultation: Consultation, status: ConsultationStatus) -> Consultation:
        """Persist a new status and bump updated_at"""
        consultation_id = consultation.id
        consultation.status = status
        consultation.updated_at = utcnow()
        try:
            db.commit()
            db.refresh(consultation)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to update consultation {consultation_id}: {e}")
            raise PersistenceError("Unable to update consultation") from e
        return consultation
