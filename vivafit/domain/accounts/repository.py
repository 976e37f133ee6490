"""Account repository - Database operations for accounts"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import PersistenceError
from ...models import Account, Role

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for account database operations"""

    @staticmethod
    def get_account(db: Session, account_id: str) -> Optional[Account]:
        """Get an account by its identity provider UID"""
        try:
            return db.get(Account, account_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load account {account_id}: {e}")
            raise PersistenceError("Unable to load account") from e

    @staticmethod
    def get_professional(db: Session, professional_id: str) -> Optional[Account]:
        """Get an account only if it belongs to a professional"""
        try:
            return (
                db.query(Account)
                .filter(Account.id == professional_id, Account.role == Role.PROFESSIONAL)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load professional {professional_id}: {e}")
            raise PersistenceError("Unable to load professional") from e

    @staticmethod
    def list_professionals(db: Session) -> list[Account]:
        """Get all professionals ordered by name"""
        try:
            return (
                db.query(Account)
                .filter(Account.role == Role.PROFESSIONAL)
                .order_by(Account.name.asc(), Account.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list professionals: {e}")
            raise PersistenceError("Unable to load professionals") from e

    @staticmethod
    def update_account(db: Session, account: Account, **updates) -> Account:
        """Update an account with provided fields"""
        account_id = account.id
        for key, value in updates.items():
            if value is not None and hasattr(account, key):
                setattr(account, key, value)

        try:
            db.commit()
            db.refresh(account)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to update account {account_id}: {e}")
            raise PersistenceError("Unable to update profile") from e
        return account
