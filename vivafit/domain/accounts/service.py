"""Account service - Business logic for profile and directory operations"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Account
from ..identity.schemas import Actor
from .repository import AccountRepository
from .schemas import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)


class AccountService:
    """Service layer for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountRepository()

    def get_profile(self, actor: Actor) -> ProfileResponse:
        """Profile of the current actor, with defaults for a fallback identity"""
        account = self.repo.get_account(self.db, actor.id)
        if account is None:
            return ProfileResponse(
                id=actor.id,
                name=actor.name,
                email=actor.email,
                role=actor.role,
                is_fallback=True,
            )
        return ProfileResponse.model_validate(account)

    def update_profile(self, actor: Actor, data: ProfileUpdate) -> ProfileResponse:
        """Update name and appearance preferences of the current account"""
        account = self.repo.get_account(self.db, actor.id)
        if account is None:
            logger.warning(f"⚠️ Profile update for {actor.id} without an account record")
            raise NotFoundError("Account profile not found")

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        account = self.repo.update_account(self.db, account, **updates)
        logger.info(f"✅ Profile updated for account {account.id}: {sorted(updates)}")
        return ProfileResponse.model_validate(account)

    def list_professionals(self) -> list[Account]:
        return self.repo.list_professionals(self.db)

    def get_professional(self, professional_id: str) -> Account:
        professional = self.repo.get_professional(self.db, professional_id)
        if professional is None:
            raise NotFoundError("Professional not found")
        return professional
