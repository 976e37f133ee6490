"""Identity resolver - maps a session onto an Actor"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import get_session_info
from ...database import get_db
from ...models import Role
from ..accounts.repository import AccountRepository
from .schemas import Actor, SessionInfo

logger = logging.getLogger(__name__)


def name_from_email(email: Optional[str]) -> str:
    """Derive a display name from the local part of an email address"""
    if not email or "@" not in email:
        return "User"
    local_part = email.split("@", 1)[0].strip()
    return local_part or "User"


class IdentityResolver:
    """Read-only lookup of the account behind a session"""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, session: Optional[SessionInfo]) -> Optional[Actor]:
        """
        Resolve the actor for a session.

        Returns None when there is no session. When the session has no
        matching account row, a minimal client identity is synthesized from
        the session metadata instead of failing.
        """
        if session is None:
            return None

        account = AccountRepository.get_account(self.db, session.account_id)

        if account is not None:
            return Actor(
                id=account.id,
                role=account.role,
                name=account.name,
                email=account.email,
            )

        logger.warning(
            f"⚠️ No account record for {session.account_id}, using fallback identity"
        )
        return Actor(
            id=session.account_id,
            role=Role.CLIENT,
            name=name_from_email(session.email) if session.email else (session.name or "User"),
            email=session.email,
            is_fallback=True,
        )


def get_identity_resolver(db: Session = Depends(get_db)) -> IdentityResolver:
    """Dependency injection for IdentityResolver"""
    return IdentityResolver(db)


def get_current_actor(
    session: Optional[SessionInfo] = Depends(get_session_info),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Actor:
    """Resolve the calling actor or reject the request as unauthenticated"""
    actor = resolver.resolve(session)
    if actor is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )
    return actor
