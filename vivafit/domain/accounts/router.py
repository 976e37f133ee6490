"""Account router - FastAPI endpoints for profile and professionals"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ..identity.resolver import get_current_actor
from ..identity.schemas import Actor
from .schemas import ProfessionalResponse, ProfileResponse, ProfileUpdate
from .service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency injection for AccountService"""
    return AccountService(db)


@router.get("/me", response_model=ProfileResponse)
async def get_profile(
    actor: Actor = Depends(get_current_actor),
    service: AccountService = Depends(get_account_service),
):
    """Get the current account's profile and appearance preferences"""
    return service.get_profile(actor)


@router.patch("/me", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    service: AccountService = Depends(get_account_service),
):
    """Update name and appearance preferences"""
    return service.update_profile(actor, data)


@router.get("/professionals", response_model=list[ProfessionalResponse])
async def list_professionals(
    actor: Actor = Depends(get_current_actor),
    service: AccountService = Depends(get_account_service),
):
    """List professionals available for booking"""
    return service.list_professionals()


@router.get("/professionals/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(
    professional_id: str,
    actor: Actor = Depends(get_current_actor),
    service: AccountService = Depends(get_account_service),
):
    """Get a single professional"""
    return service.get_professional(professional_id)
