"""Consultation router - FastAPI endpoints for consultation operations"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Consultation
from ..identity.resolver import get_current_actor
from ..identity.schemas import Actor
from .schemas import (
    ConsultationCreate,
    ConsultationResponse,
    ConsultationWriteResponse,
    StatusUpdate,
)
from .service import ConsultationService, ConsultationWriteResult
from .state_machine import allowed_next_statuses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consultations", tags=["Consultations"])


def get_consultation_service(db: Session = Depends(get_db)) -> ConsultationService:
    """Dependency injection for ConsultationService"""
    return ConsultationService(db)


def to_response(consultation: Consultation, actor: Actor) -> ConsultationResponse:
    response = ConsultationResponse.model_validate(consultation)
    response.allowed_transitions = allowed_next_statuses(consultation.status, actor.role)
    return response


def to_write_response(result: ConsultationWriteResult, actor: Actor) -> ConsultationWriteResponse:
    return ConsultationWriteResponse(
        consultation=to_response(result.consultation, actor),
        consultations=[to_response(c, actor) for c in result.consultations],
    )


@router.get("", response_model=list[ConsultationResponse])
async def get_consultations(
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Get every consultation the current account is a party to, soonest first"""
    return [to_response(c, actor) for c in service.get_consultations(actor)]


@router.post("", response_model=ConsultationWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_consultation(
    data: ConsultationCreate,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Book a consultation with a professional (clients only)"""
    return to_write_response(service.create_consultation(actor, data), actor)


@router.get("/{consultation_id}", response_model=ConsultationResponse)
async def get_consultation(
    consultation_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Get a specific consultation"""
    return to_response(service.get_consultation(actor, consultation_id), actor)


@router.patch("/{consultation_id}/status", response_model=ConsultationWriteResponse)
async def update_consultation_status(
    consultation_id: str,
    data: StatusUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Change the status of a consultation"""
    return to_write_response(service.update_status(actor, consultation_id, data.status), actor)


# ============================================================================
# SHORTCUT TRANSITIONS
# ============================================================================


@router.post("/{consultation_id}/confirm", response_model=ConsultationWriteResponse)
async def confirm_consultation(
    consultation_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Confirm a scheduled consultation (professionals only)"""
    return to_write_response(service.confirm(actor, consultation_id), actor)


@router.post("/{consultation_id}/cancel", response_model=ConsultationWriteResponse)
async def cancel_consultation(
    consultation_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Cancel a scheduled or confirmed consultation"""
    return to_write_response(service.cancel(actor, consultation_id), actor)


@router.post("/{consultation_id}/complete", response_model=ConsultationWriteResponse)
async def complete_consultation(
    consultation_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ConsultationService = Depends(get_consultation_service),
):
    """Mark a confirmed consultation as completed (professionals only)"""
    return to_write_response(service.complete(actor, consultation_id), actor)
