"""Consultation domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config import DEFAULT_DURATION_MINUTES, MAX_DURATION_MINUTES
from ...models import ConsultationStatus
from ...shared.validators import clean_optional_text, validate_time_of_day


class ConsultationCreate(BaseModel):
    """Schema for booking a consultation"""

    professional_id: str = Field(..., min_length=1, max_length=128)
    scheduled_date: date
    scheduled_time: str
    duration_minutes: int = Field(DEFAULT_DURATION_MINUTES, gt=0, le=MAX_DURATION_MINUTES)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return clean_optional_text(v)


class StatusUpdate(BaseModel):
    """Schema for a status change request"""

    status: ConsultationStatus


class Counterparty(BaseModel):
    """Display details of a participant"""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str


class ConsultationResponse(BaseModel):
    """Schema for consultation response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    professional_id: str
    scheduled_date: date
    scheduled_time: str
    duration_minutes: int
    status: ConsultationStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    client: Optional[Counterparty] = None
    professional: Optional[Counterparty] = None
    allowed_transitions: list[ConsultationStatus] = []


class ConsultationWriteResponse(BaseModel):
    """A written consultation together with the actor's refreshed list"""

    consultation: ConsultationResponse
    consultations: list[ConsultationResponse]
