"""Exercise domain schemas - Pydantic models for validation"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config import DEFAULT_EXERCISE_MINUTES, MAX_DURATION_MINUTES
from ...shared.validators import clean_optional_text


class ExerciseCreate(BaseModel):
    """Schema for logging an exercise for today"""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    duration_minutes: int = Field(DEFAULT_EXERCISE_MINUTES, gt=0, le=MAX_DURATION_MINUTES)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Exercise name cannot be blank")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return clean_optional_text(v)


class ExerciseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    duration_minutes: int
    completed: bool
    date: datetime.date
    created_at: datetime.datetime


class ExerciseListResponse(BaseModel):
    """Today's exercises with a completion summary"""

    date: datetime.date
    completed_count: int
    total_count: int
    exercises: list[ExerciseResponse]


class ExerciseWriteResponse(BaseModel):
    """A written exercise together with the refreshed list for its day"""

    exercise: ExerciseResponse
    exercises: ExerciseListResponse


class ProgressUpdate(BaseModel):
    """Schema for updating today's progress; omitted fields are left alone"""

    workout: Optional[int] = Field(None, ge=0, le=100)
    nutrition: Optional[int] = Field(None, ge=0, le=100)
    hydration: Optional[int] = Field(None, ge=0, le=100)
    sleep: Optional[int] = Field(None, ge=0, le=100)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return clean_optional_text(v)


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime.date
    workout: int = 0
    nutrition: int = 0
    hydration: int = 0
    sleep: int = 0
    notes: Optional[str] = None
