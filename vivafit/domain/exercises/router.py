"""Exercise router - FastAPI endpoints for the daily exercise log"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...database import get_db
from ..identity.resolver import get_current_actor
from ..identity.schemas import Actor
from .schemas import (
    ExerciseCreate,
    ExerciseListResponse,
    ExerciseResponse,
    ExerciseWriteResponse,
    ProgressResponse,
    ProgressUpdate,
)
from .service import ExerciseDay, ExerciseService, ExerciseWriteResult

router = APIRouter(prefix="/exercises", tags=["Exercises"])


def get_exercise_service(db: Session = Depends(get_db)) -> ExerciseService:
    """Dependency injection for ExerciseService"""
    return ExerciseService(db)


def to_list_response(day: ExerciseDay) -> ExerciseListResponse:
    return ExerciseListResponse(
        date=day.date,
        completed_count=day.completed_count,
        total_count=len(day.exercises),
        exercises=[ExerciseResponse.model_validate(e) for e in day.exercises],
    )


def to_write_response(result: ExerciseWriteResult) -> ExerciseWriteResponse:
    return ExerciseWriteResponse(
        exercise=ExerciseResponse.model_validate(result.exercise),
        exercises=to_list_response(result.day),
    )


@router.get("", response_model=ExerciseListResponse)
async def get_todays_exercises(
    actor: Actor = Depends(get_current_actor),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Get the current account's exercises for today, newest first"""
    return to_list_response(service.get_today(actor))


@router.post("", response_model=ExerciseWriteResponse, status_code=status.HTTP_201_CREATED)
async def add_exercise(
    data: ExerciseCreate,
    actor: Actor = Depends(get_current_actor),
    service: ExerciseService = Depends(get_exercise_service),
):
    return to_write_response(service.add_exercise(actor, data))


@router.post("/{exercise_id}/toggle", response_model=ExerciseWriteResponse)
async def toggle_exercise(
    exercise_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Mark an exercise completed, or undo that"""
    return to_write_response(service.toggle_completed(actor, exercise_id))


# ============================================================================
# DAILY PROGRESS
# ============================================================================


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    actor: Actor = Depends(get_current_actor),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Get today's workout, nutrition, hydration and sleep progress"""
    return ProgressResponse.model_validate(service.get_progress(actor))


@router.patch("/progress", response_model=ProgressResponse)
async def update_progress(
    data: ProgressUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ExerciseService = Depends(get_exercise_service),
):
    return ProgressResponse.model_validate(service.update_progress(actor, data))
