"""Exercise service - Business logic for the daily exercise log and progress"""

import logging
from datetime import date
from typing import NamedTuple

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import DailyProgress, Exercise, utc_today
from ..identity.schemas import Actor
from .repository import ExerciseRepository
from .schemas import ExerciseCreate, ProgressUpdate

logger = logging.getLogger(__name__)


class ExerciseDay(NamedTuple):
    """An account's exercises for one day, newest first"""

    date: date
    exercises: list[Exercise]

    @property
    def completed_count(self) -> int:
        return sum(1 for exercise in self.exercises if exercise.completed)


class ExerciseWriteResult(NamedTuple):
    """The written exercise and its day re-fetched after the write"""

    exercise: Exercise
    day: ExerciseDay


class ExerciseService:
    """Service layer for exercise tracking"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ExerciseRepository()

    def get_day(self, actor: Actor, day: date) -> ExerciseDay:
        return ExerciseDay(day, self.repo.list_for_day(self.db, actor.id, day))

    def get_today(self, actor: Actor) -> ExerciseDay:
        """Get the actor's exercises logged today"""
        return self.get_day(actor, utc_today())

    def add_exercise(self, actor: Actor, data: ExerciseCreate) -> ExerciseWriteResult:
        """Log an exercise for today, not yet completed"""
        today = utc_today()
        logger.info(f"📥 Adding exercise '{data.name}' for {actor.id} on {today}")

        exercise = self.repo.create(
            self.db,
            user_id=actor.id,
            name=data.name,
            description=data.description,
            duration_minutes=data.duration_minutes,
            completed=False,
            date=today,
        )
        logger.info(f"✅ Exercise {exercise.id} added")
        return ExerciseWriteResult(exercise, self.get_day(actor, exercise.date))

    def toggle_completed(self, actor: Actor, exercise_id: str) -> ExerciseWriteResult:
        """Flip the completed flag of one of the actor's exercises"""
        exercise = self.repo.get_for_owner(self.db, exercise_id, actor.id)
        if not exercise:
            raise NotFoundError("Exercise not found")

        exercise = self.repo.set_completed(self.db, exercise, not exercise.completed)
        logger.info(f"✅ Exercise {exercise_id} marked {'completed' if exercise.completed else 'not completed'}")
        return ExerciseWriteResult(exercise, self.get_day(actor, exercise.date))

    def get_progress(self, actor: Actor) -> DailyProgress:
        """Get today's progress, all zero when nothing was recorded"""
        today = utc_today()
        progress = self.repo.get_progress(self.db, actor.id, today)
        if progress is None:
            # Not persisted
            return DailyProgress(
                user_id=actor.id, date=today, workout=0, nutrition=0, hydration=0, sleep=0
            )
        return progress

    def update_progress(self, actor: Actor, data: ProgressUpdate) -> DailyProgress:
        """Record today's progress percentages"""
        updates = data.model_dump(exclude_unset=True)
        # Percentages are not nullable
        updates = {k: v for k, v in updates.items() if v is not None or k == "notes"}
        return self.repo.save_progress(self.db, actor.id, utc_today(), **updates)
