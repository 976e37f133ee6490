"""Exercise repository - Database operations for exercises and daily progress"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import PersistenceError
from ...models import DailyProgress, Exercise

logger = logging.getLogger(__name__)


class ExerciseRepository:
    """Repository for owner-scoped exercise database operations"""

    @staticmethod
    def list_for_day(db: Session, user_id: str, day: date) -> list[Exercise]:
        """Get an account's exercises for one day, newest first"""
        try:
            return (
                db.query(Exercise)
                .filter(Exercise.user_id == user_id, Exercise.date == day)
                .order_by(Exercise.created_at.desc(), Exercise.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list exercises for {user_id}: {e}")
            raise PersistenceError("Unable to load exercises") from e

    @staticmethod
    def get_for_owner(db: Session, exercise_id: str, user_id: str) -> Optional[Exercise]:
        """Get an exercise only if it belongs to the account"""
        try:
            return (
                db.query(Exercise)
                .filter(Exercise.id == exercise_id, Exercise.user_id == user_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load exercise {exercise_id}: {e}")
            raise PersistenceError("Unable to load exercise") from e

    @staticmethod
    def create(db: Session, **exercise_data) -> Exercise:
        """Insert a new exercise"""
        exercise = Exercise(**exercise_data)
        db.add(exercise)
        try:
            db.commit()
            db.refresh(exercise)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to create exercise: {e}")
            raise PersistenceError("Unable to add exercise") from e
        return exercise

    @staticmethod
    def set_completed(db: Session, exercise: Exercise, completed: bool) -> Exercise:
        exercise_id = exercise.id
        exercise.completed = completed
        try:
            db.commit()
            db.refresh(exercise)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to update exercise {exercise_id}: {e}")
            raise PersistenceError("Unable to update exercise") from e
        return exercise

    @staticmethod
    def get_progress(db: Session, user_id: str, day: date) -> Optional[DailyProgress]:
        """Get an account's progress row for one day"""
        try:
            return (
                db.query(DailyProgress)
                .filter(DailyProgress.user_id == user_id, DailyProgress.date == day)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load progress for {user_id} on {day}: {e}")
            raise PersistenceError("Unable to load progress") from e

    @staticmethod
    def save_progress(db: Session, user_id: str, day: date, **updates) -> DailyProgress:
        """Create or update an account's progress row for one day"""
        progress = ExerciseRepository.get_progress(db, user_id, day)
        if progress is None:
            progress = DailyProgress(user_id=user_id, date=day)
            db.add(progress)

        for key, value in updates.items():
            if hasattr(progress, key):
                setattr(progress, key, value)

        try:
            db.commit()
            db.refresh(progress)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to save progress for {user_id} on {day}: {e}")
            raise PersistenceError("Unable to save progress") from e
        return progress
