import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .config import DEFAULT_DURATION_MINUTES, DEFAULT_EXERCISE_MINUTES
from .database import Base


def generate_id():
    """Generate an opaque unique identifier"""
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, consistent across SQLite and Postgres"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today():
    """Current calendar day in UTC"""
    return utcnow().date()


class Role(str, enum.Enum):
    CLIENT = "client"
    PROFESSIONAL = "professional"


class ConsultationStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class FontSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


def _enum_column(enum_cls):
    # Store the lowercase values, not the member names
    return Enum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(128), primary_key=True)  # Identity provider UID
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(_enum_column(Role), nullable=False, default=Role.CLIENT)

    # Appearance preferences
    theme = Column(_enum_column(Theme), nullable=False, default=Theme.SYSTEM)
    font_size = Column(_enum_column(FontSize), nullable=False, default=FontSize.MEDIUM)
    high_contrast = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Account {self.id} ({self.role.value if self.role else None})>"


class Consultation(Base):
    __tablename__ = "consultations"
    __table_args__ = (
        Index("ix_consultations_client_schedule", "client_id", "scheduled_date", "scheduled_time"),
        Index(
            "ix_consultations_professional_schedule",
            "professional_id",
            "scheduled_date",
            "scheduled_time",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)
    professional_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(5), nullable=False)  # HH:MM, 24h
    duration_minutes = Column(Integer, nullable=False, default=DEFAULT_DURATION_MINUTES)
    status = Column(
        _enum_column(ConsultationStatus), nullable=False, default=ConsultationStatus.SCHEDULED
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    client = relationship("Account", foreign_keys=[client_id])
    professional = relationship("Account", foreign_keys=[professional_id])

    def __repr__(self):
        return (
            f"<Consultation {self.id} - Client {self.client_id} - "
            f"Professional {self.professional_id} - {self.status.value if self.status else None}>"
        )


class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (Index("ix_exercises_user_date", "user_id", "date"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=DEFAULT_EXERCISE_MINUTES)
    completed = Column(Boolean, nullable=False, default=False)
    date = Column(Date, nullable=False, default=utc_today)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Exercise {self.id} - {self.name} - User {self.user_id} - {self.date}>"


class DailyProgress(Base):
    __tablename__ = "daily_progress"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_progress_user_date"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(128), ForeignKey("accounts.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, default=utc_today)

    # Percentages, 0 to 100
    workout = Column(Integer, nullable=False, default=0)
    nutrition = Column(Integer, nullable=False, default=0)
    hydration = Column(Integer, nullable=False, default=0)
    sleep = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
