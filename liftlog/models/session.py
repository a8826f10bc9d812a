"""WorkoutSession, SessionExercise and ExerciseSet models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, Numeric, SmallInteger, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.core.enums import SessionStatus, SetType
from liftlog.db.base import Base, enum_values


class WorkoutSession(Base):
    """A performed workout, optionally started from a plan. completed_at is set on completion or cancel."""

    __tablename__ = "workout_sessions"
    __table_args__ = (
        Index("ix_workout_sessions_user_completed", "user_id", "completed_at"),
        Index("ix_workout_sessions_plan_id", "plan_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    plan_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, name="session_status", values_callable=enum_values),
        nullable=False,
        default=SessionStatus.IN_PROGRESS,
    )
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionExercise.display_order",
    )


class SessionExercise(Base):
    """An exercise performed within a session; linked to its plan exercise when started from a plan."""

    __tablename__ = "session_exercises"
    __table_args__ = (
        Index("ix_session_exercises_session_id", "session_id"),
        Index("ix_session_exercises_exercise_id", "exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
    )
    plan_exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("plan_exercises.id", ondelete="SET NULL"), nullable=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("exercises.id"), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="exercises")
    plan_exercise: Mapped["PlanExercise | None"] = relationship("PlanExercise")
    exercise: Mapped["Exercise"] = relationship("Exercise")
    sets: Mapped[list["ExerciseSet"]] = relationship(
        "ExerciseSet",
        back_populates="session_exercise",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.set_index",
    )


class ExerciseSet(Base):
    """One logged set: reps x load, tagged warmup or working."""

    __tablename__ = "exercise_sets"
    __table_args__ = (
        CheckConstraint("set_index >= 1", name="ck_exercise_sets_set_index"),
        CheckConstraint("reps >= 1", name="ck_exercise_sets_reps"),
        CheckConstraint("load >= 0", name="ck_exercise_sets_load"),
        Index("ix_exercise_sets_session_exercise_id", "session_exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("session_exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_type: Mapped[SetType] = mapped_column(
        Enum(SetType, name="set_type", values_callable=enum_values), nullable=False
    )
    set_index: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    reps: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    load: Mapped[float] = mapped_column(Numeric(5, 1, asdecimal=False), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    session_exercise: Mapped["SessionExercise"] = relationship("SessionExercise", back_populates="sets")
