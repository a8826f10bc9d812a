"""WorkoutPlan and PlanExercise models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, SmallInteger, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.core.enums import IntensityTechnique
from liftlog.db.base import Base, enum_values


class WorkoutPlan(Base):
    """A user's reusable plan template. Plan names are unique per user."""

    __tablename__ = "workout_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "plan_name", name="uq_workout_plans_user_plan_name"),
        Index("ix_workout_plans_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    plan_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercises: Mapped[list["PlanExercise"]] = relationship(
        "PlanExercise",
        back_populates="workout_plan",
        cascade="all, delete-orphan",
        order_by="PlanExercise.display_order",
    )


class PlanExercise(Base):
    """One exercise prescription within a plan (warmups, working sets, reps, RPE, rest)."""

    __tablename__ = "plan_exercises"
    __table_args__ = (
        CheckConstraint("warmup_sets >= 0", name="ck_plan_exercises_warmup_sets"),
        CheckConstraint("working_sets BETWEEN 0 AND 4", name="ck_plan_exercises_working_sets"),
        CheckConstraint("target_reps >= 1", name="ck_plan_exercises_target_reps"),
        CheckConstraint("rpe_early BETWEEN 1 AND 10", name="ck_plan_exercises_rpe_early"),
        CheckConstraint("rpe_last BETWEEN 1 AND 10", name="ck_plan_exercises_rpe_last"),
        CheckConstraint("rest_time >= 0", name="ck_plan_exercises_rest_time"),
        Index("ix_plan_exercises_plan_id", "plan_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False)
    exercise_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("exercises.id"), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)
    intensity_technique: Mapped[IntensityTechnique] = mapped_column(
        Enum(IntensityTechnique, name="intensity_technique", values_callable=enum_values),
        nullable=False,
        default=IntensityTechnique.NA,
    )
    warmup_sets: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    working_sets: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    target_reps: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    rpe_early: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    rpe_last: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    rest_time: Mapped[int] = mapped_column(Integer, nullable=False)  # seconds
    notes: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    workout_plan: Mapped["WorkoutPlan"] = relationship("WorkoutPlan", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise")
