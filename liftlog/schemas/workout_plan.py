"""Workout plan and plan exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.constants import MAX_WORKING_SETS_PER_PLAN_EXERCISE
from liftlog.core.enums import IntensityTechnique


class PlanExerciseBase(BaseModel):
    exercise_id: UUID
    display_order: int = Field(..., ge=0)
    intensity_technique: IntensityTechnique = IntensityTechnique.NA
    warmup_sets: int = Field(..., ge=0, le=32767)
    working_sets: int = Field(..., ge=0, le=MAX_WORKING_SETS_PER_PLAN_EXERCISE)
    target_reps: int = Field(..., ge=1, le=32767)
    rpe_early: int = Field(..., ge=1, le=10)
    rpe_last: int = Field(..., ge=1, le=10)
    rest_time: int = Field(..., ge=0, description="Rest between sets in seconds")
    notes: str = Field("", max_length=500)


class PlanExerciseCreate(PlanExerciseBase):
    pass


class PlanExerciseUpdate(BaseModel):
    display_order: int | None = Field(None, ge=0)
    intensity_technique: IntensityTechnique | None = None
    warmup_sets: int | None = Field(None, ge=0, le=32767)
    working_sets: int | None = Field(None, ge=0, le=MAX_WORKING_SETS_PER_PLAN_EXERCISE)
    target_reps: int | None = Field(None, ge=1, le=32767)
    rpe_early: int | None = Field(None, ge=1, le=10)
    rpe_last: int | None = Field(None, ge=1, le=10)
    rest_time: int | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)


class PlanExerciseRead(PlanExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID


class WorkoutPlanCreate(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=100)
    exercises: list[PlanExerciseCreate] = []


class WorkoutPlanUpdate(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=100)


class WorkoutPlanListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    plan_name: str
    created_at: datetime
    updated_at: datetime | None = None


class WorkoutPlanList(BaseModel):
    items: list[WorkoutPlanListItem]
    total: int


class WorkoutPlanRead(WorkoutPlanListItem):
    exercises: list[PlanExerciseRead] = []
