"""Workout session, session exercise and exercise set schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import SessionStatus, SetType
from liftlog.services.exercise_history import HistoricalResult
from liftlog.services.warmup import WarmupSetSuggestion


class ExerciseSetBase(BaseModel):
    set_type: SetType
    reps: int = Field(..., ge=1, le=32767)
    load: float = Field(..., ge=0, le=9999.9)


class ExerciseSetCreate(ExerciseSetBase):
    set_index: int | None = Field(None, ge=1, le=32767)  # next free index when omitted


class ExerciseSetUpdate(BaseModel):
    set_type: SetType | None = None
    set_index: int | None = Field(None, ge=1, le=32767)
    reps: int | None = Field(None, ge=1, le=32767)
    load: float | None = Field(None, ge=0, le=9999.9)


class ExerciseSetRead(ExerciseSetBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    set_index: int
    created_at: datetime


class SessionExerciseCreate(BaseModel):
    exercise_id: UUID
    display_order: int = Field(0, ge=0)
    notes: str = Field("", max_length=500)


class SessionExerciseUpdate(BaseModel):
    notes: str | None = Field(None, max_length=500)
    display_order: int | None = Field(None, ge=0)


class SessionExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercise_id: UUID
    plan_exercise_id: UUID | None = None
    display_order: int
    notes: str


class SessionExerciseDetail(SessionExerciseRead):
    """Session exercise with sets plus history and warmup suggestions (best effort, may be empty)."""

    exercise_name: str | None = None
    warmup_sets_configured: int = 0
    sets: list[ExerciseSetRead] = []
    history: list[HistoricalResult] = []
    warmup_suggestions: list[WarmupSetSuggestion] = []


class WorkoutSessionCreate(BaseModel):
    plan_id: UUID


class WorkoutSessionUpdate(BaseModel):
    status: SessionStatus


class WorkoutSessionListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    plan_id: UUID | None = None
    status: SessionStatus
    started_at: datetime
    completed_at: datetime | None = None


class WorkoutSessionList(BaseModel):
    items: list[WorkoutSessionListItem]
    total: int


class WorkoutSessionDetail(WorkoutSessionListItem):
    exercises: list[SessionExerciseDetail] = []


SessionStatusFilter = Literal["in_progress", "completed", "cancelled", "all"]
