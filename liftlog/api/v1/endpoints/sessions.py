"""Workout session endpoints: lifecycle, session exercises and logged sets."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from liftlog.core.config import Settings, get_settings
from liftlog.core.constants import MAX_SETS_PER_EXERCISE_PER_SESSION
from liftlog.core.enums import SessionStatus
from liftlog.core.security import get_current_user_id
from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise
from liftlog.models.session import ExerciseSet, SessionExercise, WorkoutSession
from liftlog.models.workout_plan import WorkoutPlan
from liftlog.schemas.session import (
    ExerciseSetCreate,
    ExerciseSetRead,
    ExerciseSetUpdate,
    SessionExerciseCreate,
    SessionExerciseRead,
    SessionExerciseUpdate,
    SessionStatusFilter,
    WorkoutSessionCreate,
    WorkoutSessionDetail,
    WorkoutSessionList,
    WorkoutSessionListItem,
    WorkoutSessionUpdate,
)
from liftlog.services.session_detail import build_session_detail
from liftlog.services.warmup import WarmupPlanner, get_warmup_planner

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_query(user_id: uuid.UUID, session_id: uuid.UUID):
    return (
        select(WorkoutSession)
        .where(WorkoutSession.id == session_id, WorkoutSession.user_id == user_id)
        .options(
            selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets),
            selectinload(WorkoutSession.exercises).selectinload(SessionExercise.exercise),
            selectinload(WorkoutSession.exercises).selectinload(SessionExercise.plan_exercise),
        )
    )


async def _get_session_or_404(db: AsyncSession, user_id: uuid.UUID, session_id: uuid.UUID) -> WorkoutSession:
    result = await db.execute(_session_query(user_id, session_id))
    session = result.scalar_one_or_none()
    if not session:
        raise HTTPException(status_code=404, detail="Workout session not found")
    return session


def _require_in_progress(session: WorkoutSession, action: str) -> None:
    if session.status != SessionStatus.IN_PROGRESS:
        raise HTTPException(status_code=400, detail=f"Only in-progress sessions can be {action}")


def _find_session_exercise(session: WorkoutSession, session_exercise_id: uuid.UUID) -> SessionExercise:
    session_exercise = next((se for se in session.exercises if se.id == session_exercise_id), None)
    if session_exercise is None:
        raise HTTPException(status_code=404, detail="Session exercise not found")
    return session_exercise


def _find_set(session_exercise: SessionExercise, set_id: uuid.UUID) -> ExerciseSet:
    set_ = next((s for s in session_exercise.sets if s.id == set_id), None)
    if set_ is None:
        raise HTTPException(status_code=404, detail="Set not found")
    return set_


@router.get("", response_model=WorkoutSessionList)
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status: SessionStatusFilter = "all",
):
    """List the user's sessions, most recently started first, optionally filtered by status."""
    try:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)
        count_stmt = select(func.count(WorkoutSession.id)).where(WorkoutSession.user_id == user_id)
        if status != "all":
            stmt = stmt.where(WorkoutSession.status == SessionStatus(status))
            count_stmt = count_stmt.where(WorkoutSession.status == SessionStatus(status))
        total = (await db.execute(count_stmt)).scalar_one()
        result = await db.execute(stmt.order_by(WorkoutSession.started_at.desc()).offset(offset).limit(limit))
        sessions = result.scalars().all()
    except Exception:
        logger.exception("Failed to list sessions for user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to retrieve sessions")
    return WorkoutSessionList(
        items=[WorkoutSessionListItem.model_validate(s) for s in sessions],
        total=total,
    )


@router.post("", response_model=WorkoutSessionListItem, status_code=201)
async def create_session(
    payload: WorkoutSessionCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Start an in-progress session from one of the user's plans; the plan's exercises are copied in."""
    result = await db.execute(
        select(WorkoutPlan)
        .where(WorkoutPlan.id == payload.plan_id, WorkoutPlan.user_id == user_id)
        .options(selectinload(WorkoutPlan.exercises))
    )
    plan = result.scalar_one_or_none()
    if not plan:
        raise HTTPException(status_code=404, detail=f"Workout plan with ID {payload.plan_id} not found")

    session = WorkoutSession(
        user_id=user_id,
        plan_id=plan.id,
        status=SessionStatus.IN_PROGRESS,
        started_at=datetime.now(timezone.utc),
        exercises=[
            SessionExercise(
                plan_exercise_id=pe.id,
                exercise_id=pe.exercise_id,
                display_order=pe.display_order,
                notes="",
            )
            for pe in plan.exercises
        ],
    )
    db.add(session)
    await db.flush()
    return WorkoutSessionListItem.model_validate(session)


@router.get("/{session_id}", response_model=WorkoutSessionDetail)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    planner: WarmupPlanner = Depends(get_warmup_planner),
):
    """
    Session with its exercises and sets. Each exercise also carries its recent
    history and warmup suggestions; those are best effort and may be empty.
    """
    session = await _get_session_or_404(db, user_id, session_id)
    return await build_session_detail(
        db,
        user_id,
        session,
        planner,
        history_limit=settings.history_lookback,
        default_warmup_sets=settings.default_warmup_sets,
    )


@router.patch("/{session_id}", response_model=WorkoutSessionListItem)
async def update_session(
    session_id: uuid.UUID,
    payload: WorkoutSessionUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Finish a session: completed or cancelled stamps completed_at."""
    session = await _get_session_or_404(db, user_id, session_id)
    _require_in_progress(session, "updated")
    now = datetime.now(timezone.utc)
    session.status = payload.status
    if payload.status in (SessionStatus.COMPLETED, SessionStatus.CANCELLED):
        session.completed_at = now
    session.updated_at = now
    await db.flush()
    return WorkoutSessionListItem.model_validate(session)


@router.delete("/{session_id}", status_code=204)
async def cancel_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Cancel an in-progress session (soft delete: the data is kept)."""
    session = await _get_session_or_404(db, user_id, session_id)
    _require_in_progress(session, "cancelled")
    now = datetime.now(timezone.utc)
    session.status = SessionStatus.CANCELLED
    session.completed_at = now
    session.updated_at = now
    await db.flush()
    return None


@router.post("/{session_id}/exercises", response_model=SessionExerciseRead, status_code=201)
async def add_session_exercise(
    session_id: uuid.UUID,
    payload: SessionExerciseCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Add an exercise that is not part of the plan."""
    session = await _get_session_or_404(db, user_id, session_id)
    _require_in_progress(session, "modified")
    exercise = (await db.execute(select(Exercise.id).where(Exercise.id == payload.exercise_id))).first()
    if exercise is None:
        raise HTTPException(status_code=400, detail="Unknown exercise id")
    session_exercise = SessionExercise(session_id=session.id, **payload.model_dump())
    db.add(session_exercise)
    await db.flush()
    return SessionExerciseRead.model_validate(session_exercise)


@router.patch("/{session_id}/exercises/{session_exercise_id}", response_model=SessionExerciseRead)
async def update_session_exercise(
    session_id: uuid.UUID,
    session_exercise_id: uuid.UUID,
    payload: SessionExerciseUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Update notes or display order of a session exercise."""
    session = await _get_session_or_404(db, user_id, session_id)
    session_exercise = _find_session_exercise(session, session_exercise_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(session_exercise, k, v)
    await db.flush()
    return SessionExerciseRead.model_validate(session_exercise)


@router.post(
    "/{session_id}/exercises/{session_exercise_id}/sets",
    response_model=ExerciseSetRead,
    status_code=201,
)
async def add_set(
    session_id: uuid.UUID,
    session_exercise_id: uuid.UUID,
    payload: ExerciseSetCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Log a set (max 10 per exercise per session). set_index defaults to the next free index."""
    session = await _get_session_or_404(db, user_id, session_id)
    _require_in_progress(session, "modified")
    session_exercise = _find_session_exercise(session, session_exercise_id)
    if len(session_exercise.sets) >= MAX_SETS_PER_EXERCISE_PER_SESSION:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_SETS_PER_EXERCISE_PER_SESSION} sets per exercise per session.",
        )
    data = payload.model_dump()
    if data["set_index"] is None:
        data["set_index"] = max((s.set_index for s in session_exercise.sets), default=0) + 1
    set_ = ExerciseSet(session_exercise_id=session_exercise.id, created_at=datetime.now(timezone.utc), **data)
    db.add(set_)
    await db.flush()
    return ExerciseSetRead.model_validate(set_)


@router.patch(
    "/{session_id}/exercises/{session_exercise_id}/sets/{set_id}",
    response_model=ExerciseSetRead,
)
async def update_set(
    session_id: uuid.UUID,
    session_exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: ExerciseSetUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Correct a logged set (type, index, reps, load)."""
    session = await _get_session_or_404(db, user_id, session_id)
    set_ = _find_set(_find_session_exercise(session, session_exercise_id), set_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(set_, k, v)
    await db.flush()
    return ExerciseSetRead.model_validate(set_)


@router.delete("/{session_id}/exercises/{session_exercise_id}/sets/{set_id}", status_code=204)
async def delete_set(
    session_id: uuid.UUID,
    session_exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Remove a logged set from an in-progress session."""
    session = await _get_session_or_404(db, user_id, session_id)
    _require_in_progress(session, "modified")
    set_ = _find_set(_find_session_exercise(session, session_exercise_id), set_id)
    await db.delete(set_)
    return None
