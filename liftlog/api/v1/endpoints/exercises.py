"""Exercise catalogue endpoints, plus per-user history and warmup suggestions for an exercise."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import Settings, get_settings
from liftlog.core.security import get_current_user_id
from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise
from liftlog.schemas.exercise import ExerciseCreate, ExerciseList, ExerciseRead
from liftlog.services.exercise_history import HistoricalResult, get_exercise_history
from liftlog.services.session_detail import suggest_warmups
from liftlog.services.warmup import WarmupPlanner, WarmupSetSuggestion, get_warmup_planner

router = APIRouter()


async def _get_exercise_or_404(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("", response_model=ExerciseList)
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    search: str | None = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """List exercises by name; `search` is a case-insensitive substring (autocomplete)."""
    stmt = select(Exercise)
    count_stmt = select(func.count(Exercise.id))
    if search:
        matches = Exercise.name.icontains(search.strip(), autoescape=True)
        stmt = stmt.where(matches)
        count_stmt = count_stmt.where(matches)
    total = (await db.execute(count_stmt)).scalar_one()
    result = await db.execute(stmt.order_by(Exercise.name).offset(offset).limit(limit))
    return ExerciseList(items=[ExerciseRead.model_validate(e) for e in result.scalars().all()], total=total)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add an exercise to the catalogue. Names are unique (case-insensitive)."""
    name = payload.name.strip()
    existing = await db.execute(select(Exercise.id).where(func.lower(Exercise.name) == name.lower()))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Exercise with this name already exists")
    exercise = Exercise(name=name)
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single exercise by id."""
    return await _get_exercise_or_404(db, exercise_id)


@router.get("/{exercise_id}/history", response_model=list[HistoricalResult])
async def exercise_history(
    exercise_id: uuid.UUID,
    limit: int | None = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    """Best working set of each recent completed session, most recent first."""
    await _get_exercise_or_404(db, exercise_id)
    return await get_exercise_history(db, user_id, exercise_id, limit or settings.history_lookback)


@router.get("/{exercise_id}/warmup", response_model=list[WarmupSetSuggestion])
async def exercise_warmup(
    exercise_id: uuid.UUID,
    sets: int | None = Query(None, le=100, description="Number of warmup sets; defaults to the configured count"),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
    planner: WarmupPlanner = Depends(get_warmup_planner),
):
    """Warmup suggestions seeded by the user's most recent working load for this exercise."""
    await _get_exercise_or_404(db, exercise_id)
    history = await get_exercise_history(db, user_id, exercise_id, settings.history_lookback)
    count = settings.default_warmup_sets if sets is None else sets
    return suggest_warmups(planner, history, count)
