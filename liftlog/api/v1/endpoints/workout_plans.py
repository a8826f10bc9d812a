"""Workout plan CRUD endpoints (scoped to the acting user)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from liftlog.core.security import get_current_user_id
from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise
from liftlog.models.workout_plan import PlanExercise, WorkoutPlan
from liftlog.schemas.workout_plan import (
    PlanExerciseRead,
    PlanExerciseUpdate,
    WorkoutPlanCreate,
    WorkoutPlanList,
    WorkoutPlanListItem,
    WorkoutPlanRead,
    WorkoutPlanUpdate,
)

router = APIRouter()


async def _get_plan_or_404(db: AsyncSession, user_id: uuid.UUID, plan_id: uuid.UUID) -> WorkoutPlan:
    result = await db.execute(
        select(WorkoutPlan)
        .where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
        .options(selectinload(WorkoutPlan.exercises))
    )
    plan = result.scalar_one_or_none()
    if not plan:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    return plan


async def _ensure_unique_name(
    db: AsyncSession, user_id: uuid.UUID, plan_name: str, exclude_plan_id: uuid.UUID | None = None
) -> None:
    stmt = select(WorkoutPlan.id).where(WorkoutPlan.user_id == user_id, WorkoutPlan.plan_name == plan_name)
    if exclude_plan_id is not None:
        stmt = stmt.where(WorkoutPlan.id != exclude_plan_id)
    if (await db.execute(stmt)).first() is not None:
        raise HTTPException(status_code=409, detail="A plan with this name already exists")


@router.get("", response_model=WorkoutPlanList)
async def list_plans(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """List the user's plans, newest first (without exercises)."""
    total = (
        await db.execute(select(func.count(WorkoutPlan.id)).where(WorkoutPlan.user_id == user_id))
    ).scalar_one()
    result = await db.execute(
        select(WorkoutPlan)
        .where(WorkoutPlan.user_id == user_id)
        .order_by(WorkoutPlan.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    return WorkoutPlanList(
        items=[WorkoutPlanListItem.model_validate(p) for p in result.scalars().all()],
        total=total,
    )


@router.post("", response_model=WorkoutPlanRead, status_code=201)
async def create_plan(
    payload: WorkoutPlanCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Create a plan with its exercises. Every exercise_id must exist."""
    await _ensure_unique_name(db, user_id, payload.plan_name)

    exercise_ids = {e.exercise_id for e in payload.exercises}
    if exercise_ids:
        found = await db.execute(select(Exercise.id).where(Exercise.id.in_(exercise_ids)))
        missing = exercise_ids - set(found.scalars().all())
        if missing:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown exercise ids: {', '.join(sorted(str(m) for m in missing))}",
            )

    plan = WorkoutPlan(
        user_id=user_id,
        plan_name=payload.plan_name,
        exercises=[PlanExercise(**e.model_dump()) for e in payload.exercises],
    )
    db.add(plan)
    await db.flush()
    return WorkoutPlanRead.model_validate(await _get_plan_or_404(db, user_id, plan.id))


@router.get("/{plan_id}", response_model=WorkoutPlanRead)
async def get_plan(
    plan_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Get a plan with its exercises in display order."""
    return await _get_plan_or_404(db, user_id, plan_id)


@router.patch("/{plan_id}", response_model=WorkoutPlanRead)
async def update_plan(
    plan_id: uuid.UUID,
    payload: WorkoutPlanUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Rename a plan."""
    plan = await _get_plan_or_404(db, user_id, plan_id)
    await _ensure_unique_name(db, user_id, payload.plan_name, exclude_plan_id=plan_id)
    plan.plan_name = payload.plan_name
    plan.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return WorkoutPlanRead.model_validate(plan)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(
    plan_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete a plan and its exercises. Sessions started from it keep their data."""
    plan = await _get_plan_or_404(db, user_id, plan_id)
    await db.delete(plan)
    return None


@router.patch("/{plan_id}/exercises/{plan_exercise_id}", response_model=PlanExerciseRead)
async def update_plan_exercise(
    plan_id: uuid.UUID,
    plan_exercise_id: uuid.UUID,
    payload: PlanExerciseUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Partially update one exercise prescription of a plan (e.g. warmup_sets)."""
    plan = await _get_plan_or_404(db, user_id, plan_id)
    plan_exercise = next((pe for pe in plan.exercises if pe.id == plan_exercise_id), None)
    if plan_exercise is None:
        raise HTTPException(status_code=404, detail="Plan exercise not found")
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(plan_exercise, k, v)
    plan.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return plan_exercise
