"""Session detail view: exercises with their sets, recent history and warmup suggestions."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.models.session import SessionExercise, WorkoutSession
from liftlog.schemas.session import ExerciseSetRead, SessionExerciseDetail, WorkoutSessionDetail
from liftlog.services.exercise_history import HistoricalResult, get_exercise_history
from liftlog.services.warmup import WarmupPlanner, WarmupSetSuggestion

logger = logging.getLogger(__name__)


def warmup_sets_configured(session_exercise: SessionExercise, fallback: int) -> int:
    """Plan prescription when the exercise came from a plan, otherwise the fallback."""
    if session_exercise.plan_exercise is not None:
        return session_exercise.plan_exercise.warmup_sets
    return fallback


def suggest_warmups(
    planner: WarmupPlanner,
    history: list[HistoricalResult],
    number_of_warmup_sets: int,
) -> list[WarmupSetSuggestion]:
    """Warmup suggestions seeded by history; a planner fault yields no suggestions."""
    try:
        return planner.calculate_from_history([result.load for result in history], number_of_warmup_sets)
    except Exception:
        logger.exception("Warmup calculation failed for %d requested sets", number_of_warmup_sets)
        return []


async def assemble_session_exercise(
    db: AsyncSession,
    user_id: uuid.UUID,
    session_exercise: SessionExercise,
    planner: WarmupPlanner,
    history_limit: int,
    default_warmup_sets: int,
) -> SessionExerciseDetail:
    warmup_count = warmup_sets_configured(session_exercise, default_warmup_sets)
    history = await get_exercise_history(db, user_id, session_exercise.exercise_id, history_limit)
    return SessionExerciseDetail(
        id=session_exercise.id,
        exercise_id=session_exercise.exercise_id,
        exercise_name=session_exercise.exercise.name if session_exercise.exercise else None,
        plan_exercise_id=session_exercise.plan_exercise_id,
        display_order=session_exercise.display_order,
        notes=session_exercise.notes,
        warmup_sets_configured=warmup_count,
        sets=[ExerciseSetRead.model_validate(s) for s in session_exercise.sets],
        history=history,
        warmup_suggestions=suggest_warmups(planner, history, warmup_count),
    )


async def build_session_detail(
    db: AsyncSession,
    user_id: uuid.UUID,
    session: WorkoutSession,
    planner: WarmupPlanner,
    history_limit: int,
    default_warmup_sets: int,
) -> WorkoutSessionDetail:
    """
    Read-only assembly of the detail view. Expects session.exercises with their
    exercise, plan_exercise and sets already loaded.
    """
    exercises = [
        await assemble_session_exercise(db, user_id, se, planner, history_limit, default_warmup_sets)
        for se in sorted(session.exercises, key=lambda se: (se.display_order, str(se.id)))
    ]
    return WorkoutSessionDetail(
        id=session.id,
        plan_id=session.plan_id,
        status=session.status,
        started_at=session.started_at,
        completed_at=session.completed_at,
        exercises=exercises,
    )
