"""Exercise history: one representative working set per completed session.

History is advisory. Any failure while fetching or reducing it is logged and
turned into an empty list so the request that asked for it still succeeds.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.constants import DEFAULT_HISTORY_LOOKBACK
from liftlog.core.enums import SessionStatus, SetType
from liftlog.models.session import ExerciseSet, SessionExercise, WorkoutSession
from liftlog.services.load_math import best_set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryRow:
    """A logged set of the exercise in one completed session, as fetched from storage."""

    completion_date: datetime
    set_type: SetType | str | None
    reps: int | None
    load: float | None


class HistoricalResult(BaseModel):
    """Best working set of one completed session."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    load: float
    reps: int


HistoryFetcher = Callable[[AsyncSession, uuid.UUID, uuid.UUID, int], Awaitable[list[HistoryRow]]]


async def find_completed_sessions_with_exercise(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    limit: int,
) -> list[HistoryRow]:
    """
    Sets of the exercise from the user's `limit` most recent completed sessions
    that logged at least one working set of it. Rows of every set type are returned.
    """
    recent_sessions = (
        select(WorkoutSession.id)
        .join(SessionExercise, SessionExercise.session_id == WorkoutSession.id)
        .join(ExerciseSet, ExerciseSet.session_exercise_id == SessionExercise.id)
        .where(
            WorkoutSession.user_id == user_id,
            WorkoutSession.status == SessionStatus.COMPLETED,
            WorkoutSession.completed_at.isnot(None),
            SessionExercise.exercise_id == exercise_id,
            ExerciseSet.set_type == SetType.WORKING,
        )
        .group_by(WorkoutSession.id, WorkoutSession.completed_at)
        .order_by(WorkoutSession.completed_at.desc())
        .limit(limit)
        .subquery()
    )
    # Savepoint: a failed lookup must not abort the request transaction for later lookups.
    async with db.begin_nested():
        result = await db.execute(
            select(WorkoutSession.completed_at, ExerciseSet.set_type, ExerciseSet.reps, ExerciseSet.load)
            .join(SessionExercise, SessionExercise.session_id == WorkoutSession.id)
            .join(ExerciseSet, ExerciseSet.session_exercise_id == SessionExercise.id)
            .where(
                WorkoutSession.id.in_(select(recent_sessions.c.id)),
                SessionExercise.exercise_id == exercise_id,
            )
            .order_by(WorkoutSession.completed_at.desc(), ExerciseSet.set_index)
        )
        rows = result.all()
    return [
        HistoryRow(completion_date=completed_at, set_type=set_type, reps=reps, load=load)
        for completed_at, set_type, reps, load in rows
    ]


def _is_working(row: HistoryRow) -> bool:
    set_type = row.set_type.value if isinstance(row.set_type, SetType) else row.set_type
    return set_type == SetType.WORKING.value


def _usable(row: HistoryRow) -> bool:
    """Skip malformed rows rather than failing the whole history."""
    if row.completion_date is None or row.reps is None or row.load is None:
        return False
    try:
        return int(row.reps) >= 1 and float(row.load) >= 0
    except (TypeError, ValueError):
        return False


def reduce_history(rows: Iterable[HistoryRow], limit: int) -> list[HistoricalResult]:
    """Group working sets by completion date, keep the best set of each, most recent first."""
    by_date: dict[datetime, list[HistoricalResult]] = {}
    for row in rows:
        if not _is_working(row) or not _usable(row):
            continue
        by_date.setdefault(row.completion_date, []).append(
            HistoricalResult(date=row.completion_date, load=float(row.load), reps=int(row.reps))
        )

    results = [best_set(candidates) for candidates in by_date.values()]
    results.sort(key=lambda r: r.date, reverse=True)
    return results[:limit]


async def get_exercise_history(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    limit: int = DEFAULT_HISTORY_LOOKBACK,
    fetch: HistoryFetcher | None = None,
) -> list[HistoricalResult]:
    """Recent best working sets for the exercise, most recent first. Never raises."""
    if limit <= 0:
        return []
    try:
        rows = await (fetch or find_completed_sessions_with_exercise)(db, user_id, exercise_id, limit)
        return reduce_history(rows, limit)
    except Exception:
        logger.exception("Failed to load history for user %s exercise %s", user_id, exercise_id)
        return []
