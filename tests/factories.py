"""Test data builders that write straight to the database."""

from __future__ import annotations

import uuid
from datetime import datetime

from liftlog.core.enums import SessionStatus, SetType
from liftlog.models.exercise import Exercise
from liftlog.models.session import ExerciseSet, SessionExercise, WorkoutSession

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


async def create_exercise(session_maker, name: str = "Back Squat") -> uuid.UUID:
    async with session_maker() as db:
        exercise = Exercise(name=name)
        db.add(exercise)
        await db.commit()
        return exercise.id


async def create_logged_session(
    session_maker,
    exercise_id: uuid.UUID,
    sets: list[tuple[SetType, int, float]],
    *,
    user_id: uuid.UUID = USER_ID,
    status: SessionStatus = SessionStatus.COMPLETED,
    completed_at: datetime | None = None,
) -> uuid.UUID:
    """Insert a session with one exercise and the given (set_type, reps, load) sets."""
    async with session_maker() as db:
        session = WorkoutSession(
            user_id=user_id,
            status=status,
            started_at=completed_at or datetime(2025, 1, 1, 9, 0),
            completed_at=completed_at,
            exercises=[
                SessionExercise(
                    exercise_id=exercise_id,
                    display_order=0,
                    sets=[
                        ExerciseSet(set_type=set_type, set_index=i, reps=reps, load=load)
                        for i, (set_type, reps, load) in enumerate(sets, start=1)
                    ],
                )
            ],
        )
        db.add(session)
        await db.commit()
        return session.id
