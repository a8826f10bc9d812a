"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.exercise import Exercise
from liftlog.models.session import ExerciseSet, SessionExercise, WorkoutSession
from liftlog.models.workout_plan import PlanExercise, WorkoutPlan

__all__ = [
    "Exercise",
    "ExerciseSet",
    "PlanExercise",
    "SessionExercise",
    "WorkoutPlan",
    "WorkoutSession",
]
