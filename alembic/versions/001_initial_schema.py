"""Initial schema: exercises, workout plans, sessions and logged sets.

Revision ID: 001
Revises:
Create Date: 2025-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

intensity_technique = sa.Enum(
    "drop_set", "pause", "partial_length", "fail", "superset", "N/A", name="intensity_technique"
)
session_status = sa.Enum("in_progress", "completed", "cancelled", name="session_status")
set_type = sa.Enum("warmup", "working", name="set_type")


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=True)

    op.create_table(
        "workout_plans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("plan_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "plan_name", name="uq_workout_plans_user_plan_name"),
    )
    op.create_index("ix_workout_plans_user_created", "workout_plans", ["user_id", "created_at"])

    op.create_table(
        "plan_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("intensity_technique", intensity_technique, nullable=False),
        sa.Column("warmup_sets", sa.SmallInteger(), nullable=False),
        sa.Column("working_sets", sa.SmallInteger(), nullable=False),
        sa.Column("target_reps", sa.SmallInteger(), nullable=False),
        sa.Column("rpe_early", sa.SmallInteger(), nullable=False),
        sa.Column("rpe_last", sa.SmallInteger(), nullable=False),
        sa.Column("rest_time", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=False, server_default=""),
        sa.CheckConstraint("warmup_sets >= 0", name="ck_plan_exercises_warmup_sets"),
        sa.CheckConstraint("working_sets BETWEEN 0 AND 4", name="ck_plan_exercises_working_sets"),
        sa.CheckConstraint("target_reps >= 1", name="ck_plan_exercises_target_reps"),
        sa.CheckConstraint("rpe_early BETWEEN 1 AND 10", name="ck_plan_exercises_rpe_early"),
        sa.CheckConstraint("rpe_last BETWEEN 1 AND 10", name="ck_plan_exercises_rpe_last"),
        sa.CheckConstraint("rest_time >= 0", name="ck_plan_exercises_rest_time"),
        sa.ForeignKeyConstraint(["plan_id"], ["workout_plans.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_plan_exercises_plan_id", "plan_exercises", ["plan_id"])

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=True),
        sa.Column("status", session_status, nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["plan_id"], ["workout_plans.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_sessions_user_completed", "workout_sessions", ["user_id", "completed_at"])
    op.create_index("ix_workout_sessions_plan_id", "workout_sessions", ["plan_id"])

    op.create_table(
        "session_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("plan_exercise_id", sa.Uuid(), nullable=True),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=False, server_default=""),
        sa.ForeignKeyConstraint(["session_id"], ["workout_sessions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["plan_exercise_id"], ["plan_exercises.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_session_exercises_session_id", "session_exercises", ["session_id"])
    op.create_index("ix_session_exercises_exercise_id", "session_exercises", ["exercise_id"])

    op.create_table(
        "exercise_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_exercise_id", sa.Uuid(), nullable=False),
        sa.Column("set_type", set_type, nullable=False),
        sa.Column("set_index", sa.SmallInteger(), nullable=False),
        sa.Column("reps", sa.SmallInteger(), nullable=False),
        sa.Column("load", sa.Numeric(precision=5, scale=1), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("set_index >= 1", name="ck_exercise_sets_set_index"),
        sa.CheckConstraint("reps >= 1", name="ck_exercise_sets_reps"),
        sa.CheckConstraint("load >= 0", name="ck_exercise_sets_load"),
        sa.ForeignKeyConstraint(["session_exercise_id"], ["session_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_exercise_sets_session_exercise_id", "exercise_sets", ["session_exercise_id"])


def downgrade() -> None:
    op.drop_table("exercise_sets")
    op.drop_table("session_exercises")
    op.drop_table("workout_sessions")
    op.drop_table("plan_exercises")
    op.drop_table("workout_plans")
    op.drop_table("exercises")
    set_type.drop(op.get_bind(), checkfirst=True)
    session_status.drop(op.get_bind(), checkfirst=True)
    intensity_technique.drop(op.get_bind(), checkfirst=True)
