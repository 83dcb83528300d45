"""Initial tables: users, gym_sessions, exercise_logs, sets, exercises.

Revision ID: 001
Revises:
Create Date: 2025-01-30

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("pw_hash", sa.String(255), nullable=False),
        sa.Column("salt", sa.LargeBinary(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_name"), "users", ["name"], unique=True)

    op.create_table(
        "gym_sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(32), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_gym_sessions_user_id"), "gym_sessions", ["user_id"], unique=False)
    op.create_index(op.f("ix_gym_sessions_date"), "gym_sessions", ["date"], unique=False)

    op.create_table(
        "exercise_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("gym_session_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("exercise_name", sa.String(255), nullable=False),
        sa.Column("muscle_groups", sa.JSON(), nullable=False),
        sa.Column("category", sa.String(16), nullable=False),
        sa.ForeignKeyConstraint(["gym_session_id"], ["gym_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercise_logs_gym_session_id"), "exercise_logs", ["gym_session_id"], unique=False)
    op.create_index(op.f("ix_exercise_logs_exercise_name"), "exercise_logs", ["exercise_name"], unique=False)

    op.create_table(
        "sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("exercise_log_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("struggle_score", sa.String(16), nullable=True),
        sa.ForeignKeyConstraint(["exercise_log_id"], ["exercise_logs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sets_exercise_log_id"), "sets", ["exercise_log_id"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("muscle_groups", sa.JSON(), nullable=False),
        sa.Column("category", sa.String(16), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_exercises_name"), table_name="exercises")
    op.drop_table("exercises")
    op.drop_index(op.f("ix_sets_exercise_log_id"), table_name="sets")
    op.drop_table("sets")
    op.drop_index(op.f("ix_exercise_logs_exercise_name"), table_name="exercise_logs")
    op.drop_index(op.f("ix_exercise_logs_gym_session_id"), table_name="exercise_logs")
    op.drop_table("exercise_logs")
    op.drop_index(op.f("ix_gym_sessions_date"), table_name="gym_sessions")
    op.drop_index(op.f("ix_gym_sessions_user_id"), table_name="gym_sessions")
    op.drop_table("gym_sessions")
    op.drop_index(op.f("ix_users_name"), table_name="users")
    op.drop_table("users")
