"""SQLAlchemy declarative base and model imports for Alembic."""
from gym_tracker.db.session import Base

# Import all models so Alembic can see them
from gym_tracker.models.exercise import Exercise  # noqa: F401
from gym_tracker.models.user import User  # noqa: F401
from gym_tracker.models.workout import ExerciseLog, GymSession, SetEntry  # noqa: F401

__all__ = ["Base", "User", "GymSession", "ExerciseLog", "SetEntry", "Exercise"]
