from gym_tracker.models.exercise import Exercise
from gym_tracker.models.user import User
from gym_tracker.models.workout import ExerciseLog, GymSession, SetEntry

__all__ = ["User", "GymSession", "ExerciseLog", "SetEntry", "Exercise"]
