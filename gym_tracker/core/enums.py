"""Shared enums for models and API."""
from enum import Enum


class MuscleGroup(str, Enum):
    CHEST = "Chest"
    BACK = "Back"
    LEGS = "Legs"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core"
    FULL_BODY = "FullBody"
    CARDIO = "Cardio"


class ExerciseCategory(str, Enum):
    UPPER = "Upper"
    LOWER = "Lower"
    PUSH = "Push"
    PULL = "Pull"
    CARDIO = "Cardio"
    OTHER = "Other"


class StruggleScore(str, Enum):
    """Subjective effort of a set, ordered from easiest to hardest."""

    EASY = "Easy"
    MODERATE = "Moderate"
    HARD = "Hard"
    VERY_HARD = "VeryHard"
