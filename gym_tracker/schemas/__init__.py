from gym_tracker.schemas.user import IdentitySchema, UserOutSchema
from gym_tracker.schemas.workout import (
    ExerciseLogSchema,
    ExerciseSchema,
    GymSessionSchema,
    SetProjectionSchema,
    SetSchema,
)

__all__ = [
    "ExerciseLogSchema",
    "ExerciseSchema",
    "GymSessionSchema",
    "IdentitySchema",
    "SetProjectionSchema",
    "SetSchema",
    "UserOutSchema",
]
