"""Pydantic schemas for the nested workout document and its projections."""
import datetime as dt

from pydantic import BaseModel, Field, field_validator

from gym_tracker.core.enums import ExerciseCategory, MuscleGroup, StruggleScore


class SetSchema(BaseModel):
    weight: float
    reps: int = Field(ge=0)
    struggle_score: StruggleScore | None = None

    class Config:
        from_attributes = True


class ExerciseSchema(BaseModel):
    name: str = Field(min_length=1)
    # One or more groups; a bare value is accepted and wrapped in a list
    muscle_group: list[MuscleGroup] = Field(min_length=1)
    category: ExerciseCategory

    @field_validator("muscle_group", mode="before")
    @classmethod
    def _wrap_single_group(cls, value):
        if isinstance(value, str):
            return [value]
        return value


class ExerciseLogSchema(BaseModel):
    exercise: ExerciseSchema
    sets: list[SetSchema] = []


class GymSessionSchema(BaseModel):
    date: dt.date
    exercises: list[ExerciseLogSchema] = []
    notes: str | None = None


class SetProjectionSchema(BaseModel):
    """One set as returned by the last-N query; no ids, no exercise metadata."""

    weight: float
    reps: int
    struggle_score: StruggleScore | None = None
