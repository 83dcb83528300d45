"""Workout history embedded under a user: sessions -> exercise logs -> sets.

Sessions are ordered by insertion (autoincrement id); logs and sets keep an
explicit position so the stored order is the order they were submitted in.
"""
from sqlalchemy import JSON, Column, Date, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from gym_tracker.core.enums import ExerciseCategory, StruggleScore
from gym_tracker.db.session import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class GymSession(Base):
    __tablename__ = "gym_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="gym_sessions")
    exercises = relationship(
        "ExerciseLog",
        back_populates="gym_session",
        order_by="ExerciseLog.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class ExerciseLog(Base):
    __tablename__ = "exercise_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    gym_session_id = Column(Integer, ForeignKey("gym_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    exercise_name = Column(String(255), nullable=False, index=True)
    muscle_groups = Column(JSON, nullable=False)  # list of MuscleGroup values
    category = Column(
        Enum(ExerciseCategory, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
    )

    gym_session = relationship("GymSession", back_populates="exercises")
    sets = relationship(
        "SetEntry",
        back_populates="exercise_log",
        order_by="SetEntry.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class SetEntry(Base):
    __tablename__ = "sets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exercise_log_id = Column(Integer, ForeignKey("exercise_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False)
    reps = Column(Integer, nullable=False)
    struggle_score = Column(
        Enum(StruggleScore, native_enum=False, values_callable=_enum_values, length=16),
        nullable=True,
    )

    exercise_log = relationship("ExerciseLog", back_populates="sets")
