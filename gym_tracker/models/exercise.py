"""Exercise catalog: flat collection, independent of any user's history."""
from sqlalchemy import JSON, Column, Enum, Integer, String

from gym_tracker.core.enums import ExerciseCategory
from gym_tracker.db.session import Base


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    muscle_groups = Column(JSON, nullable=False)
    category = Column(
        Enum(
            ExerciseCategory,
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
            length=16,
        ),
        nullable=False,
    )
