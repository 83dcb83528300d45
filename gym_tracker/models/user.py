"""User model: identity, password material and the owned workout history."""
import uuid

from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gym_tracker.db.session import Base


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_user_id)
    # Unique index is what enforces one account per name, not a lookup before insert
    name = Column(String(255), unique=True, nullable=False, index=True)
    pw_hash = Column(String(255), nullable=False)
    salt = Column(LargeBinary(16), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    gym_sessions = relationship(
        "GymSession",
        back_populates="user",
        order_by="GymSession.id",
        cascade="all, delete-orphan",
    )
