"""Credential store and authenticator.

Users are looked up by their unique name. Authentication never tells an
unknown name apart from a wrong password: both return None after the same
amount of hashing work.
"""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.errors import InvalidInput, StoreError, UserAlreadyExists
from gym_tracker.core.security import (
    burn_password_check,
    generate_salt,
    hash_password,
    verify_password,
)
from gym_tracker.models.user import User

logger = logging.getLogger(__name__)


def _normalize_name(name: str | None) -> str:
    return (name or "").strip()


async def get_user_by_name(db: AsyncSession, name: str) -> User | None:
    try:
        result = await db.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("User lookup by name failed")
        raise StoreError() from exc


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    try:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("User lookup by id failed")
        raise StoreError() from exc


async def list_users(db: AsyncSession) -> list[User]:
    try:
        result = await db.execute(select(User).order_by(User.created_at, User.name))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Listing users failed")
        raise StoreError() from exc


async def create_user(db: AsyncSession, name: str, password: str) -> User:
    """Insert a new user with a fresh salt; the unique index rejects duplicates."""
    name = _normalize_name(name)
    if not name:
        raise InvalidInput("User name must not be empty")
    if not password:
        raise InvalidInput("Password must not be empty")

    salt = generate_salt()
    # PBKDF2 is CPU-bound; keep it off the event loop
    pw_hash = await asyncio.to_thread(hash_password, password, salt)
    user = User(name=name, pw_hash=pw_hash, salt=salt)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise UserAlreadyExists(f"User '{name}' already exists") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Creating user failed")
        raise StoreError() from exc

    await db.refresh(user)
    logger.info("Created user name=%s id=%s", user.name, user.id)
    return user


async def authenticate(db: AsyncSession, name: str, password: str) -> User | None:
    """Return the user when `password` matches, None otherwise.

    Raises StoreError when the store cannot answer; that is not an auth decision.
    """
    user = await get_user_by_name(db, _normalize_name(name))
    if user is None:
        await asyncio.to_thread(burn_password_check, password)
        logger.info("Login rejected name=%s", name)
        return None

    if not await asyncio.to_thread(verify_password, password, user.salt, user.pw_hash):
        logger.info("Login rejected name=%s", name)
        return None

    logger.info("Login accepted name=%s", user.name)
    return user


async def change_password(db: AsyncSession, user: User, new_password: str) -> User:
    """Replace the password hash; the salt stays as generated at creation.

    Sessions bound to the old hash stop validating from here on.
    """
    if not new_password:
        raise InvalidInput("Password must not be empty")

    user.pw_hash = await asyncio.to_thread(hash_password, new_password, user.salt)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Changing password failed")
        raise StoreError() from exc

    logger.info("Password changed name=%s", user.name)
    return user
