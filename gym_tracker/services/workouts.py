"""Workout history: append-only writes, reads and the last-N-sets aggregation."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gym_tracker.core.errors import ExerciseAlreadyExists, InvalidInput, StoreError, UserNotFound
from gym_tracker.models.exercise import Exercise
from gym_tracker.models.user import User
from gym_tracker.models.workout import ExerciseLog, GymSession, SetEntry
from gym_tracker.schemas.workout import (
    ExerciseLogSchema,
    ExerciseSchema,
    GymSessionSchema,
    SetProjectionSchema,
    SetSchema,
)

logger = logging.getLogger(__name__)

LAST_SETS_DEFAULT = 3


# ---------- conversions ----------

def _exercise_to_schema(name: str, muscle_groups: list[str], category) -> ExerciseSchema:
    return ExerciseSchema(name=name, muscle_group=muscle_groups, category=category)


def session_to_schema(session: GymSession) -> GymSessionSchema:
    return GymSessionSchema(
        date=session.date,
        notes=session.notes,
        exercises=[
            ExerciseLogSchema(
                exercise=_exercise_to_schema(log.exercise_name, log.muscle_groups, log.category),
                sets=[SetSchema.model_validate(s) for s in log.sets],
            )
            for log in session.exercises
        ],
    )


def catalog_to_schema(exercise: Exercise) -> ExerciseSchema:
    return _exercise_to_schema(exercise.name, exercise.muscle_groups, exercise.category)


def _session_from_schema(user_id: str, payload: GymSessionSchema) -> GymSession:
    return GymSession(
        user_id=user_id,
        date=payload.date,
        notes=payload.notes,
        exercises=[
            ExerciseLog(
                position=i,
                exercise_name=entry.exercise.name,
                muscle_groups=[g.value for g in entry.exercise.muscle_group],
                category=entry.exercise.category,
                sets=[
                    SetEntry(
                        position=j,
                        weight=s.weight,
                        reps=s.reps,
                        struggle_score=s.struggle_score,
                    )
                    for j, s in enumerate(entry.sets)
                ],
            )
            for i, entry in enumerate(payload.exercises)
        ],
    )


# ---------- queries ----------

async def _user_id_for(db: AsyncSession, user_name: str) -> str:
    try:
        result = await db.execute(select(User.id).where(User.name == user_name))
        user_id = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed")
        raise StoreError() from exc
    if user_id is None:
        raise UserNotFound(f"User '{user_name}' not found")
    return user_id


async def get_sessions(db: AsyncSession, user_name: str) -> list[GymSession]:
    """All sessions of a user in insertion order, with entries and sets loaded."""
    # AsyncSession can't lazy-load, so the whole tree is fetched up front
    stmt = (
        select(User)
        .where(User.name == user_name)
        .options(
            selectinload(User.gym_sessions)
            .selectinload(GymSession.exercises)
            .selectinload(ExerciseLog.sets)
        )
        .execution_options(populate_existing=True)
    )
    try:
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Loading sessions failed")
        raise StoreError() from exc
    if user is None:
        raise UserNotFound(f"User '{user_name}' not found")
    return list(user.gym_sessions)


async def add_session(db: AsyncSession, user_name: str, payload: GymSessionSchema) -> None:
    """Append one session to the user's history in a single transaction."""
    user_id = await _user_id_for(db, user_name)
    db.add(_session_from_schema(user_id, payload))
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Appending session failed")
        raise StoreError() from exc
    logger.info("Session appended name=%s date=%s", user_name, payload.date)


async def last_n_sets(
    db: AsyncSession,
    user_name: str,
    exercise_name: str,
    n: int = LAST_SETS_DEFAULT,
) -> list[SetProjectionSchema]:
    """Most recent `n` sets of one exercise, newest session date first.

    Sets sharing a date keep their stored order (session, entry, set).
    An exercise the user never did gives an empty list; an unknown user
    raises UserNotFound.
    """
    if n < 0:
        raise InvalidInput("n must be non-negative")
    user_id = await _user_id_for(db, user_name)

    stmt = (
        select(SetEntry.weight, SetEntry.reps, SetEntry.struggle_score)
        .select_from(SetEntry)
        .join(SetEntry.exercise_log)
        .join(ExerciseLog.gym_session)
        .where(
            GymSession.user_id == user_id,
            ExerciseLog.exercise_name == exercise_name,
        )
        .order_by(
            GymSession.date.desc(),
            GymSession.id,
            ExerciseLog.position,
            SetEntry.position,
        )
        .limit(n)
    )
    try:
        result = await db.execute(stmt)
        rows = result.all()
    except SQLAlchemyError as exc:
        logger.exception("Last sets query failed")
        raise StoreError() from exc

    return [
        SetProjectionSchema(weight=weight, reps=int(reps), struggle_score=score)
        for weight, reps, score in rows
    ]


# ---------- exercise catalog ----------

async def add_exercise(db: AsyncSession, payload: ExerciseSchema) -> Exercise:
    exercise = Exercise(
        name=payload.name,
        muscle_groups=[g.value for g in payload.muscle_group],
        category=payload.category,
    )
    db.add(exercise)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ExerciseAlreadyExists(f"Exercise '{payload.name}' already exists") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Adding exercise failed")
        raise StoreError() from exc
    return exercise


async def list_exercises(db: AsyncSession) -> list[Exercise]:
    try:
        result = await db.execute(select(Exercise).order_by(Exercise.id.asc()))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Listing exercises failed")
        raise StoreError() from exc
