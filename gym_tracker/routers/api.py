"""API routes: JSON for users, workout sessions, last sets and the exercise catalog.

Every route here sits behind the session guard; an absent or stale session
is answered with 401 before the handler runs.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.config import get_settings
from gym_tracker.db.session import get_db
from gym_tracker.routers.deps import get_session_manager, require_identity
from gym_tracker.schemas.user import IdentitySchema, UserOutSchema
from gym_tracker.schemas.workout import ExerciseSchema, GymSessionSchema, SetProjectionSchema
from gym_tracker.services.sessions import Identity, SessionManager
from gym_tracker.services.users import authenticate, change_password, list_users
from gym_tracker.services.workouts import (
    LAST_SETS_DEFAULT,
    add_exercise,
    add_session,
    catalog_to_schema,
    get_sessions,
    last_n_sets,
    list_exercises,
    session_to_schema,
)

router = APIRouter(prefix="/api", tags=["api"], dependencies=[Depends(require_identity)])
settings = get_settings()


@router.get("/me", response_model=IdentitySchema)
async def whoami(identity: Annotated[Identity, Depends(require_identity)]):
    return IdentitySchema(id=identity.id, name=identity.name)


@router.get("/users", response_model=list[UserOutSchema])
async def get_users(db: Annotated[AsyncSession, Depends(get_db)]):
    """List all users (id and name only)."""
    users = await list_users(db)
    return [UserOutSchema.model_validate(u) for u in users]


@router.get("/users/{name}/sessions", response_model=list[GymSessionSchema])
async def get_user_sessions(name: str, db: Annotated[AsyncSession, Depends(get_db)]):
    """Workout sessions of one user in the order they were added."""
    sessions = await get_sessions(db, name)
    return [session_to_schema(s) for s in sessions]


@router.post("/users/{name}/sessions")
async def add_user_session(
    name: str,
    body: GymSessionSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Append one workout session to a user's history."""
    await add_session(db, name, body)
    return {"status": "ok"}


@router.get("/last3/{name}/{exercise}", response_model=list[SetProjectionSchema])
async def get_last_3_for_user(
    name: str,
    exercise: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Three most recent sets of `exercise` for `name`, newest workout first."""
    return await last_n_sets(db, name, exercise, LAST_SETS_DEFAULT)


@router.post("/exercise", status_code=201, response_model=ExerciseSchema)
async def post_exercise(body: ExerciseSchema, db: Annotated[AsyncSession, Depends(get_db)]):
    exercise = await add_exercise(db, body)
    return catalog_to_schema(exercise)


@router.get("/exercise", response_model=list[ExerciseSchema])
async def get_exercises(db: Annotated[AsyncSession, Depends(get_db)]):
    return [catalog_to_schema(e) for e in await list_exercises(db)]


@router.post("/password")
async def post_password(
    identity: Annotated[Identity, Depends(require_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    current_password: Annotated[str, Form()],
    new_password: Annotated[str, Form()],
):
    """Change own password. Every open session of this user stops working."""
    user = await authenticate(db, identity.name, current_password)
    if user is None or user.id != identity.id:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not new_password:
        raise HTTPException(status_code=422, detail="Password must not be empty")

    await change_password(db, user, new_password)
    sessions.invalidate_user(identity.id)

    response = JSONResponse({"status": "password_changed"})
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return response
