"""Shared router dependencies: session registry access and the auth guard."""
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.config import get_settings
from gym_tracker.db.session import get_db
from gym_tracker.services.sessions import Identity, SessionManager

settings = get_settings()


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(settings.auth_cookie_name)


async def get_current_identity_optional(
    db: Annotated[AsyncSession, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    token: Annotated[str | None, Depends(get_session_token)],
) -> Identity | None:
    """Return the identity behind the session cookie; else None."""
    return await sessions.validate(db, token)


async def require_identity(
    identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
) -> Identity:
    if identity is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return identity


def cookie_settings() -> dict:
    return {
        "max_age": settings.auth_cookie_max_age,
        "httponly": True,
        "samesite": "lax",
        "secure": settings.auth_cookie_secure,
        "path": "/",
    }
