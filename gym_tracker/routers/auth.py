"""Auth routes: login, register, logout. Server-side sessions referenced by a cookie."""
from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.config import get_settings
from gym_tracker.db.session import get_db
from gym_tracker.routers.deps import (
    cookie_settings,
    get_current_identity_optional,
    get_session_manager,
    get_session_token,
)
from gym_tracker.services.sessions import Identity, SessionManager
from gym_tracker.services.users import authenticate, create_user

router = APIRouter(tags=["auth"])
settings = get_settings()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _session_response(sessions: SessionManager, user, status_code: int = 200) -> JSONResponse:
    """JSON body with the identity, plus the session cookie."""
    token = sessions.login(user)
    response = JSONResponse({"id": user.id, "name": user.name}, status_code=status_code)
    response.set_cookie(key=settings.auth_cookie_name, value=token, **cookie_settings())
    return response


@router.get("/login", response_class=HTMLResponse)
async def login_get(
    request: Request,
    current: Annotated[Identity | None, Depends(get_current_identity_optional)],
):
    """Show login form."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {"app_name": settings.app_name, "current": current},
    )


@router.post("/login")
async def login_post(
    db: Annotated[AsyncSession, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    user_name: Annotated[str, Form()],
    password: Annotated[str, Form()],
):
    """Authenticate and open a session; 401 says nothing about why."""
    user = await authenticate(db, user_name, password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _session_response(sessions, user)


@router.post("/register", status_code=201)
async def register_post(
    db: Annotated[AsyncSession, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    user_name: Annotated[str, Form()],
    password: Annotated[str, Form()],
):
    """Create user and log them in."""
    user = await create_user(db, user_name, password)
    return _session_response(sessions, user, status_code=201)


@router.post("/logout")
async def logout_post(
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    token: Annotated[str | None, Depends(get_session_token)],
):
    """Drop the session (if any) and clear the cookie."""
    sessions.logout(token)
    response = JSONResponse({"status": "logged_out"})
    # path must match the one used in set_cookie()
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return response
