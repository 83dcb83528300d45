"""Gym Tracker - FastAPI app entry point."""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gym_tracker.core.config import get_settings
from gym_tracker.core.errors import GymTrackerError, StoreError
from gym_tracker.db.base import Base
from gym_tracker.db.session import engine
from gym_tracker.routers import api, auth
from gym_tracker.services.sessions import SessionManager

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables (async); Alembic owns migrations for existing databases
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # sessions live exactly as long as the process
    app.state.session_manager = SessionManager(max_age_seconds=settings.auth_cookie_max_age)

    yield

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Workout history behind session authentication",
    lifespan=lifespan,
)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def _request_timeout(request: Request, call_next):
    try:
        return await asyncio.wait_for(call_next(request), timeout=settings.request_timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning("Request timed out: %s %s", request.method, request.url.path)
        return JSONResponse({"detail": "Request timed out"}, status_code=504)


@app.exception_handler(GymTrackerError)
async def _domain_error(request: Request, exc: GymTrackerError):
    if isinstance(exc, StoreError):
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


app.include_router(auth.router)
app.include_router(api.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
