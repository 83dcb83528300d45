"""Server-side session registry.

A session binds an opaque token to a user id and to a snapshot of that
user's password hash. Validation re-reads the user and compares the
snapshot, so changing the password logs out every session of that user.
State lives in process memory; a restart forces everyone to log in again.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.security import fingerprints_match, new_session_token
from gym_tracker.models.user import User
from gym_tracker.services.users import get_user_by_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated user, without any secret material."""

    id: str
    name: str


@dataclass(frozen=True)
class SessionRecord:
    user_id: str
    user_name: str
    fingerprint: str
    expires_at: float


class SessionManager:
    def __init__(self, max_age_seconds: int, clock=time.monotonic):
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._records: dict[str, SessionRecord] = {}
        # Guards writes only; lookups read the dict without taking it
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def login(self, user: User) -> str:
        token = new_session_token()
        record = SessionRecord(
            user_id=user.id,
            user_name=user.name,
            fingerprint=user.pw_hash,
            expires_at=self._clock() + self.max_age_seconds,
        )
        with self._write_lock:
            self._purge_expired_locked()
            self._records[token] = record
        logger.info("Session opened name=%s", user.name)
        return token

    def lookup(self, token: str | None) -> SessionRecord | None:
        """Return the live record for `token` without consulting the store."""
        if not token:
            return None
        record = self._records.get(token)
        if record is None:
            return None
        if record.expires_at <= self._clock():
            self._discard(token)
            return None
        return record

    async def validate(self, db: AsyncSession, token: str | None) -> Identity | None:
        record = self.lookup(token)
        if record is None:
            return None

        user = await get_user_by_id(db, record.user_id)
        if user is None or not fingerprints_match(record.fingerprint, user.pw_hash):
            logger.info("Session invalidated name=%s", record.user_name)
            self._discard(token)
            return None
        return Identity(id=user.id, name=user.name)

    def logout(self, token: str | None) -> None:
        if token:
            self._discard(token)

    def invalidate_user(self, user_id: str) -> int:
        """Drop every session bound to `user_id`; returns how many were dropped."""
        with self._write_lock:
            stale = [t for t, r in self._records.items() if r.user_id == user_id]
            for t in stale:
                del self._records[t]
        return len(stale)

    def _discard(self, token: str) -> None:
        with self._write_lock:
            self._records.pop(token, None)

    def _purge_expired_locked(self) -> None:
        now = self._clock()
        expired = [t for t, r in self._records.items() if r.expires_at <= now]
        for t in expired:
            del self._records[t]
