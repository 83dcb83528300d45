"""Tests for the credential store and authenticator."""
import threading
from unittest import mock
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from gym_tracker.core import security
from gym_tracker.core.errors import InvalidInput, StoreError, UserAlreadyExists
from gym_tracker.core.security import SALT_SIZE
from gym_tracker.models.user import User
from gym_tracker.services.users import (
    authenticate,
    change_password,
    create_user,
    get_user_by_name,
    list_users,
)


def _broken_db() -> AsyncMock:
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("database is down"))
    return db


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_stores_salt_and_hash_not_plaintext(self, db):
        user = await create_user(db, "alice", "secret-pw")
        assert user.id
        assert len(user.salt) == SALT_SIZE
        assert user.pw_hash and "secret-pw" not in user.pw_hash

    @pytest.mark.asyncio
    async def test_name_is_stripped(self, db):
        user = await create_user(db, "  bob  ", "pw")
        assert user.name == "bob"

    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected(self, db, session_factory):
        await create_user(db, "alice", "pw1")
        async with session_factory() as other:
            with pytest.raises(UserAlreadyExists):
                await create_user(other, "alice", "pw2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,password", [("", "pw"), ("   ", "pw"), ("alice", "")])
    async def test_empty_name_or_password(self, db, name, password):
        with pytest.raises(InvalidInput):
            await create_user(db, name, password)

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, db):
        a = await create_user(db, "a", "pw")
        b = await create_user(db, "b", "pw")
        assert a.id != b.id
        assert [u.name for u in await list_users(db)] == ["a", "b"]


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_right_password_returns_user(self, db):
        created = await create_user(db, "alice", "secret-pw")
        user = await authenticate(db, "alice", "secret-pw")
        assert user is not None and user.id == created.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("wrong", ["secret-pW", "secret-pw ", "x", ""])
    async def test_wrong_password_is_rejected(self, db, wrong):
        await create_user(db, "alice", "secret-pw")
        assert await authenticate(db, "alice", wrong) is None

    @pytest.mark.asyncio
    async def test_unknown_user_looks_like_wrong_password(self, db):
        await create_user(db, "alice", "secret-pw")
        assert await authenticate(db, "mallory", "secret-pw") is None

    @pytest.mark.asyncio
    async def test_malformed_stored_salt_rejects_instead_of_crashing(self, db):
        await create_user(db, "alice", "secret-pw")
        await db.execute(update(User).where(User.name == "alice").values(salt=b"short"))
        await db.commit()
        db.expire_all()
        assert await authenticate(db, "alice", "secret-pw") is None

    @pytest.mark.asyncio
    async def test_store_failure_is_not_a_rejection(self):
        with pytest.raises(StoreError):
            await authenticate(_broken_db(), "alice", "secret-pw")


class TestRejectionCost:
    """Every rejection path pays for one full hash."""

    @staticmethod
    def _dummy_hashes(spy) -> int:
        return sum(1 for c in spy.call_args_list if c.args[1] == security._DUMMY_SALT)

    @pytest.mark.asyncio
    async def test_unknown_user_hashes_against_dummy_salt(self, db):
        await create_user(db, "alice", "secret-pw")
        with mock.patch.object(security, "hash_password", wraps=security.hash_password) as spy:
            assert await authenticate(db, "mallory", "secret-pw") is None
        assert self._dummy_hashes(spy) == 1

    @pytest.mark.asyncio
    async def test_malformed_salt_hashes_against_dummy_salt(self, db):
        await create_user(db, "alice", "secret-pw")
        await db.execute(update(User).where(User.name == "alice").values(salt=b"short"))
        await db.commit()
        db.expire_all()
        with mock.patch.object(security, "hash_password", wraps=security.hash_password) as spy:
            assert await authenticate(db, "alice", "secret-pw") is None
        assert self._dummy_hashes(spy) == 1

    @pytest.mark.asyncio
    async def test_empty_password_still_hashes(self, db):
        await create_user(db, "alice", "secret-pw")
        with mock.patch.object(security, "hash_password", wraps=security.hash_password) as spy:
            assert await authenticate(db, "alice", "") is None
        assert self._dummy_hashes(spy) == 1

    @pytest.mark.asyncio
    async def test_wrong_password_hashes_with_user_salt(self, db):
        user = await create_user(db, "alice", "secret-pw")
        with mock.patch.object(security, "hash_password", wraps=security.hash_password) as spy:
            assert await authenticate(db, "alice", "nope") is None
        assert spy.call_count == 1
        assert spy.call_args.args[1] == user.salt


class TestHashingOffLoop:
    @pytest.mark.asyncio
    async def test_hashing_runs_in_worker_thread(self, db):
        loop_thread = threading.get_ident()
        seen = []

        def record(fn):
            def wrapper(*args, **kwargs):
                seen.append((fn.__name__, threading.get_ident()))
                return fn(*args, **kwargs)
            return wrapper

        with mock.patch("gym_tracker.services.users.hash_password", record(security.hash_password)), \
                mock.patch("gym_tracker.services.users.verify_password", record(security.verify_password)), \
                mock.patch("gym_tracker.services.users.burn_password_check", record(security.burn_password_check)):
            user = await create_user(db, "alice", "secret-pw")
            await authenticate(db, "alice", "secret-pw")
            await authenticate(db, "mallory", "secret-pw")
            await change_password(db, user, "new-pw")

        assert [name for name, _ in seen] == [
            "hash_password",
            "verify_password",
            "burn_password_check",
            "hash_password",
        ]
        assert all(ident != loop_thread for _, ident in seen)


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_old_password_stops_working_and_salt_is_kept(self, db):
        user = await create_user(db, "alice", "old-pw")
        salt, old_hash = user.salt, user.pw_hash

        await change_password(db, user, "new-pw")

        reloaded = await get_user_by_name(db, "alice")
        assert reloaded.salt == salt
        assert reloaded.pw_hash != old_hash
        assert await authenticate(db, "alice", "old-pw") is None
        assert await authenticate(db, "alice", "new-pw") is not None

    @pytest.mark.asyncio
    async def test_empty_new_password(self, db):
        user = await create_user(db, "alice", "old-pw")
        with pytest.raises(InvalidInput):
            await change_password(db, user, "")


@pytest.mark.asyncio
async def test_lookup_failure_raises_store_error():
    with pytest.raises(StoreError):
        await get_user_by_name(_broken_db(), "alice")
