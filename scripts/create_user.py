#!/usr/bin/env python3
"""Create a user from the console (same hashing as /register)."""
from __future__ import annotations

import argparse
import asyncio
from getpass import getpass

from gym_tracker.core.errors import UserAlreadyExists
from gym_tracker.db.base import Base
from gym_tracker.db.session import AsyncSessionLocal, engine
from gym_tracker.services.users import create_user


async def _create(username: str, password: str) -> str:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        async with AsyncSessionLocal() as db:
            user = await create_user(db, username, password)
            return user.id
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a Gym Tracker user")
    parser.add_argument("-u", "--username", help="user name (prompted when omitted)")
    args = parser.parse_args()

    username = (args.username or input("Username: ")).strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        user_id = asyncio.run(_create(username, pw1))
    except UserAlreadyExists as exc:
        raise SystemExit(str(exc))
    except ValueError as exc:
        raise SystemExit(str(exc))
    print(f"OK -> {username} ({user_id})")


if __name__ == "__main__":
    main()
