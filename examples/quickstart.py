#!/usr/bin/env python3
"""Revokeable JWT quickstart.

Walks through the token lifecycle on an in-memory store:

1. Create a token manager.
2. Log a user in and validate the token.
3. Refresh the token; the old one stops validating.
4. Revoke every session of the user.
5. Log in again; the new session gets the next login ID.
6. Revoke every token of every user.

Run:
    python examples/quickstart.py

Pass a Redis URL to run against a real store instead:
    python examples/quickstart.py redis://localhost:6379/0
"""
from __future__ import annotations

import asyncio
import sys

from revokeable_jwt import InMemoryStore, RedisStore, TokenManager, TokenManagerConfig


def _status(payload: dict | None) -> str:
    return "valid" if payload is not None else "invalid"


async def main(redis_url: str | None = None) -> None:
    # -- Step 1: Create the manager -------------------------------------------
    store = RedisStore.from_url(redis_url) if redis_url else InMemoryStore()
    manager = TokenManager(store, store, TokenManagerConfig(secret="s"))
    print(f"[1] Token manager created over {type(store).__name__}")

    # -- Step 2: Log in -------------------------------------------------------
    t1 = await manager.login("u1", {"role": "reader"})
    p1 = await manager.is_valid(t1)
    print(f"[2] u1 logged in: loginID={p1['loginID'] if p1 else None}, T1 {_status(p1)}")

    # -- Step 3: Refresh ------------------------------------------------------
    t2 = await manager.refresh(t1)
    print(
        f"[3] Refreshed: T1 {_status(await manager.is_valid(t1))}, "
        f"T2 {_status(await manager.is_valid(t2))}"
    )

    # -- Step 4: Revoke all of u1's sessions ----------------------------------
    await manager.logout_every_login_from("u1")
    print(f"[4] Logged out every u1 session: T2 {_status(await manager.is_valid(t2))}")

    # -- Step 5: Log in again -------------------------------------------------
    t3 = await manager.login("u1", {})
    p3 = await manager.is_valid(t3)
    print(f"[5] u1 logged in again: loginID={p3['loginID'] if p3 else None}, T3 {_status(p3)}")

    # -- Step 6: Revoke everything -------------------------------------------
    await manager.logout_all_users()
    print(f"[6] Logged out all users: T3 {_status(await manager.is_valid(t3))}")

    if isinstance(store, RedisStore):
        await store.close()

    print("\nDone. No token was ever stored.")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
