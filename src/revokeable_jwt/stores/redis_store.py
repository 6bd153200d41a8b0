"""Redis-backed counter and data store.

One Redis database backs both capability interfaces: ``INCR`` provides
the atomic counters, ``GET``/``SET``/``DEL``/``FLUSHDB`` the data store.
``INCR`` is atomic on the server, so concurrent logins for the same user
always receive distinct login IDs.

Redis exceptions are translated into
:class:`~revokeable_jwt.core.errors.StorageError` subclasses so callers
handle one error family whatever the backend.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from revokeable_jwt.core.errors import StorageTimeout, StorageUnavailable

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class RedisStore:
    """Implements ``CounterStore`` and ``KeyValueStore`` over Redis.

    Parameters
    ----------
    client:
        A ``redis.asyncio.Redis`` client.  Use ``socket_timeout`` on the
        client to bound individual commands.
    """

    def __init__(self, client: Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> RedisStore:
        """Create a store from a ``redis://`` URL.

        Extra keyword arguments are passed to ``Redis.from_url``.
        """
        kwargs.setdefault("decode_responses", True)
        return cls(Redis.from_url(url, **kwargs))

    async def increment(self, key: str) -> int:
        value = await self._execute("INCR", self._redis.incr(key))
        return int(value)

    async def get(self, key: str) -> Any | None:
        return await self._execute("GET", self._redis.get(key))

    async def put(self, key: str, value: Any) -> bool:
        await self._execute("SET", self._redis.set(key, str(value)))
        return True

    async def remove(self, key: str) -> bool:
        await self._execute("DEL", self._redis.delete(key))
        return True

    async def clear(self) -> None:
        await self._execute("FLUSHDB", self._redis.flushdb())

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._redis.aclose()

    async def _execute(self, command: str, call: Awaitable[_T]) -> _T:
        try:
            return await call
        except redis_exceptions.TimeoutError as exc:
            logger.warning("Redis %s timed out", command)
            raise StorageTimeout(details={"command": command}) from exc
        except redis_exceptions.RedisError as exc:
            logger.warning("Redis %s failed: %s", command, exc)
            raise StorageUnavailable(
                f"Redis {command} failed: {exc}",
                details={"command": command},
            ) from exc
