"""Capability interfaces and the in-memory store.

This module defines the *structural* interfaces (``typing.Protocol``)
consumed by :class:`~revokeable_jwt.manager.TokenManager`, plus an
in-memory implementation suitable for testing and local development.

The counter store and the data store are deliberately separate
protocols even though one physical backend usually provides both: a
collaborator that only offers atomic counters can still be plugged in
for the counter role.

Every Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.

Store contracts
---------------
* ``increment`` MUST be atomic under concurrent callers.  A lost
  increment on a login nonce would leave two tokens valid under the same
  signing key.
* Plain reads are not required to be linearised with concurrent
  increments.  A verification racing a revocation may accept a token for
  a brief window; choose a store with that trade-off in mind.
* A missing key reads as absent (``None``), never as an error.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class CounterStore(Protocol):
    """Backend offering atomic named counters."""

    async def increment(self, key: str) -> int:
        """Atomically increment the counter at *key* and return the new value.

        A missing counter starts at ``0``, so the first call returns ``1``.
        """
        ...


@runtime_checkable
class KeyValueStore(Protocol):
    """General key-value backend used to read counters independently."""

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or ``None`` if *key* is absent."""
        ...

    async def put(self, key: str, value: Any) -> bool:
        """Store *value* under *key*; return ``True`` on success."""
        ...

    async def remove(self, key: str) -> bool:
        """Delete *key*; return ``True`` on success (also when absent)."""
        ...

    async def clear(self) -> None:
        """Remove every key.  Used for full resets only."""
        ...


@runtime_checkable
class TokenSigner(Protocol):
    """Signing primitive used as a black box by the token manager."""

    def sign(self, payload: dict[str, Any], key: str) -> str:
        """Return a token carrying *payload*, signed with *key*."""
        ...

    def verify(self, token: str, key: str) -> dict[str, Any]:
        """Return the payload of *token* if it verifies under *key*.

        Raises :class:`~revokeable_jwt.core.errors.InvalidToken` otherwise.
        """
        ...

    def decode_unverified(self, token: str) -> dict[str, Any]:
        """Return the payload of *token* WITHOUT checking its signature.

        Raises :class:`~revokeable_jwt.core.errors.TokenDecodeError` if the
        token cannot be parsed.
        """
        ...


# ===================================================================
# In-memory implementations (testing / development)
# ===================================================================

class InMemoryStore:
    """In-memory counter and data store.

    Implements both :class:`CounterStore` and :class:`KeyValueStore` over
    one dict, the way a single networked key-value service backs both
    roles in production.  Values are kept as strings, as such a service
    would return them.

    ``increment`` never awaits between its read and write, so it is
    atomic for every caller sharing one event loop.  Not thread-safe.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def increment(self, key: str) -> int:
        """Increment the counter at *key* and return the new value."""
        value = int(self._data.get(key, "0")) + 1
        self._data[key] = str(value)
        return value

    async def get(self, key: str) -> str | None:
        """Return the value at *key*, or ``None`` if absent."""
        return self._data.get(key)

    async def put(self, key: str, value: Any) -> bool:
        """Store ``str(value)`` under *key*."""
        self._data[key] = str(value)
        return True

    async def remove(self, key: str) -> bool:
        """Delete *key* if present."""
        self._data.pop(key, None)
        return True

    async def clear(self) -> None:
        """Remove every key."""
        self._data.clear()

    def keys(self) -> list[str]:
        """Return the stored key names (test helper)."""
        return sorted(self._data)
