"""Store collaborators for networked deployments.

Public API
----------
- :class:`RedisStore` -- counter and data store over one Redis database.

The in-memory store lives in :mod:`revokeable_jwt.core.interfaces`.
"""
from __future__ import annotations

from revokeable_jwt.stores.redis_store import RedisStore

__all__ = [
    "RedisStore",
]
