"""Shared fixtures for revocation conformance tests.

Provides a shared in-memory store and token managers bound to it.
"""
from __future__ import annotations

import pytest

from revokeable_jwt.core.config import TokenManagerConfig
from revokeable_jwt.core.interfaces import InMemoryStore
from revokeable_jwt.manager import TokenManager

SECRET = "s"


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


# ---------------------------------------------------------------------------
# Manager fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def manager(store: InMemoryStore) -> TokenManager:
    return TokenManager(store, store, TokenManagerConfig(secret=SECRET))


@pytest.fixture()
def second_server(store: InMemoryStore) -> TokenManager:
    """Another manager instance sharing the same store."""
    return TokenManager(store, store, TokenManagerConfig(secret=SECRET))
