"""Revokeable JWT -- token revocation without token lists.

Tokens are signed with keys derived from small counters ("nonces") kept
in a shared store.  Incrementing a counter revokes every token signed
under its previous value, at four granularities:

1. Every token of every user (global nonce)
2. Every session of one user (user nonce)
3. One session (login nonce removed)
4. One token (login nonce advanced by a refresh)

Entry point: :class:`revokeable_jwt.manager.TokenManager`.
"""
from __future__ import annotations

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Core types, errors, config, interfaces
# ---------------------------------------------------------------------------
from revokeable_jwt.core.config import TokenManagerConfig
from revokeable_jwt.core.errors import (
    ConfigurationError,
    CorruptCounter,
    InvalidClaims,
    InvalidToken,
    NonceStateError,
    RevocationError,
    StorageError,
    StorageTimeout,
    StorageUnavailable,
    TokenDecodeError,
    TokenError,
    error_from_code,
)
from revokeable_jwt.core.interfaces import (
    CounterStore,
    InMemoryStore,
    KeyValueStore,
    TokenSigner,
)
from revokeable_jwt.core.types import (
    LOGIN_ID_CLAIM,
    USER_ID_CLAIM,
    NonceSnapshot,
    SessionState,
)

# ---------------------------------------------------------------------------
# Key derivation and signing
# ---------------------------------------------------------------------------
from revokeable_jwt.keys import CounterKeys, derive_signing_key

# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------
from revokeable_jwt.manager import TokenManager
from revokeable_jwt.signing import JWTSigner

# ---------------------------------------------------------------------------
# Store collaborators
# ---------------------------------------------------------------------------
from revokeable_jwt.stores import RedisStore

__all__ = [
    # Meta
    "__version__",
    # Core types
    "LOGIN_ID_CLAIM",
    "USER_ID_CLAIM",
    "NonceSnapshot",
    "SessionState",
    # Config
    "TokenManagerConfig",
    # Error hierarchy
    "RevocationError",
    "TokenError",
    "error_from_code",
    "InvalidToken",
    "TokenDecodeError",
    "InvalidClaims",
    "StorageError",
    "StorageUnavailable",
    "StorageTimeout",
    "CorruptCounter",
    "ConfigurationError",
    "NonceStateError",
    # Interfaces
    "CounterStore",
    "KeyValueStore",
    "TokenSigner",
    "InMemoryStore",
    # Keys and signing
    "CounterKeys",
    "derive_signing_key",
    "JWTSigner",
    # Manager
    "TokenManager",
    # Stores
    "RedisStore",
]
