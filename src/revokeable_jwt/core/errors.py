"""Revokeable JWT error-code hierarchy.

Hierarchy
---------
::

    RevocationError
    +-- TokenError           (RJ-E1xx)
    +-- StorageError         (RJ-E2xx)
    +-- ConfigurationError   (RJ-E300)
    +-- NonceStateError      (RJ-E301)

``TokenError`` subclasses describe a token that cannot be trusted.  They
are raised by signer implementations and converted to a plain ``None``
result by :class:`~revokeable_jwt.manager.TokenManager`; a revoked token
is an expected outcome, not a fault.

``StorageError`` subclasses always propagate to the caller.  The manager
performs no retries.

Usage
-----
Catch by category::

    try:
        await manager.logout_all_users()
    except StorageError:
        # StorageUnavailable, StorageTimeout, CorruptCounter
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class RevocationError(Exception):
    """Base exception for all revokeable-jwt errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"RJ-E200"``.
    message : str
        Human-readable description (MUST NOT contain secrets or keys).
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "RJ-E000"
    message: str = "Unknown revocation error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error into a JSON-friendly mapping."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class TokenError(RevocationError):
    """RJ-E1xx -- The presented token cannot be trusted."""

    code = "RJ-E1XX"


class StorageError(RevocationError):
    """RJ-E2xx -- The counter or data store failed."""

    code = "RJ-E2XX"


# ===================================================================
# RJ-E1xx  Token errors
# ===================================================================

class InvalidToken(TokenError):
    """RJ-E100 -- Signature or structure does not match the derived key."""

    code = "RJ-E100"
    message = "Token signature could not be verified"
    resolution = "Log in again or refresh with a currently valid token."


class TokenDecodeError(TokenError):
    """RJ-E101 -- The token could not be parsed into a payload."""

    code = "RJ-E101"
    message = "Token could not be decoded"
    resolution = "Send a compact-serialised JWT."


class InvalidClaims(TokenError):
    """RJ-E102 -- The ``userID`` / ``loginID`` claims are missing or mistyped."""

    code = "RJ-E102"
    message = "Token is missing the userID or loginID claim"
    resolution = "Only present tokens issued by TokenManager.login or refresh."


# ===================================================================
# RJ-E2xx  Storage errors
# ===================================================================

class StorageUnavailable(StorageError):
    """RJ-E200 -- The backend is unreachable or rejected the command."""

    code = "RJ-E200"
    message = "Counter store is unavailable"
    resolution = "Retry after a delay. Check the status of the store."


class StorageTimeout(StorageError):
    """RJ-E201 -- A store call exceeded the configured timeout."""

    code = "RJ-E201"
    message = "Counter store did not answer in time"
    resolution = (
        "Retry after a delay, or raise store_timeout_seconds if the "
        "backend is known to be slow."
    )


class CorruptCounter(StorageError):
    """RJ-E202 -- A stored counter value is not an integer."""

    code = "RJ-E202"
    message = "Stored counter value is not an integer"
    resolution = "Remove or repair the offending key in the store."


# ===================================================================
# RJ-E3xx  Usage errors
# ===================================================================

class ConfigurationError(RevocationError):
    """RJ-E300 -- The manager was constructed with unusable collaborators."""

    code = "RJ-E300"
    message = "Token manager is misconfigured"


class NonceStateError(RevocationError):
    """RJ-E301 -- Refusing to sign with a login nonce below 1.

    A removed session reads back as ``0``; no token may ever be signed
    with that value.
    """

    code = "RJ-E301"
    message = "Login nonce must be at least 1 before signing"


# ---------------------------------------------------------------------------
# Lookup helper
# ---------------------------------------------------------------------------

_CODE_MAP: dict[str, type[RevocationError]] = {
    cls.code: cls
    for cls in [
        # E1xx
        InvalidToken,
        TokenDecodeError,
        InvalidClaims,
        # E2xx
        StorageUnavailable,
        StorageTimeout,
        CorruptCounter,
        # E3xx
        ConfigurationError,
        NonceStateError,
    ]
}


def error_from_code(code: str, message: str | None = None) -> RevocationError:
    """Instantiate the exception class registered for *code*.

    Raises
    ------
    KeyError
        If *code* is not a recognised error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
