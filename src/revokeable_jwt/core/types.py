"""Shared value types.

Key design decisions:
* :class:`NonceSnapshot` captures the four counter *values* a signing key
  is derived from; two snapshots with equal values always derive the same
  key.
* Enums use *string* values so they serialise cleanly to JSON.
"""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from revokeable_jwt.keys import derive_signing_key

# ---------------------------------------------------------------------------
# Claim names
# ---------------------------------------------------------------------------

LOGIN_ID_CLAIM = "loginID"
USER_ID_CLAIM = "userID"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SessionState(enum.StrEnum):
    """Lifecycle of one (user, login ID) session.

    * **nonexistent** -- the login ID was never allocated for the user
    * **active** -- the login nonce is at least 1
    * **revoked** -- the login nonce entry was removed and reads back as 0

    A revoked session never becomes active again; a new login always
    allocates a fresh login ID.
    """

    NONEXISTENT = "nonexistent"
    ACTIVE = "active"
    REVOKED = "revoked"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class NonceSnapshot(BaseModel):
    """The counter values a signing key is derived from."""

    model_config = ConfigDict(frozen=True)

    global_nonce: int = Field(ge=0)
    user_nonce: int = Field(ge=0)
    login_id: int = Field(ge=0)
    login_nonce: int = Field(ge=0)

    def signing_key(self, secret: str) -> str:
        """Return the signing key for *secret* and these counter values."""
        return derive_signing_key(
            secret,
            self.global_nonce,
            self.user_nonce,
            self.login_id,
            self.login_nonce,
        )
