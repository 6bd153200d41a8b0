"""Token manager configuration.

Defines the validated configuration model consumed by
:class:`~revokeable_jwt.manager.TokenManager`.  Only ``secret`` is
required; every other field carries a default suitable for a single
deployment sharing one store.
"""
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# RFC 7518 section 3.2: an HS256 key should be at least as long as the hash
# output.  The derived key is longer than the secret, so a secret of this
# size keeps every derived key above the HS256 minimum.
RECOMMENDED_SECRET_BYTES = 32


class TokenManagerConfig(BaseModel):
    """Configuration for a :class:`~revokeable_jwt.manager.TokenManager`.

    All servers that verify each other's tokens MUST share the same
    ``secret``, ``algorithm`` and ``key_prefix``, and point at the same
    store.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    secret: str = Field(
        min_length=1,
        repr=False,
        description=(
            "Static secret prepended to every derived signing key. "
            "Should be at least 32 bytes (RFC 7518 section 3.2); shorter "
            "secrets are accepted but logged as a warning. Never logged."
        ),
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="Symmetric JWT algorithm used for every token.",
    )
    key_prefix: str = Field(
        default="rjwt:",
        description=(
            "Namespace prepended to every counter key so the store can "
            "be shared with other applications."
        ),
    )
    store_timeout_seconds: Annotated[float, Field(gt=0)] | None = Field(
        default=5.0,
        description=(
            "Upper bound in seconds for a single store call. ``None`` "
            "leaves timeouts to the store client."
        ),
    )
