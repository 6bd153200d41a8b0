"""JWT signing primitive.

:class:`JWTSigner` is the default :class:`~revokeable_jwt.core.interfaces.TokenSigner`.
It signs with one fixed symmetric algorithm and translates PyJWT
exceptions into the library's :class:`~revokeable_jwt.core.errors.TokenError`
subclasses, so the token manager never sees a backend-specific error.
"""
from __future__ import annotations

from typing import Any

import jwt

from revokeable_jwt.core.errors import InvalidToken, TokenDecodeError


class JWTSigner:
    """HMAC-signed JWTs via PyJWT.

    Parameters
    ----------
    algorithm:
        One of ``"HS256"``, ``"HS384"`` or ``"HS512"``.
    """

    SUPPORTED_ALGORITHMS: tuple[str, ...] = ("HS256", "HS384", "HS512")

    def __init__(self, algorithm: str = "HS256") -> None:
        if algorithm not in self.SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"Unsupported signing algorithm: '{algorithm}'. "
                f"Supported: {', '.join(self.SUPPORTED_ALGORITHMS)}."
            )
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def sign(self, payload: dict[str, Any], key: str) -> str:
        token: str = jwt.encode(payload, key, algorithm=self._algorithm)
        return token

    def verify(self, token: str, key: str) -> dict[str, Any]:
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                key,
                algorithms=[self._algorithm],
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(f"Token verification failed: {exc}") from exc
        return payload

    def decode_unverified(self, token: str) -> dict[str, Any]:
        # The result only tells the caller which counters to read.
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                options={"verify_signature": False},
            )
        except jwt.InvalidTokenError as exc:
            raise TokenDecodeError(f"Token could not be decoded: {exc}") from exc
        return payload
