"""Token issue, refresh, verification and revocation over a nonce hierarchy.

Every token is signed with a key derived from four counters (see
:mod:`revokeable_jwt.keys`)::

    <secret>_<GlobalNonce> <UserNonce> <LoginID> <LoginNonce>

Revocation moves a counter instead of recording the token:

* :meth:`TokenManager.logout_all_users` -- increments the global nonce,
  revoking every token of every user.
* :meth:`TokenManager.logout_every_login_from` -- increments one user's
  nonce, revoking all of that user's sessions.
* :meth:`TokenManager.logout` -- removes one session's login nonce.
* :meth:`TokenManager.refresh` -- increments one session's login nonce,
  revoking the token that was presented.

The manager holds no mutable state of its own; all counters live in the
injected stores, so any number of instances (or servers) sharing a store
agree on which tokens are valid.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from revokeable_jwt.core.config import RECOMMENDED_SECRET_BYTES, TokenManagerConfig
from revokeable_jwt.core.errors import (
    ConfigurationError,
    InvalidClaims,
    NonceStateError,
    StorageTimeout,
    TokenError,
)
from revokeable_jwt.core.interfaces import CounterStore, KeyValueStore, TokenSigner
from revokeable_jwt.core.types import (
    LOGIN_ID_CLAIM,
    USER_ID_CLAIM,
    NonceSnapshot,
    SessionState,
)
from revokeable_jwt.keys import CounterKeys, parse_counter
from revokeable_jwt.signing import JWTSigner

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# Registered claims PyJWT type-checks on every verify.
_STRING_CLAIMS = ("iss", "sub", "jti")
_NUMERIC_DATE_CLAIMS = ("exp", "nbf", "iat")


class TokenManager:
    """Issues and revokes JWTs without a token blacklist or whitelist.

    Parameters
    ----------
    data_store:
        Key-value store the counters are read from.
    counter_store:
        Store providing atomic increments.  Usually the same object as
        *data_store*.
    config:
        Secret, algorithm, key prefix and store timeout.
    signer:
        Signing primitive.  Defaults to :class:`~revokeable_jwt.signing.JWTSigner`
        with ``config.algorithm``.

    Usage
    -----
    ::

        store = InMemoryStore()
        manager = TokenManager(store, store, TokenManagerConfig(secret="s"))
        token = await manager.login("u1", {"role": "admin"})
        payload = await manager.is_valid(token)     # dict
        token = await manager.refresh(token)         # old token now invalid
        await manager.logout_every_login_from("u1")  # every u1 token invalid
    """

    def __init__(
        self,
        data_store: KeyValueStore,
        counter_store: CounterStore,
        config: TokenManagerConfig,
        *,
        signer: TokenSigner | None = None,
    ) -> None:
        if not isinstance(data_store, KeyValueStore):
            raise ConfigurationError(
                "data_store does not implement KeyValueStore",
                details={"type": type(data_store).__name__},
            )
        if not isinstance(counter_store, CounterStore):
            raise ConfigurationError(
                "counter_store does not implement CounterStore",
                details={"type": type(counter_store).__name__},
            )
        self._data = data_store
        self._counters = counter_store
        self._config = config
        self._keys = CounterKeys(config.key_prefix)
        self._signer: TokenSigner = signer or JWTSigner(config.algorithm)
        if len(config.secret.encode()) < RECOMMENDED_SECRET_BYTES:
            logger.warning(
                "Token secret is shorter than %d bytes; use a longer secret",
                RECOMMENDED_SECRET_BYTES,
            )

    @property
    def keys(self) -> CounterKeys:
        """Counter naming used by this manager."""
        return self._keys

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------

    async def login(self, user_id: str, user_data: dict[str, Any] | None = None) -> str:
        """Open a new session for *user_id* and return its first token.

        The token payload is *user_data* plus the ``loginID`` and
        ``userID`` claims, which always take precedence over same-named
        keys in *user_data*.

        Registered claims in *user_data* must have the types verification
        enforces: ``iss``, ``sub`` and ``jti`` are strings, ``exp``,
        ``nbf`` and ``iat`` are numbers.  ``aud`` is refused because
        tokens are verified without an expected audience.  Expiry values
        are not range-checked; a token whose ``exp`` has passed is issued
        and simply never validates.

        Raises
        ------
        InvalidClaims
            If *user_id* is not a string or *user_data* carries a
            registered claim of the wrong type.  No counter is touched.
        """
        if not isinstance(user_id, str):
            raise InvalidClaims(details={"claim": USER_ID_CLAIM})
        self._check_registered_claims(user_data or {})

        login_id = await self._store_call(
            self._counters.increment(self._keys.login_id(user_id))
        )
        user_nonce = await self._read(self._keys.user_nonce(user_id))
        login_nonce = await self._store_call(
            self._counters.increment(self._keys.login_nonce(user_id, login_id))
        )

        payload = {**(user_data or {}), LOGIN_ID_CLAIM: login_id, USER_ID_CLAIM: user_id}
        token = await self._sign(payload, user_nonce, login_id, login_nonce)
        logger.debug("Issued token for user %r, login %d", user_id, login_id)
        return token

    async def refresh(self, token: str | None) -> str | None:
        """Exchange a valid token for a new one with the same claims.

        The presented token stops verifying once this returns.  Returns
        ``None`` if *token* is not valid.
        """
        payload = await self.is_valid(token)
        if payload is None:
            return None

        user_id: str = payload[USER_ID_CLAIM]
        login_id: int = payload[LOGIN_ID_CLAIM]
        user_nonce = await self._read(self._keys.user_nonce(user_id))
        login_nonce = await self._store_call(
            self._counters.increment(self._keys.login_nonce(user_id, login_id))
        )

        new_token = await self._sign(payload, user_nonce, login_id, login_nonce)
        logger.debug(
            "Refreshed token for user %r, login %d (nonce %d)",
            user_id,
            login_id,
            login_nonce,
        )
        return new_token

    async def logout_all_users(self) -> None:
        """Revoke every token ever issued, for every user."""
        value = await self._store_call(
            self._counters.increment(self._keys.global_nonce())
        )
        logger.info("Revoked all tokens (global nonce now %d)", value)

    async def logout_every_login_from(self, user_id: str) -> bool:
        """Revoke every session of *user_id*.

        Login ID allocation is unaffected; the next login receives the next
        sequential ID.
        """
        value = await self._store_call(
            self._counters.increment(self._keys.user_nonce(user_id))
        )
        logger.info("Revoked all sessions of user %r (user nonce now %d)", user_id, value)
        return True

    async def logout(self, user_id: str, login_id: int) -> bool:
        """Revoke the single session *login_id* of *user_id*.

        Returns the store's result for removing the session's login nonce.
        """
        removed = await self._store_call(
            self._data.remove(self._keys.login_nonce(user_id, login_id))
        )
        logger.info("Revoked session %d of user %r", login_id, user_id)
        return bool(removed)

    async def is_valid(self, token: str | None) -> dict[str, Any] | None:
        """Return the verified payload of *token*, or ``None`` if invalid.

        Absent, malformed, revoked and forged tokens all yield ``None``.
        Storage failures propagate as
        :class:`~revokeable_jwt.core.errors.StorageError`.
        """
        if not token:
            return None

        # Unauthenticated claims: used only to locate the counters.
        try:
            claims = self._signer.decode_unverified(token)
            user_id, login_id = self._session_claims(claims)
        except TokenError as exc:
            logger.debug("Rejected undecodable token: %s", exc.message)
            return None

        user_nonce = await self._read(self._keys.user_nonce(user_id))
        login_nonce = await self._read(self._keys.login_nonce(user_id, login_id))
        if login_nonce < 1:
            logger.debug("Rejected token for revoked session %d of user %r", login_id, user_id)
            return None

        key = await self.signing_key(user_nonce, login_id, login_nonce)
        try:
            return self._signer.verify(token, key)
        except TokenError as exc:
            logger.debug("Error while verifying token of user %r: %s", user_id, exc.message)
            return None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    async def session_state(self, user_id: str, login_id: int) -> SessionState:
        """Return where session *login_id* of *user_id* is in its lifecycle."""
        allocated = await self._read(self._keys.login_id(user_id))
        if login_id < 1 or login_id > allocated:
            return SessionState.NONEXISTENT
        login_nonce = await self._read(self._keys.login_nonce(user_id, login_id))
        if login_nonce >= 1:
            return SessionState.ACTIVE
        return SessionState.REVOKED

    async def global_nonce(self) -> int:
        """Return the current global nonce."""
        return await self._read(self._keys.global_nonce())

    async def snapshot(self, user_nonce: int, login_id: int, login_nonce: int) -> NonceSnapshot:
        """Combine the given counters with the live global nonce."""
        return NonceSnapshot(
            global_nonce=await self.global_nonce(),
            user_nonce=user_nonce,
            login_id=login_id,
            login_nonce=login_nonce,
        )

    async def signing_key(self, user_nonce: int, login_id: int, login_nonce: int) -> str:
        """Derive the signing key, reading the global nonce fresh."""
        snapshot = await self.snapshot(user_nonce, login_id, login_nonce)
        return snapshot.signing_key(self._config.secret)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _sign(
        self,
        payload: dict[str, Any],
        user_nonce: int,
        login_id: int,
        login_nonce: int,
    ) -> str:
        if login_nonce < 1:
            raise NonceStateError(details={"login_id": login_id, "login_nonce": login_nonce})
        key = await self.signing_key(user_nonce, login_id, login_nonce)
        return self._signer.sign(payload, key)

    async def _read(self, key: str) -> int:
        raw = await self._store_call(self._data.get(key))
        return parse_counter(raw, key=key)

    async def _store_call(self, call: Awaitable[_T]) -> _T:
        timeout = self._config.store_timeout_seconds
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except TimeoutError as exc:
            raise StorageTimeout(details={"timeout_seconds": timeout}) from exc

    @staticmethod
    def _check_registered_claims(user_data: dict[str, Any]) -> None:
        if "aud" in user_data:
            raise InvalidClaims(details={"claim": "aud"})
        for claim in _STRING_CLAIMS:
            if claim in user_data and not isinstance(user_data[claim], str):
                raise InvalidClaims(details={"claim": claim})
        for claim in _NUMERIC_DATE_CLAIMS:
            value = user_data.get(claim)
            if claim in user_data and (
                isinstance(value, bool) or not isinstance(value, (int, float))
            ):
                raise InvalidClaims(details={"claim": claim})

    @staticmethod
    def _session_claims(claims: dict[str, Any]) -> tuple[str, int]:
        user_id = claims.get(USER_ID_CLAIM)
        login_id = claims.get(LOGIN_ID_CLAIM)
        if not isinstance(user_id, str):
            raise InvalidClaims(details={"claim": USER_ID_CLAIM})
        if isinstance(login_id, bool) or not isinstance(login_id, int) or login_id < 1:
            raise InvalidClaims(details={"claim": LOGIN_ID_CLAIM})
        return user_id, login_id
