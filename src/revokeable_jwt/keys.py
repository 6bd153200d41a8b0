"""Counter naming and signing-key derivation.

Signing key layout::

    <secret>_<GlobalNonce> <UserNonce> <LoginID> <LoginNonce>

A token signed with ``"my_secret_0 0 1 1"`` stops verifying as soon as
any of the four counters moves: after the global nonce is incremented,
the verifier derives ``"my_secret_1 0 1 1"`` and the old signature no
longer matches.  Revocation therefore needs no record of issued tokens,
only these counters.

Counter names live under a configurable prefix::

    gn                        global nonce
    u:<userID>                user nonce
    l:<userID>                last allocated login ID
    s:<userID>:<loginID>      login (session) nonce

The leading kind tag keeps names of different kinds disjoint for any
user ID, and the login ID is always the text after the last ``:``.
"""
from __future__ import annotations

from revokeable_jwt.core.errors import CorruptCounter


def derive_signing_key(
    secret: str,
    global_nonce: int,
    user_nonce: int,
    login_id: int,
    login_nonce: int,
) -> str:
    """Return the signing key for *secret* and the four counter values.

    The same values always yield a byte-identical key.
    """
    return f"{secret}_{global_nonce} {user_nonce} {login_id} {login_nonce}"


def parse_counter(raw: object, *, key: str = "") -> int:
    """Convert a raw store value into a counter.

    Absent values (``None``) are the "never incremented" state and read as
    ``0``.  Stores typically hand back ``str`` or ``bytes``.

    Raises
    ------
    CorruptCounter
        If *raw* does not hold a non-negative integer.
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise CorruptCounter(details={"key": key})
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, (str, bytes)):
        try:
            value = int(raw)
        except ValueError as exc:
            raise CorruptCounter(details={"key": key}) from exc
    else:
        raise CorruptCounter(details={"key": key})
    if value < 0:
        raise CorruptCounter(details={"key": key})
    return value


class CounterKeys:
    """Builds the store key of every counter the scheme uses.

    Parameters
    ----------
    prefix:
        Namespace prepended to every key.
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix

    def global_nonce(self) -> str:
        return f"{self._prefix}gn"

    def user_nonce(self, user_id: str) -> str:
        return f"{self._prefix}u:{user_id}"

    def login_id(self, user_id: str) -> str:
        return f"{self._prefix}l:{user_id}"

    def login_nonce(self, user_id: str, login_id: int) -> str:
        return f"{self._prefix}s:{user_id}:{login_id}"
