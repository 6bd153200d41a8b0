"""Tests for counter naming and signing-key derivation."""
from __future__ import annotations

import pytest

from revokeable_jwt.core.errors import CorruptCounter
from revokeable_jwt.core.types import NonceSnapshot
from revokeable_jwt.keys import CounterKeys, derive_signing_key, parse_counter


class TestDeriveSigningKey:
    """Tests for derive_signing_key."""

    def test_layout(self) -> None:
        assert derive_signing_key("my_jwt_secret", 0, 0, 0, 0) == "my_jwt_secret_0 0 0 0"
        assert derive_signing_key("s", 3, 2, 7, 11) == "s_3 2 7 11"

    def test_equal_values_equal_keys(self) -> None:
        assert derive_signing_key("s", 1, 2, 3, 4) == derive_signing_key("s", 1, 2, 3, 4)

    @pytest.mark.parametrize(
        "changed",
        [(2, 2, 3, 4), (1, 3, 3, 4), (1, 2, 4, 4), (1, 2, 3, 5)],
    )
    def test_any_counter_changes_key(self, changed: tuple[int, int, int, int]) -> None:
        assert derive_signing_key("s", 1, 2, 3, 4) != derive_signing_key("s", *changed)

    def test_snapshot_matches_function(self) -> None:
        snapshot = NonceSnapshot(global_nonce=1, user_nonce=0, login_id=2, login_nonce=3)
        assert snapshot.signing_key("s") == "s_1 0 2 3"


class TestParseCounter:
    """Tests for parse_counter."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 0), (0, 0), (5, 5), ("12", 12), (b"7", 7)],
    )
    def test_valid(self, raw: object, expected: int) -> None:
        assert parse_counter(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", b"1.5", -1, "-3", True, 2.0, [1]])
    def test_invalid(self, raw: object) -> None:
        with pytest.raises(CorruptCounter) as exc_info:
            parse_counter(raw, key="rjwt:gn")
        assert exc_info.value.details == {"key": "rjwt:gn"}


class TestCounterKeys:
    """Tests for CounterKeys."""

    def test_names(self) -> None:
        keys = CounterKeys("rjwt:")
        assert keys.global_nonce() == "rjwt:gn"
        assert keys.user_nonce("u1") == "rjwt:u:u1"
        assert keys.login_id("u1") == "rjwt:l:u1"
        assert keys.login_nonce("u1", 4) == "rjwt:s:u1:4"

    def test_kinds_never_collide(self) -> None:
        """User IDs shaped like other key kinds still map to distinct keys."""
        keys = CounterKeys()
        names = {
            keys.global_nonce(),
            keys.user_nonce("gn"),
            keys.user_nonce("u5:1"),
            keys.user_nonce("5:1"),
            keys.login_id("u5"),
            keys.login_nonce("u5", 1),
            keys.login_nonce("5", 1),
            keys.login_nonce("a:1", 2),
            keys.login_nonce("a", 12),
        }
        assert len(names) == 9
