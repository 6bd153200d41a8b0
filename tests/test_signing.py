"""Tests for the PyJWT-backed signer."""
from __future__ import annotations

import jwt
import pytest

from revokeable_jwt.core.errors import InvalidToken, TokenDecodeError
from revokeable_jwt.core.interfaces import TokenSigner
from revokeable_jwt.signing import JWTSigner

KEY = "secret_0 0 1 1"


class TestJWTSigner:
    """Tests for JWTSigner."""

    def test_is_token_signer(self) -> None:
        assert isinstance(JWTSigner(), TokenSigner)

    def test_unsupported_algorithm(self) -> None:
        with pytest.raises(ValueError, match="Unsupported signing algorithm"):
            JWTSigner("RS256")

    @pytest.mark.parametrize("algorithm", ["HS256", "HS384", "HS512"])
    def test_sign_and_verify(self, algorithm: str) -> None:
        signer = JWTSigner(algorithm)
        token = signer.sign({"loginID": 1, "userID": "u1"}, KEY)
        assert jwt.get_unverified_header(token)["alg"] == algorithm
        assert signer.verify(token, KEY) == {"loginID": 1, "userID": "u1"}

    def test_verify_wrong_key(self) -> None:
        signer = JWTSigner()
        token = signer.sign({"loginID": 1, "userID": "u1"}, KEY)
        with pytest.raises(InvalidToken) as exc_info:
            signer.verify(token, "secret_1 0 1 1")
        assert isinstance(exc_info.value.__cause__, jwt.InvalidSignatureError)

    def test_verify_rejects_other_algorithm(self) -> None:
        token = JWTSigner("HS512").sign({"loginID": 1, "userID": "u1"}, KEY)
        with pytest.raises(InvalidToken):
            JWTSigner("HS256").verify(token, KEY)

    def test_verify_expired(self) -> None:
        signer = JWTSigner()
        token = signer.sign({"loginID": 1, "userID": "u1", "exp": 1}, KEY)
        with pytest.raises(InvalidToken):
            signer.verify(token, KEY)

    def test_decode_unverified_ignores_signature(self) -> None:
        signer = JWTSigner()
        token = signer.sign({"loginID": 2, "userID": "u9", "exp": 1}, "any key")
        assert signer.decode_unverified(token) == {"loginID": 2, "userID": "u9", "exp": 1}

    @pytest.mark.parametrize("token", ["garbage", "a.b.c", "..."])
    def test_decode_unverified_malformed(self, token: str) -> None:
        with pytest.raises(TokenDecodeError):
            JWTSigner().decode_unverified(token)
