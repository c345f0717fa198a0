"""
Password hashing and token service tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from api.auth import extract_token
from api.exceptions import UnauthorizedError
from movie_catalog.models import UserData
from movie_catalog.security import (
    InvalidTokenError,
    TokenService,
    TokenSubject,
    hash_password,
    verify_password,
)


class TestPasswords:

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_verify_matches_only_original(self):
        user = UserData(username="u", password=hash_password("correct horse"))

        assert verify_password(user, "correct horse")
        assert not verify_password(user, "battery staple")
        assert not verify_password(user, None)

    def test_long_password_compares_first_72_bytes(self):
        user = UserData(username="u", password=hash_password("a" * 100))

        assert verify_password(user, "a" * 100)
        assert verify_password(user, "a" * 72)
        assert not verify_password(user, "a" * 71)

    def test_multibyte_password_over_limit(self):
        password = "ü" * 50
        user = UserData(username="u", password=hash_password(password))

        assert verify_password(user, password)

    def test_verify_against_non_hash(self):
        user = UserData(username="u", password="stored-in-plaintext")

        assert not verify_password(user, "stored-in-plaintext")


class TestTokenService:

    def test_issue_and_verify(self):
        service = TokenService("secret")

        subject = service.verify(service.issue(TokenSubject(id="abc123", username="ann")))

        assert subject == TokenSubject(id="abc123", username="ann")

    def test_expired_token(self):
        service = TokenService("secret", expire_minutes=-1)
        token = service.issue(TokenSubject(id="1", username="ann"))

        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_wrong_secret(self):
        token = TokenService("one").issue(TokenSubject(id="1", username="ann"))

        with pytest.raises(InvalidTokenError):
            TokenService("two").verify(token)

    def test_token_without_expiry(self):
        token = jwt.encode({"id": "1", "username": "ann"}, "secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify(token)

    def test_token_without_subject(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "secret",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify(token)

    def test_malformed_token(self):
        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify("a.b.c")


class TestExtractToken:

    def test_jwt_scheme(self):
        assert extract_token("JWT abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_token("jwt abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "JWT", "Bearer abc.def.ghi", "abc.def.ghi"])
    def test_rejected_headers(self, header):
        with pytest.raises(UnauthorizedError):
            extract_token(header)
