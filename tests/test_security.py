"""Credential service: argon2 password hashes and HS256 bearer tokens."""

import pytest
from argon2 import PasswordHasher
from jose import jwt

from devicehub.core.errors import InvalidOrExpiredTokenError
from devicehub.core.security import CredentialService


def test_hash_then_verify(credentials):
    credential = credentials.hash_password("correct horse")
    assert credential != "correct horse"
    assert credentials.verify_password("correct horse", credential)


def test_verify_rejects_other_password(credentials):
    credential = credentials.hash_password("one")
    assert not credentials.verify_password("two", credential)


def test_hashes_are_salted(credentials):
    assert credentials.hash_password("same") != credentials.hash_password("same")


def test_verify_never_raises_on_bad_credentials(credentials):
    assert not credentials.verify_password("x", None)
    assert not credentials.verify_password("x", "")
    assert not credentials.verify_password("x", "not-a-hash")


def test_token_round_trip(credentials):
    issued = credentials.issue_token({"id": 7, "username": "alice"})
    assert issued.expires_in == 3600
    assert credentials.verify_token(issued.token) == {"id": 7, "username": "alice"}


def test_expired_token_is_rejected():
    service = CredentialService("test-secret", expires_in=-10, hasher=PasswordHasher())
    issued = service.issue_token({"id": 1, "username": "bob"})
    with pytest.raises(InvalidOrExpiredTokenError):
        service.verify_token(issued.token)


def test_token_signed_with_other_secret_is_rejected(credentials):
    other = CredentialService("another-secret")
    issued = other.issue_token({"id": 1, "username": "bob"})
    with pytest.raises(InvalidOrExpiredTokenError):
        credentials.verify_token(issued.token)


def test_garbage_token_is_rejected(credentials):
    with pytest.raises(InvalidOrExpiredTokenError):
        credentials.verify_token("not.a.token")


def test_token_without_username_is_rejected(credentials):
    token = jwt.encode({"sub": "1"}, "test-secret", algorithm="HS256")
    with pytest.raises(InvalidOrExpiredTokenError):
        credentials.verify_token(token)
