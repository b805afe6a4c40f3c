"""TokenService and password hashing unit tests."""

from datetime import timedelta

import jwt
import pytest

from uptask.auth.dependencies import extract_token, resolve_identity
from uptask.auth.jwt import CallerIdentity, TokenService
from uptask.auth.password import hash_password, verify_password
from uptask.errors import ExpiredToken, InvalidToken

SECRET = "unit-test-secret"


def test_round_trip_keeps_identity_fields():
    svc = TokenService(secret=SECRET)
    token = svc.issue("user-1", "a@x.com", "A")
    assert svc.verify(token) == CallerIdentity(id="user-1", email="a@x.com", name="A")


def test_default_lifetime_is_four_hours():
    svc = TokenService(secret=SECRET)
    payload = jwt.decode(svc.issue("u", "e", "n"), SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 4 * 60 * 60


def test_expired_token():
    svc = TokenService(secret=SECRET, ttl=timedelta(seconds=-1))
    token = svc.issue("u", "e@x.com", "n")
    with pytest.raises(ExpiredToken):
        svc.verify(token)


def test_expired_is_an_invalid_token():
    assert issubclass(ExpiredToken, InvalidToken)


def test_wrong_secret_rejected():
    token = TokenService(secret="other").issue("u", "e@x.com", "n")
    with pytest.raises(InvalidToken) as exc:
        TokenService(secret=SECRET).verify(token)
    assert not isinstance(exc.value, ExpiredToken)


def test_tampered_token_rejected():
    svc = TokenService(secret=SECRET)
    header, _, signature = svc.issue("u", "e@x.com", "n").split(".")
    _, other_payload, _ = svc.issue("admin", "root@x.com", "root").split(".")
    tampered = ".".join([header, other_payload, signature])
    with pytest.raises(InvalidToken):
        svc.verify(tampered)


def test_token_without_id_claim_rejected():
    token = jwt.encode({"email": "e@x.com", "exp": 9999999999}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        TokenService(secret=SECRET).verify(token)


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("abc.def.ghi", "abc.def.ghi"),
        ("Bearer ", None),
        ("Bearer", None),
        ("  bearer   ", None),
        ("Bearer   abc.def.ghi  ", "abc.def.ghi"),
    ],
)
def test_extract_token(header, expected):
    assert extract_token(header) == expected


def test_resolve_identity_keeps_error():
    auth = resolve_identity("Bearer junk", TokenService(secret=SECRET))
    assert auth.identity is None
    assert isinstance(auth.error, InvalidToken)


def test_resolve_identity_without_header():
    auth = resolve_identity(None, TokenService(secret=SECRET))
    assert auth.identity is None
    assert auth.error is None


def test_password_hash_and_verify():
    hashed = hash_password("s3cret", rounds=4)
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hash_is_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_verify_against_garbage_hash():
    assert verify_password("pw", "not-a-bcrypt-hash") is False


def test_resolve_identity_with_empty_bearer_is_anonymous():
    auth = resolve_identity("Bearer ", TokenService(secret=SECRET))
    assert auth.identity is None
    assert auth.error is None
