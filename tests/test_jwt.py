"""Token signing and verification."""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from fastfood.auth.jwt import (
    Identity,
    InvalidCredential,
    Role,
    create_access_token,
    create_refresh_token,
    verify_identity,
    verify_token,
)
from fastfood.auth.password import hash_password, verify_password
from fastfood.config import settings


def _sign(payload: dict, secret: str = None) -> str:
    return pyjwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def test_access_token_round_trip():
    token = create_access_token("alice", Role.ADMIN, name="Alice")
    payload = verify_token(token)

    assert payload["sub"] == "alice"
    assert payload["role"] == "admin"
    assert payload["type"] == "access"
    assert payload["name"] == "Alice"


def test_verify_identity():
    identity = verify_identity(create_access_token("alice", Role.USER))
    assert identity == Identity("alice", Role.USER)
    assert identity.is_admin is False


def test_admin_identity():
    assert verify_identity(create_access_token("boss", "admin")).is_admin


@pytest.mark.parametrize("credential", [None, ""])
def test_missing_credential(credential):
    with pytest.raises(InvalidCredential, match="missing"):
        verify_identity(credential)


def test_wrong_signature():
    token = _sign(
        {"sub": "alice", "role": "user", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        secret="some-other-secret",
    )
    with pytest.raises(InvalidCredential, match="Invalid token"):
        verify_identity(token)


def test_expired():
    token = create_access_token("alice", expires_minutes=-5)
    with pytest.raises(InvalidCredential, match="expired"):
        verify_identity(token)


def test_missing_subject():
    token = _sign({"role": "user", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})
    with pytest.raises(InvalidCredential):
        verify_identity(token)


def test_unknown_role():
    token = _sign({
        "sub": "alice",
        "role": "superuser",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    })
    with pytest.raises(InvalidCredential, match="role"):
        verify_identity(token)


def test_refresh_token_is_not_an_identity():
    with pytest.raises(InvalidCredential, match="access"):
        verify_identity(create_refresh_token("alice"))


def test_password_hashing():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)


def test_missing_role():
    token = _sign({"sub": "alice", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)})
    with pytest.raises(InvalidCredential):
        verify_identity(token)
