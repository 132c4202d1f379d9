import re

import pytest
from fastapi import HTTPException
from jose import jwt

from apan.auth.security import (
    create_access_token,
    decode_access_token,
    generate_reset_token,
    get_current_user,
    hash_password,
    verify_password,
)
from apan.config import ALGORITHM, SECRET_KEY
from apan.project.project_service import generate_join_code, project_role


def test_password_hash_roundtrip():
    hashed = hash_password("secret")

    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_carries_identity():
    token = create_access_token(7, "ana@x.com")

    identity = decode_access_token(token)
    assert identity.id == 7
    assert identity.email == "ana@x.com"

    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    assert payload["user"] == {"id": 7, "email": "ana@x.com"}
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token(7, "ana@x.com", minutes=-1)

    with pytest.raises(HTTPException) as exc:
        decode_access_token(token)
    assert exc.value.status_code == 401


def test_token_signed_with_other_secret_is_rejected():
    token = jwt.encode({"user": {"id": 1, "email": "a@x.com"}}, "other", algorithm=ALGORITHM)

    with pytest.raises(HTTPException) as exc:
        decode_access_token(token)
    assert exc.value.status_code == 401


def test_token_without_user_claim_is_rejected():
    token = jwt.encode({"sub": "1"}, SECRET_KEY, algorithm=ALGORITHM)

    with pytest.raises(HTTPException):
        decode_access_token(token)


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "bearer abc", "Token abc"])
def test_auth_gate_rejects_bad_headers(header):
    with pytest.raises(HTTPException) as exc:
        get_current_user(header)
    assert exc.value.status_code == 401


def test_auth_gate_accepts_bearer_token():
    token = create_access_token(3, "bia@x.com")

    identity = get_current_user(f"Bearer {token}")
    assert identity.id == 3


def test_reset_token_is_40_hex_chars():
    token = generate_reset_token()

    assert re.fullmatch(r"[0-9a-f]{40}", token)
    assert token != generate_reset_token()


def test_join_code_format():
    for _ in range(20):
        assert re.fullmatch(r"APAN-[0-9A-F]{4}", generate_join_code())


def test_project_role():
    assert project_role(1, 1) == "Manager"
    assert project_role(2, 1) == "Participant"
