import base64
import time

import pytest
from fastapi import HTTPException
from jose import jwt

from py_hrone_auth import get_auth_context, verify_bearer_token
from py_hrone_auth import jwt_dep

SECRET = "unit-test-signing-secret-0123456789abcdef"
ISSUER = "https://id.hrone.example.com/"
AUDIENCE = "hr-api"


def make_token(kid="test-key", **overrides):
    now = int(time.time())
    claims = {
        "sub": "auth0|123",
        "iss": ISSUER,
        "aud": AUDIENCE,
        "iat": now,
        "exp": now + 300,
        "email": "manager@example.com",
        "scope": "read:employees write:employees",
    }
    claims.update(overrides)
    return jwt.encode(claims, SECRET, algorithm="HS256", headers={"kid": kid})


@pytest.fixture
def jwks(monkeypatch):
    key = {
        "kty": "oct",
        "kid": "test-key",
        "alg": "HS256",
        "k": base64.urlsafe_b64encode(SECRET.encode()).rstrip(b"=").decode(),
    }
    monkeypatch.setattr(jwt_dep, "JWKS_URL", "https://id.hrone.example.com/.well-known/jwks.json")
    monkeypatch.setattr(jwt_dep, "ISSUER", ISSUER)
    monkeypatch.setattr(jwt_dep, "AUDIENCE", AUDIENCE)
    monkeypatch.setattr(jwt_dep, "_get_jwks", lambda: {"keys": [key]})


def test_missing_header_is_unauthorized():
    with pytest.raises(HTTPException) as exc_info:
        verify_bearer_token(None)

    assert exc_info.value.status_code == 401


def test_empty_bearer_value_is_unauthorized():
    with pytest.raises(HTTPException) as exc_info:
        verify_bearer_token("Bearer   ")

    assert exc_info.value.status_code == 401


def test_opaque_token_passes_through(monkeypatch):
    monkeypatch.setattr(jwt_dep, "JWKS_URL", "")

    token = verify_bearer_token("Bearer not-a-jwt")
    context = get_auth_context(token)

    assert token.verified is False
    assert context.user_id == "anonymous"
    assert context.access_token == "not-a-jwt"


def test_unverified_jwt_claims_identify_the_user(monkeypatch):
    monkeypatch.setattr(jwt_dep, "JWKS_URL", "")

    context = get_auth_context(verify_bearer_token(f"bearer {make_token()}"))

    assert context.user_id == "auth0|123"
    assert context.email == "manager@example.com"


def test_verified_token(jwks):
    raw = make_token()

    token = verify_bearer_token(f"Bearer {raw}")
    context = get_auth_context(token)

    assert token.verified is True
    assert context.user_id == "auth0|123"
    assert context.scopes == ["read:employees", "write:employees"]
    assert context.access_token == raw


def test_unknown_key_id_is_rejected(jwks):
    with pytest.raises(HTTPException) as exc_info:
        verify_bearer_token(f"Bearer {make_token(kid='rotated-away')}")

    assert exc_info.value.status_code == 401


def test_expired_token_is_rejected(jwks):
    past = int(time.time()) - 3600

    with pytest.raises(HTTPException) as exc_info:
        verify_bearer_token(f"Bearer {make_token(iat=past - 60, exp=past)}")

    assert exc_info.value.status_code == 401


def test_wrong_audience_is_rejected(jwks):
    with pytest.raises(HTTPException) as exc_info:
        verify_bearer_token(f"Bearer {make_token(aud='someone-else')}")

    assert exc_info.value.status_code == 401
