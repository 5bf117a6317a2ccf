# tests/test_auth.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from backend import config
from backend.auth.identity import Identity, StaticKeyDirectory
from backend.auth.token_service import create_access_token, decode_access_token
from backend.errors import ExpiredTokenError, InvalidTokenError
from backend.main import app


def test_static_directory_lookup() -> None:
    directory = StaticKeyDirectory({"k1": (7, "Seven")})
    assert directory.lookup("k1") == Identity(id=7, name="Seven")
    assert directory.lookup("nope") is None


def test_token_round_trip_carries_user_and_24h_window() -> None:
    claims = decode_access_token(create_access_token(1))
    assert claims["userId"] == 1
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_expired_token_is_reported_as_expired() -> None:
    with pytest.raises(ExpiredTokenError) as info:
        decode_access_token(create_access_token(1, hours=-1))
    assert info.value.to_body()["error"] == "Token expired"


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        jwt.encode({"userId": 1}, "some-other-secret", algorithm="HS256"),
        jwt.encode({"sub": "1"}, config.SECRET_KEY, algorithm=config.ALGORITHM),
    ],
)
def test_bad_tokens_are_invalid(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_login_with_demo_key(client: TestClient) -> None:
    res = client.post("/auth/login", json={"apiKey": "demo-key-123"})
    assert res.status_code == 200
    body = res.json()
    assert body["user"] == {"id": 1, "name": "Demo User"}
    assert body["expiresIn"] == "24h"

    claims = jwt.decode(body["token"], config.SECRET_KEY, algorithms=[config.ALGORITHM])
    assert claims["userId"] == 1


def test_login_with_bad_key(client: TestClient) -> None:
    res = client.post("/auth/login", json={"apiKey": "bad"})
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid API key"


def test_login_without_key(client: TestClient) -> None:
    res = client.post("/auth/login", json={})
    assert res.status_code == 400
    assert res.json()["error"] == "API key required"


def test_verify_distinguishes_failures(client: TestClient, auth_headers: dict) -> None:
    ok = client.get("/auth/verify", headers=auth_headers)
    assert ok.status_code == 200
    assert ok.json()["user"]["userId"] == 1

    missing = client.get("/auth/verify")
    assert missing.status_code == 401
    assert missing.json()["error"] == "Authentication required"

    invalid = client.get("/auth/verify", headers={"Authorization": "Bearer garbage"})
    assert invalid.status_code == 401
    assert invalid.json()["error"] == "Invalid token"

    expired = client.get(
        "/auth/verify", headers={"Authorization": f"Bearer {create_access_token(1, hours=-1)}"}
    )
    assert expired.status_code == 401
    assert expired.json()["error"] == "Token expired"


def test_bare_token_is_accepted(client: TestClient) -> None:
    res = client.get("/auth/verify", headers={"Authorization": create_access_token(2)})
    assert res.status_code == 200
    assert res.json()["user"]["userId"] == 2


def test_identity_provider_can_be_swapped(client: TestClient) -> None:
    original = app.state.identity_provider
    app.state.identity_provider = StaticKeyDirectory({"team-key": (42, "Team Bot")})
    try:
        assert client.post("/auth/login", json={"apiKey": "demo-key-123"}).status_code == 401
        res = client.post("/auth/login", json={"apiKey": "team-key"})
        assert res.json()["user"] == {"id": 42, "name": "Team Bot"}
    finally:
        app.state.identity_provider = original
