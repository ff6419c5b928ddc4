import time
import uuid

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app import auth_client
from app.utils import profile_utils
from conftest import auth_headers, make_token


@pytest.fixture()
def platform(monkeypatch):
    """Records calls to the auth platform and lets tests script replies."""
    calls = []
    replies = {}

    def fake(name):
        async def _call(*args, **kwargs):
            calls.append((name, args, kwargs))
            reply = replies.get(name)
            if isinstance(reply, Exception):
                raise reply
            return reply
        return _call

    for name in ("sign_up", "sign_in", "sign_out", "update_user", "reset_password"):
        monkeypatch.setattr(auth_client, name, fake(name))
    return calls, replies


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_me_rejects_bad_tokens(client, user_id):
    expired = make_token(user_id, exp=int(time.time()) - 10)
    wrong_aud = make_token(user_id, aud="anon")
    for token in (expired, wrong_aud, "not-a-jwt"):
        res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 401


def test_first_login_creates_profile(client, user_id):
    headers = auth_headers(user_id, email="neo@example.com",
                           metadata={"full_name": "Thomas Anderson", "phone": "5550001111"})
    res = client.get("/api/auth/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["user"]["id"] == user_id
    assert body["profile"]["email"] == "neo@example.com"
    assert body["profile"]["full_name"] == "Thomas Anderson"
    assert body["profile"]["phone"] == "5550001111"
    assert body["profile"]["role"] == "user"
    assert body["profile"]["created_at"] is not None
    assert body["is_admin"] is False

    # second call reads the stored row, not the token metadata
    headers = auth_headers(user_id, metadata={"full_name": "Someone Else"})
    assert client.get("/api/auth/me", headers=headers).json()["profile"]["full_name"] == "Thomas Anderson"


def test_profile_falls_back_to_metadata_when_insert_fails(client, monkeypatch, user_id):
    async def broken_insert(*args, **kwargs):
        raise SQLAlchemyError("insert refused")

    monkeypatch.setattr(profile_utils, "insert_profile", broken_insert)
    headers = auth_headers(user_id, metadata={"full_name": "Ghost", "role": "admin"})

    res = client.get("/api/auth/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["profile"]["full_name"] == "Ghost"
    assert body["profile"]["role"] == "admin"
    assert body["profile"]["created_at"] is None
    assert body["is_admin"] is False

    assert client.get("/api/admin/movies", headers=headers).status_code == 403


def test_admin_session_reports_admin(client, admin_headers):
    assert client.get("/api/auth/me", headers=admin_headers).json()["is_admin"] is True


def test_sign_up_creates_platform_user_and_profile(client, platform):
    calls, replies = platform
    new_id = str(uuid.uuid4())
    replies["sign_up"] = {
        "id": new_id,
        "email": "trinity@example.com",
        "identities": [{"id": new_id}],
        "user_metadata": {"full_name": "Trinity", "role": "user"},
    }
    res = client.post("/api/auth/sign-up", json={
        "email": " Trinity@Example.com ",
        "password": "secret1",
        "full_name": "Trinity",
        "phone": "5551234567",
    })
    assert res.status_code == 201
    assert res.json()["user"]["id"] == new_id

    name, args, _ = calls[0]
    assert name == "sign_up"
    assert args[0] == "trinity@example.com"
    assert args[2] == {"full_name": "Trinity", "phone": "5551234567", "role": "user"}

    me = client.get("/api/auth/me", headers=auth_headers(new_id)).json()
    assert me["profile"]["full_name"] == "Trinity"
    assert me["profile"]["phone"] == "5551234567"


def test_sign_up_for_existing_email_skips_profile(client, platform):
    _, replies = platform
    replies["sign_up"] = {"id": str(uuid.uuid4()), "email": "a@example.com", "identities": []}
    res = client.post("/api/auth/sign-up", json={
        "email": "a@example.com", "password": "secret1", "full_name": "Ann",
    })
    assert res.status_code == 201
    assert res.json()["user"] is None


@pytest.mark.parametrize("payload, message", [
    ({"email": "a@example.com", "password": "123", "full_name": "Ann"},
     "Password must be at least 6 characters"),
    ({"email": "a@example.com", "password": "secret1", "full_name": " "},
     "Full name is required"),
    ({"email": "a@example.com", "password": "secret1", "full_name": "Ann", "phone": "12-34"},
     "Please enter a valid 10-digit phone number"),
])
def test_sign_up_validation(client, platform, payload, message):
    calls, _ = platform
    res = client.post("/api/auth/sign-up", json=payload)
    assert res.status_code == 400
    assert res.json()["detail"] == message
    assert calls == []


def test_sign_up_passes_platform_errors_through(client, platform):
    _, replies = platform
    replies["sign_up"] = HTTPException(status_code=422, detail="Password should be stronger")
    res = client.post("/api/auth/sign-up", json={
        "email": "a@example.com", "password": "secret1", "full_name": "Ann",
    })
    assert res.status_code == 422
    assert res.json()["detail"] == "Password should be stronger"


def test_sign_in_returns_tokens(client, platform):
    _, replies = platform
    replies["sign_in"] = {
        "access_token": "access",
        "refresh_token": "refresh",
        "user": {"id": "abc", "email": "a@example.com", "user_metadata": {"full_name": "Ann"}},
    }
    res = client.post("/api/auth/sign-in", json={"email": "A@example.com", "password": "secret1"})
    assert res.status_code == 200
    assert res.json() == {
        "access_token": "access",
        "refresh_token": "refresh",
        "user": {"id": "abc", "email": "a@example.com", "user_metadata": {"full_name": "Ann"}},
    }


def test_sign_in_with_bad_credentials(client, platform):
    _, replies = platform
    replies["sign_in"] = HTTPException(status_code=400, detail="Invalid login credentials")
    res = client.post("/api/auth/sign-in", json={"email": "a@example.com", "password": "wrong!"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid login credentials"


def test_sign_out_forwards_token(client, platform, user_id):
    calls, _ = platform
    token = make_token(user_id)
    res = client.post("/api/auth/sign-out", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 204
    assert calls == [("sign_out", (token,), {})]


def test_update_profile(client, platform, user_id, user_headers):
    calls, replies = platform
    replies["update_user"] = {"id": user_id}
    res = client.put("/api/auth/profile", json={"phone": "5559876543"}, headers=user_headers)
    assert res.status_code == 200
    assert res.json()["phone"] == "5559876543"
    assert res.json()["full_name"] == "Regular User"
    assert calls[0][0] == "update_user"
    assert calls[0][1][1] == {"phone": "5559876543"}

    assert client.put("/api/auth/profile", json={}, headers=user_headers).status_code == 400


def test_reset_password_is_always_generic(client, platform):
    _, replies = platform
    replies["reset_password"] = HTTPException(status_code=404, detail="User not found")
    res = client.post("/api/auth/reset-password", json={"email": "nobody@example.com"})
    assert res.status_code == 200
    assert "If an account exists" in res.json()["message"]


def test_sign_up_rejects_one_letter_name(client, platform):
    calls, _ = platform
    res = client.post("/api/auth/sign-up", json={
        "email": "a@example.com", "password": "secret1", "full_name": " J ",
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "Full name must be at least 2 characters"
    assert calls == []


def test_sign_up_rejects_non_ascii_phone_digits(client, platform):
    calls, _ = platform
    res = client.post("/api/auth/sign-up", json={
        "email": "a@example.com", "password": "secret1", "full_name": "Ann",
        "phone": "١٢٣٤٥٦٧٨٩٠",
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "Please enter a valid 10-digit phone number"
    assert calls == []
