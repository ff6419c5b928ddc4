import os
import tempfile
import time
import uuid
from pathlib import Path

import pytest

TEST_DB = Path(tempfile.gettempdir()) / f"movie_admin_test_{os.getpid()}.db"
JWT_SECRET = "test-jwt-secret-with-enough-length-123456"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB}"
os.environ["DB_SCHEMA"] = ""
os.environ["SUPABASE_JWT_SECRET"] = JWT_SECRET
os.environ["SUPABASE_URL"] = "http://auth.test"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["ENABLE_DEBUG_ROUTES"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

from app.main import app  # noqa: E402


def make_token(user_id, email=None, metadata=None, **claims):
    payload = {
        "sub": user_id,
        "email": email or f"{user_id[:8]}@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "user_metadata": metadata or {},
    }
    payload.update(claims)
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


def auth_headers(user_id, **kwargs):
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


@pytest.fixture()
def client():
    if TEST_DB.exists():
        TEST_DB.unlink()
    with TestClient(app) as c:
        yield c
    if TEST_DB.exists():
        TEST_DB.unlink()


@pytest.fixture()
def user_id():
    return str(uuid.uuid4())


@pytest.fixture()
def user_headers(client, user_id):
    headers = auth_headers(user_id, metadata={"full_name": "Regular User"})
    assert client.get("/api/auth/me", headers=headers).status_code == 200
    return headers


@pytest.fixture()
def admin_headers(client):
    admin_id = str(uuid.uuid4())
    headers = auth_headers(admin_id, metadata={"full_name": "Admin User"})
    assert client.get("/api/auth/me", headers=headers).status_code == 200
    res = client.post("/api/debug/make-admin", json={"userId": admin_id})
    assert res.status_code == 200
    return headers


@pytest.fixture()
def create_movie(client, admin_headers):
    def _create(**fields):
        payload = {"title": "Inception", "duration": 148, "rating": 4.5}
        payload.update(fields)
        res = client.post("/api/admin/movies", json=payload, headers=admin_headers)
        assert res.status_code == 201, res.text
        return res.json()["movie"]
    return _create
