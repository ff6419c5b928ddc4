from app import config


def test_make_admin_requires_user_id(client):
    res = client.post("/api/debug/make-admin", json={})
    assert res.status_code == 400
    assert res.json()["detail"] == "User ID required"


def test_make_admin_unknown_user(client):
    res = client.post("/api/debug/make-admin", json={"userId": "missing"})
    assert res.status_code == 404


def test_make_admin_promotes(client, user_id, user_headers):
    res = client.post("/api/debug/make-admin", json={"userId": user_id})
    assert res.json() == {"success": True, "message": "User is now admin"}
    assert client.get("/api/auth/me", headers=user_headers).json()["is_admin"] is True


def test_make_admin_hidden_when_disabled(client, monkeypatch, user_id, user_headers):
    monkeypatch.setattr(config, "ENABLE_DEBUG_ROUTES", False)
    res = client.post("/api/debug/make-admin", json={"userId": user_id})
    assert res.status_code == 404
    assert client.get("/api/auth/me", headers=user_headers).json()["is_admin"] is False


def test_make_admin_without_body_is_404_when_disabled(client, monkeypatch):
    monkeypatch.setattr(config, "ENABLE_DEBUG_ROUTES", False)
    res = client.post("/api/debug/make-admin")
    assert res.status_code == 404
    assert res.json()["detail"] == "Not Found"
