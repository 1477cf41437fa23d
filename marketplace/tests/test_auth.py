from __future__ import annotations

from fastapi.testclient import TestClient

from marketplace.app import app

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"username": "user", "password": "user123"})


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success_user():
    resp = client.post("/auth/login", json={"username": "user", "password": "user123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"]["username"] == "user"
    assert body["user"]["role"] == "client"
    assert body["user"]["subject_id"] is None


def test_login_success_professional():
    resp = client.post("/auth/login", json={"username": "valentina", "password": "valentina123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "professional"
    assert resp.json()["user"]["subject_id"] == "p1"


def test_login_success_admin():
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "admin"


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"username": "user", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"username": "nobody", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_when_logged_in():
    _login_user(client)
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["username"] == "user"


def test_auth_me_not_logged_in():
    c = TestClient(app)  # fresh client, no session
    resp = c.get("/auth/me")
    assert resp.status_code == 401


def test_logout():
    _login_user(client)
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    # Session should be cleared
    resp = client.get("/auth/me")
    assert resp.status_code == 401


# ── Route protection ─────────────────────────────────────────────────────


def test_favorites_require_login():
    c = TestClient(app)
    assert c.get("/favorites").status_code == 401
    assert c.post("/favorites/p1").status_code == 401
    assert c.delete("/favorites/p1").status_code == 401


def test_review_requires_login():
    c = TestClient(app)
    resp = c.post("/establishments/e1/reviews", json={"stars": 5})
    assert resp.status_code == 401


def test_subscriptions_require_login():
    c = TestClient(app)
    assert c.post("/subscriptions/p1").status_code == 401


def test_post_creation_requires_professional():
    c = TestClient(app)
    body = {"media": [{"url": "/uploads/x.jpg"}]}
    assert c.post("/posts/mine", json=body).status_code == 401
    _login_user(c)
    assert c.post("/posts/mine", json=body).status_code == 403


def test_analytics_requires_admin():
    _login_user(client)
    resp = client.get("/analytics")
    assert resp.status_code == 403


def test_analytics_allowed_for_admin():
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200


# ── Public endpoints stay public ─────────────────────────────────────────


def test_health_is_public():
    c = TestClient(app)
    assert c.get("/health").status_code == 200


def test_discovery_is_public():
    c = TestClient(app)
    assert c.get("/categories").status_code == 200
    assert c.get("/professionals").status_code == 200
    assert c.get("/establishments").status_code == 200
    assert c.get("/feed").status_code == 200
