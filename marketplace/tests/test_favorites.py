from __future__ import annotations

from fastapi.testclient import TestClient

from marketplace.app import app
from marketplace.favorites.store import clear_favorites

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"username": "user", "password": "user123"})


def test_add_favorite():
    clear_favorites()
    _login_user(client)
    resp = client.post("/favorites/p1")
    assert resp.status_code == 200
    assert resp.json()["favorite"]["professional_id"] == "p1"


def test_add_favorite_is_idempotent():
    clear_favorites()
    _login_user(client)
    first = client.post("/favorites/p2").json()["favorite"]
    second = client.post("/favorites/p2").json()["favorite"]
    assert first == second
    assert len(client.get("/favorites").json()["favorites"]) == 1


def test_add_favorite_unknown_professional():
    _login_user(client)
    assert client.post("/favorites/nobody").status_code == 404
    assert client.post("/favorites/e1").status_code == 404


def test_list_favorites_in_insertion_order_with_rating():
    clear_favorites()
    _login_user(client)
    client.post("/favorites/p3")
    client.post("/favorites/p1")
    body = client.get("/favorites").json()
    professionals = [f["professional"] for f in body["favorites"]]
    assert [p["id"] for p in professionals] == ["p3", "p1"]
    assert professionals[1]["rating"] == 4.7
    assert professionals[1]["category"] == "Massage"
    assert professionals[0]["name"] == "diego"


def test_remove_favorite():
    clear_favorites()
    _login_user(client)
    client.post("/favorites/p1")
    resp = client.delete("/favorites/p1")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert client.get("/favorites").json()["favorites"] == []
    # removing twice is harmless
    assert client.delete("/favorites/p1").status_code == 200


def test_favorites_are_per_user():
    clear_favorites()
    _login_user(client)
    client.post("/favorites/p1")
    other = TestClient(app)
    other.post("/auth/login", json={"username": "admin", "password": "admin123"})
    assert other.get("/favorites").json()["favorites"] == []
